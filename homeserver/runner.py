from __future__ import annotations

import subprocess
from typing import Dict, Iterable, Optional

from . import common, requirements
from .environment import ServerContext
from .registry import Service

HEALTHY = "UP"


def run_target(
    ctx: ServerContext,
    target: str,
    *,
    silent: bool = True,
    services: Optional[Iterable[Service]] = None,
) -> None:
    """Run ``target`` for each service in order, stopping at the first failure."""

    log = common.get_logger(__name__)
    for service in ctx.services if services is None else services:
        log.debug("make %s for %s", target, service.name)
        try:
            ctx.make.run(service.name, target, silent=silent)
        except subprocess.CalledProcessError:
            log.error("make %s failed for service '%s'", target, service.name)
            raise


def install(ctx: ServerContext) -> None:
    requirements.check_requirements(ctx.config.requirements)
    ctx.docker.create_network(ctx.config.network)
    run_target(ctx, "install")


def uninstall(ctx: ServerContext) -> None:
    run_target(ctx, "uninstall")
    ctx.docker.remove_network(ctx.config.network)


def is_healthy(output: Optional[str]) -> bool:
    return (output or "").rstrip("\n") == HEALTHY


def status(ctx: ServerContext) -> Dict[str, bool]:
    log = common.get_logger(__name__)
    report: Dict[str, bool] = {}
    for service in ctx.services:
        result = ctx.make.output(service.name, "health")
        healthy = result.returncode == 0 and is_healthy(result.stdout)
        if healthy:
            common.log_success(log, "%s is UP", service.name)
        else:
            log.error("%s is DOWN", service.name)
        report[service.name] = healthy
    return report


__all__ = ["HEALTHY", "install", "is_healthy", "run_target", "status", "uninstall"]
