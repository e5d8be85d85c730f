from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from . import common, registry, requirements
from .tools import Docker, Fzf, Make

DEFAULT_NETWORK = "traefik-network"

_DOTTED_VERSION = re.compile(r"^\d+(\.\d+)*$")


@dataclass(frozen=True)
class ServerConfig:
    root_dir: Path
    services_dir: Path
    network: str = DEFAULT_NETWORK
    requirements: Tuple[requirements.Requirement, ...] = ()


@dataclass
class ServerContext:
    config: ServerConfig
    services: List[registry.Service]
    make: Make
    docker: Docker = field(default_factory=Docker)
    fzf: Fzf = field(default_factory=Fzf)


def _minimum(env: dict, key: str, default: str) -> str:
    value = env.get(key, default).strip()
    if not _DOTTED_VERSION.match(value):
        raise RuntimeError(f"{key} must be a dotted version such as {default}, got {value!r}")
    return value


def load_config(root_dir: Path) -> ServerConfig:
    env = common.load_env(root_dir)
    return ServerConfig(
        root_dir=root_dir,
        services_dir=root_dir / common.SERVICES_DIRNAME,
        network=env.get("DOCKER_NETWORK", DEFAULT_NETWORK),
        requirements=requirements.default_requirements(
            docker=_minimum(
                env, "MINIMUM_DOCKER_VERSION", requirements.DEFAULT_MINIMUM_DOCKER_VERSION
            ),
            docker_compose=_minimum(
                env,
                "MINIMUM_DOCKER_COMPOSE_VERSION",
                requirements.DEFAULT_MINIMUM_DOCKER_COMPOSE_VERSION,
            ),
            make=_minimum(env, "MINIMUM_MAKE_VERSION", requirements.DEFAULT_MINIMUM_MAKE_VERSION),
        ),
    )


def load(root_dir: Path = common.ROOT_DIR, *, config: Optional[ServerConfig] = None) -> ServerContext:
    config = config or load_config(root_dir)
    services = registry.discover(config.services_dir)
    common.get_logger(__name__).debug(
        "Discovered %d services in %s", len(services), config.services_dir
    )
    return ServerContext(
        config=config,
        services=services,
        make=Make(config.services_dir),
    )


__all__ = ["DEFAULT_NETWORK", "ServerConfig", "ServerContext", "load", "load_config"]
