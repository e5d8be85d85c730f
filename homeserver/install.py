from __future__ import annotations

import subprocess

import typer

from . import common, runner
from .requirements import RequirementError

app = typer.Typer(help="Install all services.")


@app.callback(invoke_without_command=True)
def install_command(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is not None:
        return
    log = common.get_logger(__name__)
    log.info("Installing services")
    try:
        runner.install(ctx.obj)
    except RequirementError as exc:
        log.error("%s", exc)
        raise typer.Exit(code=1) from exc
    except subprocess.CalledProcessError as exc:
        raise typer.Exit(code=exc.returncode)


__all__ = ["app"]
