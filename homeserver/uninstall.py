from __future__ import annotations

import subprocess

import typer

from . import common, runner

app = typer.Typer(help="Uninstall all services.")


@app.callback(invoke_without_command=True)
def uninstall_command(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is not None:
        return
    log = common.get_logger(__name__)
    log.info("Uninstalling services")
    try:
        runner.uninstall(ctx.obj)
    except subprocess.CalledProcessError as exc:
        log.error("Uninstall failed: %s", " ".join(map(str, exc.cmd)))
        raise typer.Exit(code=exc.returncode)


__all__ = ["app"]
