from __future__ import annotations

import subprocess

import typer

from . import common, runner

app = typer.Typer(help="Restart all services.")


@app.callback(invoke_without_command=True)
def restart_command(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is not None:
        return
    log = common.get_logger(__name__)
    log.info("Restarting services")
    try:
        runner.run_target(ctx.obj, "restart", silent=False)
    except subprocess.CalledProcessError as exc:
        raise typer.Exit(code=exc.returncode)


__all__ = ["app"]
