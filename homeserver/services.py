from __future__ import annotations

import subprocess

import typer

from . import common, picker

app = typer.Typer(help="Open an fzf menu to manage the services separately.")


@app.callback(invoke_without_command=True)
def services_command(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is not None:
        return
    log = common.get_logger(__name__)
    try:
        selection = picker.choose(ctx.obj)
    except subprocess.CalledProcessError as exc:
        log.error("fzf exited with status %s", exc.returncode)
        raise typer.Exit(code=exc.returncode)
    except ValueError as exc:
        log.error("%s", exc)
        raise typer.Exit(code=1) from exc

    if selection is None:
        log.info("No target selected")
        raise typer.Exit(code=0)

    try:
        picker.execute(ctx.obj, selection)
    except subprocess.CalledProcessError as exc:
        log.error("make %s failed for service '%s'", selection.target, selection.service)
        raise typer.Exit(code=exc.returncode)


__all__ = ["app"]
