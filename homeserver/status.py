from __future__ import annotations

import typer

from . import runner

app = typer.Typer(help="Get the status of all services.")


@app.callback(invoke_without_command=True)
def status_command(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is not None:
        return
    # A DOWN service is reported, never fatal.
    runner.status(ctx.obj)


__all__ = ["app"]
