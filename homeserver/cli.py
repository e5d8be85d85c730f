from __future__ import annotations

import typer

from . import common, environment, install, restart, services, start, status, stop, uninstall

app = typer.Typer(
    help="Manage a home server based on Docker, Docker Compose, Make and fzf.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
app.add_typer(install.app, name="install")
app.add_typer(uninstall.app, name="uninstall")
app.add_typer(start.app, name="start")
app.add_typer(stop.app, name="stop")
app.add_typer(restart.app, name="restart")
app.add_typer(status.app, name="status")
app.add_typer(services.app, name="services")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    common.configure_logging()
    log = common.get_logger(__name__)
    if ctx.invoked_subcommand is None:
        log.error("Missing script command")
        raise typer.Exit(code=1)
    if ctx.obj is None:
        try:
            ctx.obj = environment.load(common.ROOT_DIR)
        except RuntimeError as exc:
            log.error("%s", exc)
            raise typer.Exit(code=1) from exc


__all__ = ["app"]
