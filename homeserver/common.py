from __future__ import annotations

import logging
import signal
import subprocess
from pathlib import Path
from typing import Dict, Optional, Sequence

import typer
from dotenv import dotenv_values

ROOT_DIR = Path(__file__).resolve().parent.parent
SERVICES_DIRNAME = "services"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_LEVEL_COLOURS = {
    logging.DEBUG: typer.colors.BRIGHT_BLACK,
    logging.INFO: typer.colors.CYAN,
    SUCCESS: typer.colors.GREEN,
    logging.WARNING: typer.colors.YELLOW,
    logging.ERROR: typer.colors.RED,
    logging.CRITICAL: typer.colors.RED,
}

_logger_configured = False


class _EchoHandler(logging.Handler):
    """Write records to stderr, coloured by level."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            colour = _LEVEL_COLOURS.get(record.levelno)
            typer.echo(typer.style(message, fg=colour), err=True)
        except Exception:  # noqa: BLE001
            self.handleError(record)


def configure_logging(verbose: bool = False) -> None:
    global _logger_configured
    if _logger_configured:
        return
    logger = logging.getLogger("homeserver")
    handler = _EchoHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    _logger_configured = True


def get_logger(name: str | None = None) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name or "homeserver")


def log_success(log: logging.Logger, message: str, *args: object) -> None:
    log.log(SUCCESS, message, *args)


def run(
    args: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    get_logger(__name__).debug("running %s", " ".join(args))
    return subprocess.run(
        list(args),
        cwd=cwd or ROOT_DIR,
        check=check,
        text=True,
    )


def capture(
    args: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    check: bool = True,
    input: Optional[str] = None,
    quiet: bool = False,
) -> subprocess.CompletedProcess[str]:
    """Run a command with stdout captured.

    ``quiet`` discards stderr, the equivalent of ``2>/dev/null``; otherwise it
    stays attached to the terminal so interactive tools can draw on it.
    """

    get_logger(__name__).debug("capturing %s", " ".join(args))
    return subprocess.run(
        list(args),
        cwd=cwd or ROOT_DIR,
        check=check,
        text=True,
        input=input,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL if quiet else None,
    )


def load_env(root_dir: Path = ROOT_DIR) -> Dict[str, str]:
    env_path = root_dir / ".env"
    if not env_path.exists():
        return {}
    return {
        key: value
        for key, value in dotenv_values(env_path).items()
        if value is not None
    }


def install_signal_handlers(signals: Sequence[int] = (signal.SIGINT, signal.SIGTERM)) -> None:
    """Exit with 128 + signum on the first interrupt, restoring default handlers."""

    def _cleanup(signum: int, _frame: object) -> None:
        for sig in signals:
            signal.signal(sig, signal.SIG_DFL)
        raise SystemExit(128 + signum)

    for sig in signals:
        signal.signal(sig, _cleanup)


__all__ = [
    "ROOT_DIR",
    "SERVICES_DIRNAME",
    "SUCCESS",
    "configure_logging",
    "get_logger",
    "log_success",
    "run",
    "capture",
    "load_env",
    "install_signal_handlers",
]
