#!/usr/bin/env python3
from __future__ import annotations

from homeserver import common
from homeserver.cli import app


if __name__ == "__main__":
    common.install_signal_handlers()
    app()
