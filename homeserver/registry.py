from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from . import common

DISABLED_MARKER = ".disabled"


@dataclass(frozen=True)
class Service:
    name: str
    path: Path

    @property
    def disabled_marker(self) -> Path:
        return self.path / DISABLED_MARKER

    @property
    def enabled(self) -> bool:
        return not self.disabled_marker.exists()


def discover(services_dir: Path) -> List[Service]:
    """List every service directory, in the order ``ls`` would print them."""

    if not services_dir.is_dir():
        common.get_logger(__name__).warning("Services directory %s does not exist", services_dir)
        return []

    return [
        Service(name=entry.name, path=entry)
        for entry in sorted(services_dir.iterdir(), key=lambda path: path.name)
        if entry.is_dir() and not entry.name.startswith(".")
    ]


__all__ = ["DISABLED_MARKER", "Service", "discover"]
