from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from . import common
from .environment import ServerContext

ENABLE_TARGET = "enable"


@dataclass(frozen=True)
class Selection:
    service: str
    target: str


def candidate_rows(ctx: ServerContext) -> List[str]:
    rows: List[str] = []
    for service in ctx.services:
        if not service.enabled:
            rows.append(f"{service.name} {ENABLE_TARGET}")
            continue
        rows.extend(f"{service.name} {target}" for target in ctx.make.targets(service.name))
    return [row for row in rows if row.strip()]


def parse_selection(row: str) -> Selection:
    parts = row.split()
    if len(parts) != 2:
        raise ValueError(f"Expected '<service> <target>', got {row!r}")
    return Selection(service=parts[0], target=parts[1])


def choose(ctx: ServerContext) -> Optional[Selection]:
    log = common.get_logger(__name__)
    rows = candidate_rows(ctx)
    if not rows:
        log.warning("No service targets available")
        return None
    row = ctx.fzf.select(rows, preview=ctx.make.help_preview())
    if row is None:
        return None
    return parse_selection(row)


def execute(ctx: ServerContext, selection: Selection) -> None:
    common.get_logger(__name__).info(
        "Executing 'make %s' for service '%s'", selection.target, selection.service
    )
    ctx.make.run(selection.service, selection.target)


__all__ = ["ENABLE_TARGET", "Selection", "candidate_rows", "choose", "execute", "parse_selection"]
