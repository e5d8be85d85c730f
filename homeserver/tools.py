"""Thin wrappers around the external programs the server delegates to.

Every child process goes through ``common.run`` or ``common.capture`` so
commands can be exercised against fakes with the same method names.
"""

from __future__ import annotations

import re
import shlex
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional

from . import common

DATABASE_START = "# File"
DATABASE_END = "# Finished Make data base"
FZF_NO_MATCH = 1
FZF_INTERRUPTED = 130

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


def parse_database(dump: str) -> List[str]:
    """Extract target names from ``make -pRrq`` output.

    Only the files section of the database is considered. Names that do not
    start with an alphanumeric character (``.PHONY``, ``%.o``, comments) are
    special or internal targets and are skipped.
    """

    targets: set[str] = set()
    in_files = False
    for paragraph in _PARAGRAPH_BREAK.split(dump.strip("\n")):
        if not in_files:
            if not paragraph.startswith(DATABASE_START):
                continue
            in_files = True
        if paragraph.startswith(DATABASE_END):
            in_files = False
            continue
        name = paragraph.split(":", 1)[0]
        if name and name[0].isalnum():
            targets.add(name)
    return sorted(targets)


class Make:
    def __init__(self, services_dir: Path, executable: str = "make") -> None:
        self.services_dir = services_dir
        self.executable = executable

    def directory(self, service: str) -> Path:
        return self.services_dir / service

    def _args(self, service: str, *goals: str, silent: bool = True) -> List[str]:
        args = [self.executable]
        if silent:
            args.append("-s")
        args.extend(["-C", str(self.directory(service)), *goals])
        return args

    def run(self, service: str, target: str, *, silent: bool = True) -> subprocess.CompletedProcess[str]:
        return common.run(self._args(service, target, silent=silent))

    def output(self, service: str, target: str) -> subprocess.CompletedProcess[str]:
        return common.capture(self._args(service, target), check=False)

    def targets(self, service: str) -> List[str]:
        args = [self.executable, "-pRrq", "-C", str(self.directory(service)), ":"]
        result = common.capture(args, check=False, quiet=True)
        return parse_database(result.stdout or "")

    def help_preview(self) -> str:
        """fzf preview command showing ``make help`` for the highlighted row's service."""

        directory = shlex.quote(str(self.services_dir))
        return f"{shlex.quote(self.executable)} -s -C {directory}/{{1}} help"


class Docker:
    def __init__(self, executable: str = "docker") -> None:
        self.executable = executable

    def create_network(self, name: str) -> None:
        common.run((self.executable, "network", "create", name))

    def remove_network(self, name: str) -> None:
        common.run((self.executable, "network", "rm", name))


class Fzf:
    def __init__(self, executable: str = "fzf", height: str = "50%") -> None:
        self.executable = executable
        self.height = height

    def select(self, rows: Iterable[str], *, preview: str) -> Optional[str]:
        """Return the chosen row, or ``None`` when nothing was picked."""

        args = (self.executable, "--height", self.height, "--preview", preview)
        result = common.capture(args, check=False, input="\n".join(rows) + "\n")
        if result.returncode in (FZF_NO_MATCH, FZF_INTERRUPTED):
            return None
        if result.returncode != 0:
            raise subprocess.CalledProcessError(result.returncode, args)
        choice = (result.stdout or "").strip()
        return choice or None


__all__ = ["Docker", "Fzf", "Make", "parse_database"]
