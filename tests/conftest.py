"""Shared fixtures: a temporary services tree and fake collaborators."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pytest

from homeserver import registry, requirements
from homeserver.environment import ServerConfig, ServerContext


class FakeMake:
    """Records every make invocation instead of spawning a process."""

    def __init__(self, events: List[Tuple[str, ...]]) -> None:
        self.events = events
        self.targets_by_service: Dict[str, List[str]] = {}
        self.health: Dict[str, str] = {}
        self.health_returncodes: Dict[str, int] = {}
        self.failures: Dict[Tuple[str, str], int] = {}
        self.silent: List[bool] = []
        self.listed: List[str] = []

    def run(self, service: str, target: str, *, silent: bool = True) -> subprocess.CompletedProcess[str]:
        self.events.append(("make", service, target))
        self.silent.append(silent)
        code = self.failures.get((service, target))
        if code is not None:
            raise subprocess.CalledProcessError(code, ["make", "-C", service, target])
        return subprocess.CompletedProcess(["make", "-C", service, target], 0)

    def output(self, service: str, target: str) -> subprocess.CompletedProcess[str]:
        self.events.append(("make", service, target))
        return subprocess.CompletedProcess(
            ["make", "-s", "-C", service, target],
            self.health_returncodes.get(service, 0),
            stdout=self.health.get(service, ""),
        )

    def targets(self, service: str) -> List[str]:
        self.listed.append(service)
        return list(self.targets_by_service.get(service, []))

    def help_preview(self) -> str:
        return "make -s -C services/{1} help"


class FakeDocker:
    def __init__(self, events: List[Tuple[str, ...]]) -> None:
        self.events = events

    def create_network(self, name: str) -> None:
        self.events.append(("docker", "network", "create", name))

    def remove_network(self, name: str) -> None:
        self.events.append(("docker", "network", "rm", name))


class FakeFzf:
    def __init__(self, choice: Optional[str] = None) -> None:
        self.choice = choice
        self.rows: Optional[List[str]] = None
        self.preview: Optional[str] = None

    def select(self, rows: Iterable[str], *, preview: str) -> Optional[str]:
        self.rows = list(rows)
        self.preview = preview
        return self.choice


@pytest.fixture
def events() -> List[Tuple[str, ...]]:
    return []


@pytest.fixture
def services_dir(tmp_path: Path) -> Path:
    path = tmp_path / "services"
    path.mkdir()
    return path


@pytest.fixture
def make_context(tmp_path: Path, services_dir: Path, events):
    """Build a ServerContext over ``services/<name>`` directories created on demand."""

    def _build(
        names: Iterable[str] = (),
        *,
        disabled: Iterable[str] = (),
        requirement_set: Tuple[requirements.Requirement, ...] = (),
    ) -> ServerContext:
        for name in names:
            (services_dir / name).mkdir(exist_ok=True)
        for name in disabled:
            (services_dir / name / registry.DISABLED_MARKER).touch()
        config = ServerConfig(
            root_dir=tmp_path,
            services_dir=services_dir,
            requirements=requirement_set,
        )
        return ServerContext(
            config=config,
            services=registry.discover(services_dir),
            make=FakeMake(events),
            docker=FakeDocker(events),
            fzf=FakeFzf(),
        )

    return _build
