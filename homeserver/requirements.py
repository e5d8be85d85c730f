from __future__ import annotations

import re
import shutil
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from . import common

DEFAULT_MINIMUM_DOCKER_VERSION = "19.03"
DEFAULT_MINIMUM_DOCKER_COMPOSE_VERSION = "1.25"
DEFAULT_MINIMUM_MAKE_VERSION = "4.2"

_MAJOR_MINOR = re.compile(r"^v?(\d+)\.(\d+)")


class RequirementError(RuntimeError):
    """Raised when a required host tool is missing or too old."""


def _major_minor(token: str, banner: str) -> str:
    match = _MAJOR_MINOR.match(token.strip())
    if match is None:
        raise RequirementError(f"Unable to parse a version from {banner.strip()!r}")
    return f"{match.group(1)}.{match.group(2)}"


def _word(banner: str, position: int) -> str:
    words = banner.strip().splitlines()[0].split(" ") if banner.strip() else []
    if len(words) <= position:
        raise RequirementError(f"Unable to parse a version from {banner.strip()!r}")
    return words[position]


def docker_version(banner: str) -> str:
    # Docker version 24.0.7, build afdd53b
    return _major_minor(_word(banner, 2), banner)


def compose_version(banner: str) -> str:
    # docker-compose version 1.29.2, build 5becea4c
    # Docker Compose version v2.21.0
    words = banner.strip().splitlines()[0].split() if banner.strip() else []
    for index, word in enumerate(words[:-1]):
        if word.lower() == "version":
            return _major_minor(words[index + 1], banner)
    raise RequirementError(f"Unable to parse a version from {banner.strip()!r}")


def make_version(banner: str) -> str:
    # GNU Make 4.3
    return _major_minor(_word(banner, 2), banner)


def version_tuple(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


@dataclass(frozen=True)
class Requirement:
    executable: str
    label: str
    minimum: str
    parse: Callable[[str], str]

    def check(self, detected: str) -> None:
        if version_tuple(detected) < version_tuple(self.minimum):
            raise RequirementError(
                f"{self.label} {self.minimum} or newer is required (found {detected})"
            )


def default_requirements(
    *,
    docker: str = DEFAULT_MINIMUM_DOCKER_VERSION,
    docker_compose: str = DEFAULT_MINIMUM_DOCKER_COMPOSE_VERSION,
    make: str = DEFAULT_MINIMUM_MAKE_VERSION,
) -> Tuple[Requirement, ...]:
    return (
        Requirement("docker", "Docker", docker, docker_version),
        Requirement("docker-compose", "Docker Compose", docker_compose, compose_version),
        Requirement("make", "Make", make, make_version),
    )


def _version_banner(path: str) -> str:
    return common.capture((path, "--version")).stdout


def check_requirements(
    requirements: Iterable[Requirement],
    *,
    which: Optional[Callable[[str], Optional[str]]] = None,
    banner: Optional[Callable[[str], str]] = None,
) -> None:
    log = common.get_logger(__name__)
    which = which or shutil.which
    banner = banner or _version_banner
    for requirement in requirements:
        path = which(requirement.executable)
        if path is None:
            raise RequirementError(
                f"Required executable '{requirement.executable}' not found in PATH"
            )
        detected = requirement.parse(banner(path))
        log.debug("%s %s found at %s", requirement.label, detected, path)
        requirement.check(detected)


__all__ = [
    "DEFAULT_MINIMUM_DOCKER_VERSION",
    "DEFAULT_MINIMUM_DOCKER_COMPOSE_VERSION",
    "DEFAULT_MINIMUM_MAKE_VERSION",
    "Requirement",
    "RequirementError",
    "check_requirements",
    "compose_version",
    "default_requirements",
    "docker_version",
    "make_version",
    "version_tuple",
]
