from enum import StrEnum
from pathlib import Path
from typing import NamedTuple

from sanic.log import logger


class ProjectKind(StrEnum):
    GO = "go"
    MAKE = "make"
    PYTHON = "python"
    NODE = "node"
    UNKNOWN = "unknown"


class Toolchain(NamedTuple):
    kind: ProjectKind
    marker: str
    build: tuple[str, ...]
    test: tuple[str, ...]


# Checked in order, the first marker present wins
TOOLCHAINS: tuple[Toolchain, ...] = (
    Toolchain(
        ProjectKind.GO,
        "go.mod",
        build=("go", "build", "./..."),
        test=("go", "test", "./..."),
    ),
    Toolchain(
        ProjectKind.MAKE,
        "Makefile",
        build=("make",),
        test=("make", "test"),
    ),
    Toolchain(
        ProjectKind.PYTHON,
        "requirements.txt",
        build=("python", "-m", "pip", "install", "-r", "requirements.txt"),
        test=("pytest",),
    ),
    Toolchain(
        ProjectKind.PYTHON,
        "setup.py",
        build=("python", "setup.py", "install"),
        test=("pytest",),
    ),
    Toolchain(
        ProjectKind.NODE,
        "package.json",
        build=("npm", "install"),
        test=("npm", "test"),
    ),
)


def detect_toolchain(directory: Path) -> Toolchain | None:
    """
    Detect which toolchain applies to a checked out project.

    Args:
        directory: Root of the checkout

    Returns:
        The first toolchain whose marker file exists, or None
    """
    for toolchain in TOOLCHAINS:
        if (directory / toolchain.marker).exists():
            logger.debug(
                "Found %s in %s, project kind is %s",
                toolchain.marker,
                directory,
                toolchain.kind,
            )
            return toolchain
    logger.debug("No build system marker found in %s", directory)
    return None
