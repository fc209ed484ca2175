from pathlib import Path

from sanic.log import logger

from intellibuild import metrics, process
from intellibuild.config import Config
from intellibuild.exceptions import NoTestCommandError, UnsupportedBuildSystemError
from intellibuild.project import ProjectKind, detect_toolchain


async def build_project(directory: Path, config: Config):
    """Build the project with the toolchain matching its marker files."""
    toolchain = detect_toolchain(directory)
    if toolchain is None:
        metrics.projects_detected_total.labels(ProjectKind.UNKNOWN).inc()
        raise UnsupportedBuildSystemError("unsupported language or build system")

    metrics.projects_detected_total.labels(toolchain.kind).inc()
    logger.info("Building %s project (%s)", toolchain.kind, toolchain.marker)
    await process.run_command(
        toolchain.build, cwd=directory, timeout=config.COMMAND_TIMEOUT
    )


async def run_tests(directory: Path, config: Config):
    """Run the test command of the toolchain matching the project's marker files."""
    toolchain = detect_toolchain(directory)
    if toolchain is None:
        raise NoTestCommandError("no test command available for this project")

    logger.info("Testing %s project (%s)", toolchain.kind, toolchain.marker)
    await process.run_command(
        toolchain.test, cwd=directory, timeout=config.COMMAND_TIMEOUT
    )
