from pathlib import Path

from sanic.log import logger

from intellibuild import process
from intellibuild.config import Config
from intellibuild.exceptions import (
    CommandError,
    DescriptorNotFoundError,
    ImageBuildError,
)

DESCRIPTOR = "Dockerfile"


async def build_image(directory: Path, image_tag: str, config: Config):
    """Build a Docker image tagged ``image_tag`` from the provided directory."""
    if not (directory / DESCRIPTOR).exists():
        raise DescriptorNotFoundError(f"{DESCRIPTOR} not found")

    logger.info("Building image %s", image_tag)
    try:
        await process.run_command(
            ["docker", "build", "-t", image_tag, str(directory)],
            timeout=config.COMMAND_TIMEOUT,
        )
    except CommandError as e:
        raise ImageBuildError(f"failed to build Docker image: {e}") from e


async def scan_image(image_tag: str, config: Config):
    """Run a Trivy vulnerability scan on the given Docker image."""
    args = ["trivy", "image", "--no-progress"]
    if config.SCAN_SEVERITY:
        args += ["--severity", ",".join(config.SCAN_SEVERITY)]
    if config.SCAN_FAIL_ON_VULNERABILITIES:
        args += ["--exit-code", "1"]
    args.append(image_tag)

    logger.info("Scanning image %s", image_tag)
    await process.run_command(args, timeout=config.COMMAND_TIMEOUT)


async def remove_image(image_tag: str, config: Config):
    """Remove a built image, logging instead of raising when docker refuses."""
    logger.debug("Removing image %s", image_tag)
    try:
        await process.run_command(
            ["docker", "image", "rm", "--force", image_tag],
            timeout=config.COMMAND_TIMEOUT,
        )
    except CommandError as e:
        logger.warning("Could not remove image %s: %s", image_tag, e)
