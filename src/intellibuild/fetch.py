from pathlib import Path

from sanic.log import logger

from intellibuild import process
from intellibuild.config import Config


async def clone_repository(repo_url: str, directory: Path, config: Config):
    """Clone the given Git repository URL into the specified directory."""
    logger.debug("Cloning %s into %s", repo_url, directory)
    await process.run_command(
        ["git", "clone", repo_url, str(directory)],
        timeout=config.COMMAND_TIMEOUT,
    )
