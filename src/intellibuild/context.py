import asyncio
import contextlib
import shutil
import uuid
from pathlib import Path
from typing import AsyncIterator

from pydantic import BaseModel, ConfigDict
from sanic.log import logger

from intellibuild.config import Config


class BuildContext(BaseModel):
    """Everything a single pipeline run needs to know about its build."""

    model_config = ConfigDict(frozen=True)

    build_id: str
    repo_url: str
    directory: Path
    image_tag: str

    @classmethod
    def create(cls, repo_url: str, config: Config) -> "BuildContext":
        build_id = uuid.uuid4().hex
        return cls(
            build_id=build_id,
            repo_url=repo_url,
            directory=config.WORKSPACE_ROOT / f"repo-{build_id}",
            image_tag=f"{config.IMAGE_NAME}:{build_id[:12]}",
        )


@contextlib.asynccontextmanager
async def workspace(repo_url: str, config: Config) -> AsyncIterator[BuildContext]:
    """
    Provide a fresh build context whose working directory is removed on exit.

    The directory itself is left for ``git clone`` to create, only its parent
    is guaranteed to exist.
    """
    context = BuildContext.create(repo_url, config)
    config.WORKSPACE_ROOT.mkdir(parents=True, exist_ok=True)
    logger.debug("Build %s uses %s", context.build_id, context.directory)
    try:
        yield context
    finally:
        if config.KEEP_WORKSPACE:
            logger.debug("Keeping workspace %s", context.directory)
        elif context.directory.exists():
            logger.debug("Removing workspace %s", context.directory)
            await asyncio.to_thread(
                shutil.rmtree, context.directory, ignore_errors=True
            )
