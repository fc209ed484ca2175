from enum import StrEnum
from typing import Awaitable, Callable

from sanic.log import logger

from intellibuild import build, fetch, image, metrics
from intellibuild.config import Config
from intellibuild.context import BuildContext
from intellibuild.exceptions import PipelineError


class Stage(StrEnum):
    CLONE = "clone"
    BUILD = "build"
    TEST = "test"
    IMAGE_BUILD = "docker build"
    SCAN = "scan"


STAGE_MESSAGES = {
    Stage.CLONE: "Error cloning repository",
    Stage.BUILD: "Build failed",
    Stage.TEST: "Tests failed",
    Stage.IMAGE_BUILD: "Docker build failed",
    Stage.SCAN: "Trivy scan failed",
}


class StageFailedError(PipelineError):
    """Raised when a pipeline stage fails, wrapping the underlying error."""

    def __init__(self, stage: Stage, error: Exception):
        super().__init__(f"{STAGE_MESSAGES[stage]}: {error}")
        self.stage = stage
        self.error = error


def _stages(
    context: BuildContext, config: Config
) -> list[tuple[Stage, Callable[[], Awaitable[None]]]]:
    # Looked up on the modules at call time so tests can replace single stages
    return [
        (
            Stage.CLONE,
            lambda: fetch.clone_repository(context.repo_url, context.directory, config),
        ),
        (Stage.BUILD, lambda: build.build_project(context.directory, config)),
        (Stage.TEST, lambda: build.run_tests(context.directory, config)),
        (
            Stage.IMAGE_BUILD,
            lambda: image.build_image(context.directory, context.image_tag, config),
        ),
        (Stage.SCAN, lambda: image.scan_image(context.image_tag, config)),
    ]


async def run_pipeline(context: BuildContext, config: Config):
    """
    Run all stages for a build in order, stopping at the first failure.

    Raises:
        StageFailedError: A stage failed, the underlying error is chained
    """
    logger.info("Starting pipeline %s for %s", context.build_id, context.repo_url)

    image_built = False
    try:
        with metrics.track_pipeline():
            for stage, run_stage in _stages(context, config):
                logger.info("[%s] stage %s", context.build_id, stage)
                try:
                    with metrics.track_stage(stage):
                        await run_stage()
                except PipelineError as e:
                    logger.error("[%s] stage %s failed: %s", context.build_id, stage, e)
                    metrics.pipeline_runs_total.labels("failure", stage).inc()
                    raise StageFailedError(stage, e) from e
                if stage == Stage.IMAGE_BUILD:
                    image_built = True
    finally:
        if image_built and not config.KEEP_IMAGE:
            await image.remove_image(context.image_tag, config)

    metrics.pipeline_runs_total.labels("success", "none").inc()
    logger.info("Pipeline %s finished successfully", context.build_id)
