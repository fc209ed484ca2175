import shutil

from aiolimiter import AsyncLimiter
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sanic import Request, Sanic, response
from sanic.log import logger

from intellibuild import metrics
from intellibuild.config import Config
from intellibuild.context import workspace
from intellibuild.exceptions import RepositoryURLNotFoundError
from intellibuild.models import parse_repo_url
from intellibuild.pipeline import StageFailedError, run_pipeline

REQUIRED_TOOLS = ("git", "docker", "trivy")


def _reply(text: str, status: int = 200):
    metrics.webhooks_received_total.labels(str(status)).inc()
    return response.text(text, status=status)


async def handle_webhook(request: Request, *, config: Config):
    try:
        repo_url = parse_repo_url(request.body)
    except RepositoryURLNotFoundError as e:
        logger.warning("Rejecting webhook: %s", e)
        return _reply(str(e), status=400)

    logger.info("Webhook received for %s", repo_url)

    async with workspace(repo_url, config) as context:
        try:
            await run_pipeline(context, config)
        except StageFailedError as e:
            return _reply(str(e), status=500)

    return _reply("CI/CD pipeline executed successfully")


def create_app(config: Config | None = None):
    if config is None:
        config = Config()

    app = Sanic("intellibuild")
    app.ctx.config = config
    logger.setLevel(config.OVERRIDE_LOGGING)

    metrics.app_info.info({"image_name": config.IMAGE_NAME})

    limiter = AsyncLimiter(10)

    @app.route("/")
    async def index(request):
        logger.debug("status check")
        return response.text("ok")

    @app.route("/health")
    async def health(request):
        if not limiter.has_capacity():
            return response.text("Rate limited", status=429)
        await limiter.acquire()

        logger.info("Checking health")
        found = {}
        for tool in REQUIRED_TOOLS:
            found[tool] = shutil.which(tool) is not None
            metrics.health_check_status.labels(tool).set(1 if found[tool] else 0)
            if not found[tool]:
                logger.error("%s not found on PATH", tool)

        status = 200 if all(found.values()) else 500
        text = ", ".join(
            f"{tool}: {'ok' if ok else 'not ok'}" for tool, ok in found.items()
        )
        return response.text(text, status=status)

    @app.route("/metrics")
    async def prometheus_metrics(request):
        return response.raw(generate_latest(), content_type=CONTENT_TYPE_LATEST)

    @app.route("/webhook", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
    async def webhook(request):
        if request.method != "POST":
            logger.debug("Rejecting %s on webhook endpoint", request.method)
            return _reply("Invalid request method", status=405)

        logger.debug("Webhook received")
        return await handle_webhook(request, config=app.ctx.config)

    return app
