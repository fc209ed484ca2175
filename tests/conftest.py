from pathlib import Path

import pytest
from sanic import Sanic
from sanic_testing import TestManager
from sanic.log import logger

from intellibuild.config import Config
from intellibuild.exceptions import CommandFailedError


class FakeRunner:
    """Stands in for ``process.run_command``, recording every invocation.

    ``git clone`` creates the target directory and fills it with ``files``.
    Commands starting with a prefix listed in ``failures`` exit with the
    given status.
    """

    def __init__(self):
        self.calls: list[tuple[list[str], Path | None]] = []
        self.files = {
            "go.mod": "module example.com/app\n\ngo 1.22\n",
            "main_test.go": "package main\n",
            "Dockerfile": "FROM scratch\n",
        }
        self.failures: dict[tuple[str, ...], int] = {}

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _ in self.calls]

    @property
    def stage_commands(self) -> list[list[str]]:
        """Commands other than the image removal run after the pipeline."""
        return [args for args in self.commands if args[:3] != ["docker", "image", "rm"]]

    async def __call__(self, args, *, cwd=None, timeout=None):
        args = list(args)
        self.calls.append((args, cwd))

        for prefix, returncode in self.failures.items():
            if tuple(args[: len(prefix)]) == prefix:
                raise CommandFailedError(args, returncode)

        if args[:2] == ["git", "clone"]:
            target = Path(args[3])
            target.mkdir(parents=True)
            for name, content in self.files.items():
                (target / name).write_text(content)


@pytest.fixture
def config(tmp_path):
    config = Config(
        WORKSPACE_ROOT=tmp_path / "workspaces",
        KEEP_WORKSPACE=False,
        IMAGE_NAME="intellibuild-test",
        KEEP_IMAGE=False,
        COMMAND_TIMEOUT=60,
        SCAN_SEVERITY=[],
        SCAN_FAIL_ON_VULNERABILITIES=False,
        OVERRIDE_LOGGING="DEBUG",
    )

    logger.setLevel(config.OVERRIDE_LOGGING)

    return config


@pytest.fixture
def runner(monkeypatch) -> FakeRunner:
    runner = FakeRunner()
    monkeypatch.setattr("intellibuild.process.run_command", runner)
    return runner


@pytest.fixture(scope="function")
def app(config) -> Sanic:
    """Create a Sanic app for testing."""
    from intellibuild.web import create_app

    app = create_app(config=config)
    TestManager(app)
    return app
