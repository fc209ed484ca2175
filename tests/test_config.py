from pathlib import Path
from unittest.mock import Mock

from intellibuild.config import Config


def test_defaults(monkeypatch):
    for name in ("IMAGE_NAME", "COMMAND_TIMEOUT", "WORKSPACE_ROOT", "PORT"):
        monkeypatch.delenv(name, raising=False)

    config = Config()

    assert config.PORT == 8080
    assert config.IMAGE_NAME == "myapp"
    assert config.COMMAND_TIMEOUT == 3600.0
    assert config.KEEP_WORKSPACE is False
    assert config.SCAN_SEVERITY == []


def test_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("WORKSPACE_ROOT", str(tmp_path))
    monkeypatch.setenv("IMAGE_NAME", "registry.example.com/app")
    monkeypatch.setenv("KEEP_WORKSPACE", "true")
    monkeypatch.setenv("SCAN_SEVERITY", '["HIGH", "CRITICAL"]')
    monkeypatch.setenv("COMMAND_TIMEOUT", "90")

    config = Config()

    assert config.WORKSPACE_ROOT == Path(tmp_path)
    assert config.IMAGE_NAME == "registry.example.com/app"
    assert config.KEEP_WORKSPACE is True
    assert config.SCAN_SEVERITY == ["HIGH", "CRITICAL"]
    assert config.COMMAND_TIMEOUT == 90.0


def test_print_config(monkeypatch, config):
    info = Mock()
    monkeypatch.setattr("intellibuild.config.logger.info", info)

    config.print_config()

    lines = [call.args[0] for call in info.call_args_list]
    assert "IMAGE_NAME: intellibuild-test" in lines
    assert "COMMAND_TIMEOUT: 60.0" in lines


def test_timeout_disabled_from_environment(monkeypatch):
    monkeypatch.setenv("COMMAND_TIMEOUT", "null")

    config = Config()

    assert config.COMMAND_TIMEOUT is None
