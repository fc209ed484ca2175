import tempfile
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from sanic.log import logger


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_parse_none_str="null")

    HOST: str = "0.0.0.0"
    PORT: int = 8080

    WORKSPACE_ROOT: Path = Path(tempfile.gettempdir())
    KEEP_WORKSPACE: bool = False

    IMAGE_NAME: str = "myapp"
    KEEP_IMAGE: bool = False

    # Seconds allowed for each external command, None disables the deadline
    COMMAND_TIMEOUT: float | None = 3600.0

    SCAN_SEVERITY: list[str] = []
    SCAN_FAIL_ON_VULNERABILITIES: bool = False

    OVERRIDE_LOGGING: Literal[
        "CRITICAL",
        "FATAL",
        "ERROR",
        "WARNING",
        "WARN",
        "INFO",
        "DEBUG",
        "NOTSET",
    ] = "INFO"

    def print_config(self):
        """Print configuration values"""
        logger.info("=== IntelliBuild Configuration ===")
        for field_name, field_value in self.model_dump().items():
            logger.info(f"{field_name}: {field_value}")
        logger.info("==================================")
