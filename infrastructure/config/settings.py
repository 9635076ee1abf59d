# infrastructure/config/settings.py
from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional, Union

from dotenv import dotenv_values
from pydantic import BaseModel, Field

from application.ports.logger import LoggerPort, NullLogger

ENV_PREFIX = "RUNNER_"

_default_env_path = Path(__file__).parent.parent.parent / ".env"


class RunnerSettings(BaseModel):
    """Runtime settings for the runner and its logging."""
    log_level: Literal["DEBUG", "INFO", "ERROR"] = Field(default="INFO", description="Minimum log level")
    log_sink: Literal["console", "loguru", "null"] = Field(default="null", description="Logger adapter")


def load_settings(env_path: Optional[Union[str, Path]] = None) -> RunnerSettings:
    """
    .env の RUNNER_* を読み込み、環境変数で上書きする

    RUNNER_LOG_LEVEL=DEBUG -> log_level="DEBUG"
    """
    path = Path(env_path) if env_path is not None else _default_env_path
    values = dict(dotenv_values(path)) if path.exists() else {}

    for key, value in os.environ.items():
        if key.startswith(ENV_PREFIX):
            values[key] = value

    data = {}
    for key, value in values.items():
        if not key.startswith(ENV_PREFIX) or value is None:
            continue
        field_name = key[len(ENV_PREFIX):].lower()
        if field_name in RunnerSettings.model_fields:
            data[field_name] = value.upper() if field_name == "log_level" else value.lower()

    return RunnerSettings(**data)


def build_logger(settings: RunnerSettings) -> LoggerPort:
    if settings.log_sink == "console":
        from infrastructure.logging.console_logger import ConsoleLogger

        return ConsoleLogger(level=settings.log_level)
    if settings.log_sink == "loguru":
        from infrastructure.logging.log_setup import setup_console_logging
        from infrastructure.logging.loguru_logger import LoguruLogger

        setup_console_logging(settings.log_level)
        return LoguruLogger()
    return NullLogger()
