"""
Application settings.

Defaults < environment variables (CHESS_DATABASE_URL, CHESS_PERSIST, CHESS_LOG_LEVEL) < command line flags.
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "CHESS_"
TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    database_url: str = "sqlite:///console_chess.db"
    persist: bool = True
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if (url := environ.get(f"{ENV_PREFIX}DATABASE_URL")) is not None:
            values["database_url"] = url
        if (persist := environ.get(f"{ENV_PREFIX}PERSIST")) is not None:
            values["persist"] = persist.strip().lower() in TRUTHY
        if (level := environ.get(f"{ENV_PREFIX}LOG_LEVEL")) is not None:
            values["log_level"] = level
        return cls(**values)
