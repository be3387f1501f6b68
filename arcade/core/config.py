"""
Settings for the arcade.

Defaults live on the model, environment variables prefixed with ARCADE_ override them
(ex. ARCADE_DATABASE_URL, ARCADE_OPPONENT_DELAY).
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field, field_validator

from arcade.core.exceptions import InvalidRequestError

ENV_PREFIX = "ARCADE_"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Settings(BaseModel):
    database_url: str = "sqlite:///arcade.db"

    # delays (seconds) of the scheduled transitions
    opponent_delay: float = Field(default=0.5, ge=0)
    match_delay: float = Field(default=0.5, ge=0)
    mismatch_delay: float = Field(default=1.0, ge=0)

    # user preferences for the feedback hooks
    sound_enabled: bool = True
    vibration_enabled: bool = True

    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise InvalidRequestError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Collect the ARCADE_* variables and let pydantic coerce them onto the fields."""
        environ = os.environ if environ is None else environ
        overrides = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls(**overrides)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
