"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field, field_validator

_TRUE = {"1", "true", "yes", "on"}


def _flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE


class Settings(BaseModel):
    isolate_errors: bool = False
    renotify: bool = True
    max_errors: int = Field(default=100, ge=1)
    log_level: str = "INFO"
    start_event: str = "application.start"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"unknown log level: {value}")
        return value

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            isolate_errors=_flag("BEANBUS_ISOLATE_ERRORS", False),
            renotify=_flag("BEANBUS_RENOTIFY", True),
            max_errors=os.environ.get("BEANBUS_MAX_ERRORS", 100),
            log_level=os.environ.get("BEANBUS_LOG_LEVEL", "INFO"),
            start_event=os.environ.get("BEANBUS_START_EVENT", "application.start"),
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
