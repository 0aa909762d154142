"""Configuration management using Pydantic Settings."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class SectionErrorPolicy(str, Enum):
    RAISE = "raise"
    DROP = "drop"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DsnJsonConfig(BaseSettings):
    """Parser configuration, loaded from environment variables."""

    model_config = {"env_prefix": "DSN_JSON_", "env_file": ".env", "extra": "ignore"}

    log_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Logging level",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional path to a log file; stderr only when unset",
    )
    on_section_error: SectionErrorPolicy = Field(
        default=SectionErrorPolicy.RAISE,
        description="raise: abort the parse on a malformed section; drop: omit it and continue",
    )
    max_depth: int = Field(
        default=256,
        ge=1,
        description="Maximum S-expression nesting depth accepted by the reader",
    )
