"""Mocking engine configuration loaded from environment variables."""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mock_engine.connectors import MOCK_SINK_CONNECTOR

logger = logging.getLogger(__name__)


class DdlParseFailurePolicy(str, Enum):
    """What to do with a DDL statement the DDL parser rejects."""

    PASS_THROUGH = "pass_through"  # keep the statement unchanged
    ABORT = "abort"  # fail the mocking call, job left untouched


class Settings(BaseSettings):
    """Application settings loaded from environment variables with MOCKSINK_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="MOCKSINK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False

    # Mocking
    mock_sink: bool = False
    mock_connector: str = MOCK_SINK_CONNECTOR
    ddl_parse_failure: DdlParseFailurePolicy = DdlParseFailurePolicy.PASS_THROUGH

    # Logging
    log_level: str = "INFO"
    structured_logging: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("mock_connector")
    @classmethod
    def validate_connector(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("mock_connector must not be empty")
        return v.strip()


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info(
            "Loaded settings: mock_sink=%s connector=%s ddl_parse_failure=%s",
            settings.mock_sink,
            settings.mock_connector,
            settings.ddl_parse_failure.value,
        )

    return settings
