"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- All state is in memory, so there is no database configuration
"""

from __future__ import annotations

import string
from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings", "DEFAULT_ALPHABET"]

DEFAULT_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...)"
    )

    # Server Configuration
    HOST: str = Field(default="0.0.0.0", description="Interface uvicorn binds to")
    PORT: int = Field(default=8080, description="Port uvicorn listens on")

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8080",
        description="Base URL prefixed to codes when building short URLs"
    )
    MAX_URL_LENGTH: int = Field(
        default=2048,
        description="Longest URL accepted for shortening"
    )

    # Short Code Configuration
    SHORT_CODE_LENGTH: int = Field(
        default=6,
        ge=1,
        description="Fixed length for all short codes"
    )
    SHORT_CODE_MAX_ATTEMPTS: int = Field(
        default=100,
        ge=1,
        description="Random draws tried before giving up on finding a free code"
    )
    SHORT_CODE_ALPHABET: str = Field(
        default=DEFAULT_ALPHABET,
        min_length=1,
        description="Characters short codes are drawn from"
    )


settings = Settings()
