"""
==============================================================================
Application Settings Module
==============================================================================

Production-grade configuration management using Pydantic Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Computed properties for derived file paths
- Thread-safe singleton implementation

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

Data Files:
-----------
- data_file: the catalog workbook (single source of truth)
- color_modifiers_file: color name -> price multiplier JSON
- featured_file: preferred model ordering JSON
- subscribers_file: append-only newsletter CSV

==============================================================================
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        data_file: Path to the catalog workbook (.xlsx)
        color_modifiers_file: Path to the color modifiers JSON
        featured_file: Path to the preferred featured models JSON
        subscribers_file: Path to the subscribers CSV
        public_dir: Directory served under /public
        default_market: Market used when a request omits one
        default_city: City used when a request omits one
        featured_default_count: Featured items returned by default
        featured_max_count: Upper bound for the featured count
        kommo_webhook_url: Outbound webhook for new subscriptions
        webhook_timeout_seconds: Timeout for the outbound webhook
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings()
        >>> print(settings.default_market)
        'AO'
        >>> print(settings.data_path)
        data/allo-kapri-catalog-SPLIT.xlsx
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        # Load from .env file if present
        env_file=".env",
        env_file_encoding="utf-8",
        # Environment variables are case-insensitive
        case_sensitive=False,
        # Ignore extra environment variables
        extra="ignore",
        # Validate default values
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Allo Kapri Catalog API",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=5050,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # DATA FILE SETTINGS
    # =========================================================================
    data_file: str = Field(
        default="data/allo-kapri-catalog-SPLIT.xlsx",
        description="Path to the catalog workbook"
    )

    color_modifiers_file: str = Field(
        default="config/color-modifiers.json",
        description="Path to the color modifiers JSON"
    )

    featured_file: str = Field(
        default="config/featured.json",
        description="Path to the preferred featured models JSON"
    )

    subscribers_file: str = Field(
        default="data/subscribers.csv",
        description="Path to the subscribers CSV"
    )

    public_dir: str = Field(
        default="public",
        description="Directory served under /public"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    default_market: str = Field(
        default="AO",
        min_length=2,
        max_length=2,
        description="Market used when a request omits one"
    )

    default_city: str = Field(
        default="Luanda",
        description="City used when a request omits one"
    )

    featured_default_count: int = Field(
        default=8,
        ge=1,
        le=100,
        description="Featured items returned when no count is given"
    )

    featured_max_count: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Upper bound for the featured count"
    )

    # =========================================================================
    # WEBHOOK SETTINGS
    # =========================================================================
    kommo_webhook_url: str = Field(
        default="",
        description="Outbound webhook notified on new subscriptions"
    )

    webhook_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=60,
        description="Timeout for the outbound webhook"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """
        Validate and normalize application environment.

        Args:
            value: Raw environment value

        Returns:
            Lowercase normalized environment name
        """
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("default_market")
    @classmethod
    def validate_default_market(cls, value: str) -> str:
        """Market codes are always upper-case."""
        return value.strip().upper()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"

    @property
    def data_path(self) -> Path:
        """Get the catalog workbook as Path object."""
        return Path(self.data_file)

    @property
    def color_modifiers_path(self) -> Path:
        """Get the color modifiers file as Path object."""
        return Path(self.color_modifiers_file)

    @property
    def featured_path(self) -> Path:
        """Get the featured models file as Path object."""
        return Path(self.featured_file)

    @property
    def subscribers_path(self) -> Path:
        """Get the subscribers CSV as Path object."""
        return Path(self.subscribers_file)

    @property
    def public_path(self) -> Path:
        """Get the public static directory as Path object."""
        return Path(self.public_dir)

    @property
    def webhook_enabled(self) -> bool:
        """Check if the outbound webhook is configured."""
        return bool(self.kommo_webhook_url.strip())

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================
    def ensure_directories(self) -> None:
        """
        Create all required directories.

        Creates:
        - Subscribers CSV directory
        """
        self.subscribers_path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Required directories created/verified")

    def describe_sources(self) -> dict:
        """Summarize which backing files are present."""
        return {
            "workbook": self.data_path.exists(),
            "color_modifiers": self.color_modifiers_path.exists(),
            "featured": self.featured_path.exists(),
        }

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"data_file={self.data_file!r}, "
            f"debug={self.debug})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Uses lru_cache to ensure only one Settings instance is created
    throughout the application lifecycle.

    Returns:
        Global Settings instance
    """
    settings = Settings()

    # Ensure required directories exist
    settings.ensure_directories()

    # Log configuration summary (only in debug mode)
    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
