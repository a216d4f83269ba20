"""Application settings using pydantic-settings.

Settings are loaded from environment variables with defaults suitable for
development and tests.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TenancySettings(BaseSettings):
    """Tenant scoping settings.

    Environment variables:
        MULTITENANT_DEFAULT_ASSOCIATION: Association used by belongs_to_tenant
            when none is named (default: tenant)
        MULTITENANT_RESTORE_OUTER_TENANT: When a tenant scope is nested inside
            another scope on the same dimension, restore the outer tenant on
            exit instead of clearing the slot (default: false)
        MULTITENANT_LOG_LEVEL: Minimum log level (default: INFO)
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTITENANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_association: str = Field(
        default="tenant",
        min_length=1,
        description="Association name used by belongs_to_tenant by default",
    )
    restore_outer_tenant: bool = Field(
        default=False,
        description="Restore the outer tenant when a nested scope exits",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the log level name."""
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level


class DatabaseSettings(BaseSettings):
    """Database connection settings.

    Environment variables:
        MULTITENANT_DB_URL: SQLAlchemy database URL (default: in-memory SQLite)
        MULTITENANT_DB_ECHO: Log emitted SQL (default: false)
    """

    model_config = SettingsConfigDict(
        env_prefix="MULTITENANT_DB_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(
        default="sqlite+pysqlite:///:memory:",
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(default=False, description="Log emitted SQL")


@lru_cache
def get_tenancy_settings() -> TenancySettings:
    """Get cached tenancy settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return TenancySettings()


@lru_cache
def get_database_settings() -> DatabaseSettings:
    """Get cached database settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DatabaseSettings()
