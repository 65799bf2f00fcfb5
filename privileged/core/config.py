"""
Privilege configuration using Pydantic Settings.

Environment variables:
- PRIVILEGE_PROVIDER: context provider name (default: "static")
- PRIVILEGE_CASE_SENSITIVE: compare names exactly (default: false)
- PRIVILEGE_CONTEXT_CACHE_TTL: seconds a resolved context is reused per principal
- PRIVILEGE_LOG_LEVEL / PRIVILEGE_LOG_FORMAT: logging setup
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PrivilegeSettings(BaseSettings):
    """Privilege engine and adapter settings."""

    model_config = SettingsConfigDict(
        env_prefix="PRIVILEGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = Field(
        default="static",
        description="Context provider: static, factory, or a registered custom name",
    )
    case_sensitive: bool = Field(
        default=False,
        description="Compare subjects, actions and qualifiers exactly",
    )
    context_cache_ttl: int = Field(
        default=300,
        ge=0,
        description="Seconds a resolved context is reused per principal (0 disables)",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json", description="json or console")

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"json", "console"}
        if v not in allowed:
            raise ValueError(f"log_format must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache
def get_settings() -> PrivilegeSettings:
    """Get cached settings instance."""
    return PrivilegeSettings()


# Shorthand
settings = get_settings()
