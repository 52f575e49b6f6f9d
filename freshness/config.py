"""
Application configuration using Pydantic settings.

Usage:
    from freshness.config import get_settings
    settings = get_settings()

For constants, import from freshness.constants:
    from freshness.constants import BADGE_LABEL, GITHUB_API_BASE
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from freshness.constants import DEFAULT_BADGE_CACHE_SECONDS, GITHUB_API_BASE


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables and .env file.

    Recommended for production:
        - GITHUB_TOKEN (raises the upstream rate limit from 60 to 5000 req/hour)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # App settings
    app_name: str = Field(default="Repository Freshness", validation_alias="APP_NAME")
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # GitHub REST API
    github_token: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN", "PAT_TOKEN"),
    )
    github_api_base: str = Field(default=GITHUB_API_BASE, validation_alias="GITHUB_API_BASE")
    github_timeout_seconds: float = Field(default=10.0, gt=0, validation_alias="GITHUB_TIMEOUT_SECONDS")

    # Downstream caching (shields.io and any CDN in front of the API)
    badge_cache_seconds: int = Field(
        default=DEFAULT_BADGE_CACHE_SECONDS, ge=0, validation_alias="BADGE_CACHE_SECONDS"
    )

    @field_validator("github_api_base")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the API base so paths can be appended with a single '/'."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"GITHUB_API_BASE must be an http(s) URL (got {v!r})")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"LOG_LEVEL must be a standard logging level (got {v!r})")
        return level

    @property
    def has_github_token(self) -> bool:
        return bool(self.github_token and self.github_token.get_secret_value())

    def validate_production_config(self) -> List[str]:
        """
        Check configuration for production deployment.

        Returns:
            List of advisory warnings; none of them stop the app.
        """
        warnings = []

        if not self.has_github_token:
            warnings.append(
                "GITHUB_TOKEN not set - upstream requests are unauthenticated "
                "and limited to 60 per hour per IP."
            )
        if self.badge_cache_seconds == 0:
            warnings.append(
                "BADGE_CACHE_SECONDS is 0 - every badge render hits the GitHub API."
            )

        return warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
