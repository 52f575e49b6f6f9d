"""
FastAPI dependency injection module.

Provides the upstream client and resolver. Tests swap either through
``app.dependency_overrides``.
"""

from fastapi import Depends

from freshness.api import GitHubClient
from freshness.services import FreshnessResolver

from ..config import Settings, get_settings


def get_github_client(settings: Settings = Depends(get_settings)) -> GitHubClient:
    """Get a GitHubClient bound to the process settings."""
    return GitHubClient(settings)


def get_freshness_resolver(
    client: GitHubClient = Depends(get_github_client),
) -> FreshnessResolver:
    """Get FreshnessResolver instance with injected client."""
    return FreshnessResolver(client)


__all__ = [
    "get_github_client",
    "get_freshness_resolver",
]
