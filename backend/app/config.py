"""
Application configuration using Pydantic settings.

Re-exports the unified freshness.config module so routers and dependencies
import settings from one place.
"""

from freshness.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
