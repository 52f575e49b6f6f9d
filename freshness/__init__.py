"""
Repository Freshness core library.

Reports how long ago a repository's community-health files were updated,
shaped as a shields.io endpoint badge.

Usage:
    # Config
    from freshness.config import get_settings, Settings

    # Logging
    from freshness.logging import get_logger, configure_logging

    # Resolving a badge
    from freshness.parsing import parse_repo_path
    from freshness.services import FreshnessResolver
"""

__version__ = "1.0.0"

# Users should import directly from submodules:
#   from freshness.config import get_settings
#   from freshness.services import FreshnessResolver
