"""
Core services.

Services compose the upstream client and the relative-time renderer into
the operations the API exposes.
"""

from freshness.services.freshness_service import FreshnessResolver

__all__ = [
    "FreshnessResolver",
]
