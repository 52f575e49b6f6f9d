"""
Typed values passed between the parser, the upstream client and the API.
"""

from freshness.models.badge import BadgeResponse
from freshness.models.repository import CommunityMetrics, RepositoryRef

__all__ = [
    "BadgeResponse",
    "CommunityMetrics",
    "RepositoryRef",
]
