"""
Freshness resolution: repository -> community profile -> badge.

One upstream call per resolve, no retries, no state kept between calls.
"""

from datetime import datetime, timezone
from typing import Callable, Optional

from freshness.api import GitHubClient
from freshness.exceptions import MissingTimestamp
from freshness.logging import get_logger
from freshness.models import BadgeResponse, RepositoryRef
from freshness.relative_time import humanize_elapsed

logger = get_logger("freshness.service")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class FreshnessResolver:
    """
    Build the freshness badge for a repository.

    Usage:
        resolver = FreshnessResolver(GitHubClient(get_settings()))
        badge = await resolver.resolve(RepositoryRef("octocat", "hello-world"))
    """

    def __init__(
        self,
        client: GitHubClient,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.client = client
        self.clock = clock

    async def resolve(self, ref: RepositoryRef, now: Optional[datetime] = None) -> BadgeResponse:
        """
        Resolve the badge for ``ref``.

        Args:
            ref: Repository to look up.
            now: Reference instant; defaults to the resolver's clock, read
                after the upstream call returns.

        Raises:
            ResolverError: Any upstream failure, or MissingTimestamp when
                the profile carries no usable updated_at.
        """
        metrics = await self.client.get_community_profile(ref)

        if metrics.updated_at is None:
            logger.warning("missing_timestamp", repo=ref.full_name)
            raise MissingTimestamp(ref.owner, ref.name)

        if now is None:
            now = self.clock()
        message = humanize_elapsed(metrics.updated_at, now)

        logger.info(
            "badge_resolved",
            repo=ref.full_name,
            message=message,
            health_percentage=metrics.health_percentage,
        )
        return BadgeResponse(message=message)
