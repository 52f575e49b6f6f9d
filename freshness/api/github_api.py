"""GitHub REST client for the community profile metrics endpoint."""

import time
from typing import Optional
from urllib.parse import quote

import httpx

from freshness.config import Settings
from freshness.constants import (
    COMMUNITY_PROFILE_PATH,
    GITHUB_ACCEPT_HEADER,
    GITHUB_API_VERSION,
    USER_AGENT,
)
from freshness.exceptions import (
    RateLimited,
    RepositoryNotFound,
    UpstreamAuthFailed,
    UpstreamUnavailable,
)
from freshness.logging import get_logger, log_timing
from freshness.models import CommunityMetrics, RepositoryRef

logger = get_logger("github")

# 410: repository access blocked, 451: unavailable for legal reasons
NOT_FOUND_STATUSES = (404, 410, 451)


def _get_headers(settings: Settings) -> dict[str, str]:
    """Get headers for GitHub API requests."""
    headers = {
        "Accept": GITHUB_ACCEPT_HEADER,
        "User-Agent": USER_AGENT,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    if settings.has_github_token:
        headers["Authorization"] = f"Bearer {settings.github_token.get_secret_value()}"
    return headers


def _retry_after_seconds(response: httpx.Response) -> Optional[int]:
    """How long GitHub asked us to wait, from Retry-After or X-RateLimit-Reset."""
    retry_after = response.headers.get("Retry-After")
    if retry_after is not None:
        try:
            return max(int(retry_after), 0)
        except ValueError:
            pass

    reset = response.headers.get("X-RateLimit-Reset")
    if reset is not None:
        try:
            return max(int(reset) - int(time.time()), 0)
        except ValueError:
            pass

    return None


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    if response.status_code != 403:
        return False
    if response.headers.get("X-RateLimit-Remaining") == "0":
        return True
    # Secondary rate limits keep X-RateLimit-Remaining > 0
    try:
        body = response.json()
    except ValueError:
        return False
    if not isinstance(body, dict):
        return False
    return "rate limit" in str(body.get("message", "")).lower()


def _raise_for_status(response: httpx.Response, ref: RepositoryRef) -> None:
    """Map a non-2xx response to the matching resolver error."""
    status = response.status_code
    if 200 <= status < 300:
        return

    if status in NOT_FOUND_STATUSES:
        logger.info("api_not_found", repo=ref.full_name, status=status)
        raise RepositoryNotFound(ref.owner, ref.name)

    if _is_rate_limited(response):
        retry_after = _retry_after_seconds(response)
        logger.warning("rate_limited", repo=ref.full_name, status=status, retry_after=retry_after)
        raise RateLimited(retry_after=retry_after)

    if status in (401, 403):
        logger.error("api_auth_failed", repo=ref.full_name, status=status)
        raise UpstreamAuthFailed(status)

    logger.error("api_error", repo=ref.full_name, status=status)
    raise UpstreamUnavailable(f"unexpected HTTP {status}")


class GitHubClient:
    """
    Read-only client for ``GET /repos/{owner}/{repo}/community/profile``.

    Settings (and with them the credential) are injected at construction. A
    custom transport can be passed to substitute the network in tests.

    Usage:
        client = GitHubClient(get_settings())
        metrics = await client.get_community_profile(RepositoryRef("octocat", "hello-world"))
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self._transport = transport

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.github_api_base,
            headers=_get_headers(self.settings),
            timeout=self.settings.github_timeout_seconds,
            transport=self._transport,
            follow_redirects=True,
        )

    @staticmethod
    def community_profile_path(ref: RepositoryRef) -> str:
        return COMMUNITY_PROFILE_PATH.format(
            owner=quote(ref.owner, safe=""),
            name=quote(ref.name, safe=""),
        )

    @log_timing("community_profile_fetch", logger=logger)
    async def get_community_profile(self, ref: RepositoryRef) -> CommunityMetrics:
        """
        Fetch community profile metrics for one repository.

        One logical read: redirects for renamed or transferred repositories
        are followed, and nothing is retried.

        Raises:
            RepositoryNotFound: Repository missing or not visible.
            UpstreamAuthFailed: Credential rejected.
            RateLimited: Primary or secondary rate limit hit.
            UpstreamUnavailable: Transport failure, 5xx, or non-JSON body.
        """
        path = self.community_profile_path(ref)
        logger.debug(
            "upstream_request",
            repo=ref.full_name,
            authenticated=self.settings.has_github_token,
        )

        try:
            async with self._build_client() as client:
                response = await client.get(path)
        except httpx.TimeoutException as e:
            logger.warning("request_timeout", repo=ref.full_name, error=str(e))
            raise UpstreamUnavailable("request timed out") from e
        except httpx.HTTPError as e:
            logger.error("request_exception", repo=ref.full_name, error=str(e))
            raise UpstreamUnavailable(type(e).__name__) from e

        logger.debug(
            "upstream_response",
            repo=ref.full_name,
            status=response.status_code,
            rate_limit_remaining=response.headers.get("X-RateLimit-Remaining"),
        )
        _raise_for_status(response, ref)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamUnavailable("response body is not JSON") from e

        if not isinstance(payload, dict):
            raise UpstreamUnavailable("response body is not a JSON object")

        return CommunityMetrics.model_validate(payload)
