"""
Error taxonomy for badge resolution.

Every failure a request can hit is one of these. Each carries a stable
machine-readable ``kind`` and the HTTP status it surfaces as, so the API
layer maps them with a single handler.
"""

from typing import Optional


class FreshnessError(Exception):
    """Base class for all request-level failures."""

    kind: str = "FreshnessError"
    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": self.kind,
            "detail": self.message,
            "status_code": self.status_code,
        }


# =============================================================================
# Parser Errors
# =============================================================================


class ParseError(FreshnessError):
    """Raised when the request path does not name a repository."""

    kind = "ParseError"
    status_code = 400


class MalformedRepositoryPath(ParseError):
    kind = "Malformed"

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Expected a path of the form 'owner/name', got {path!r}")


# =============================================================================
# Resolver Errors
# =============================================================================


class ResolverError(FreshnessError):
    """Raised when the upstream lookup or its payload cannot produce a badge."""

    kind = "ResolverError"
    status_code = 502


class RepositoryNotFound(ResolverError):
    kind = "NotFound"
    status_code = 404

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"Repository {owner}/{name} not found or not accessible")


class UpstreamAuthFailed(ResolverError):
    kind = "UpstreamAuthFailed"

    def __init__(self, upstream_status: int):
        self.upstream_status = upstream_status
        super().__init__(f"GitHub rejected the configured credential (HTTP {upstream_status})")


class RateLimited(ResolverError):
    kind = "RateLimited"
    status_code = 429

    def __init__(self, retry_after: Optional[int] = None):
        self.retry_after = retry_after
        message = "GitHub API rate limit exceeded"
        if retry_after is not None:
            message += f"; retry in {retry_after}s"
        super().__init__(message)


class UpstreamUnavailable(ResolverError):
    kind = "UpstreamUnavailable"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"GitHub API unavailable: {reason}")


class MissingTimestamp(ResolverError):
    kind = "MissingTimestamp"

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"Community profile for {owner}/{name} has no usable updated_at")


__all__ = [
    "FreshnessError",
    "ParseError",
    "MalformedRepositoryPath",
    "ResolverError",
    "RepositoryNotFound",
    "UpstreamAuthFailed",
    "RateLimited",
    "UpstreamUnavailable",
    "MissingTimestamp",
]
