"""
Freshness badge endpoint.

``GET /{owner}/{name}`` answers with a shields.io endpoint payload. The path
is captured greedily and handed to the parser, so malformed paths fail with
400 before anything reaches GitHub.
"""

from fastapi import APIRouter, Depends, Response

from freshness.parsing import parse_repo_path
from freshness.services import FreshnessResolver

from ..config import Settings, get_settings
from ..dependencies import get_freshness_resolver
from ..schemas import BadgeResponse, ErrorResponse

router = APIRouter(tags=["badges"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Path is not owner/name"},
    404: {"model": ErrorResponse, "description": "Repository not found"},
    429: {"model": ErrorResponse, "description": "GitHub rate limit exceeded"},
    502: {"model": ErrorResponse, "description": "GitHub failed or returned no timestamp"},
}


@router.get(
    "/{repo_path:path}",
    response_model=BadgeResponse,
    responses=_ERROR_RESPONSES,
)
async def get_freshness_badge(
    repo_path: str,
    response: Response,
    resolver: FreshnessResolver = Depends(get_freshness_resolver),
    settings: Settings = Depends(get_settings),
) -> BadgeResponse:
    """Time since the repository's community-health files last changed."""
    ref = parse_repo_path(repo_path)
    badge = await resolver.resolve(ref)

    response.headers["Cache-Control"] = f"public, max-age={settings.badge_cache_seconds}"
    return badge
