"""
Pytest fixtures for Repository Freshness tests.

The upstream GitHub API is replaced by an httpx.MockTransport wrapping a
recording fake, so tests can assert exactly how many calls were made.
"""

from datetime import datetime, timezone

import httpx
import pytest

from freshness.api import GitHubClient
from freshness.config import Settings

TEST_API_BASE = "https://api.github.test"
TEST_TOKEN = "ghp_test_token_not_real"


def community_profile_payload(updated_at="2024-01-20T15:30:00Z", **overrides):
    """Sample GitHub community profile response."""
    payload = {
        "health_percentage": 85,
        "description": "A sample repository",
        "documentation": None,
        "files": {
            "code_of_conduct": None,
            "contributing": {
                "url": "https://api.github.com/repos/testowner/testrepo/contents/CONTRIBUTING.md",
                "html_url": "https://github.com/testowner/testrepo/blob/main/CONTRIBUTING.md",
            },
            "license": {"key": "mit", "name": "MIT License", "spdx_id": "MIT"},
            "readme": {"url": "https://api.github.com/repos/testowner/testrepo/contents/README.md"},
        },
        "updated_at": updated_at,
        "content_reports_enabled": False,
    }
    payload.update(overrides)
    return payload


class FakeGitHub:
    """
    Recording stand-in for the GitHub REST API.

    Unregistered repositories answer 404 like the real API.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, object] = {}

    @staticmethod
    def _path(owner: str, name: str) -> str:
        return f"/repos/{owner}/{name}/community/profile"

    def respond(self, owner, name, status_code=200, json=None, headers=None, content=None):
        """Register a canned response for one repository."""
        self.respond_at(self._path(owner, name), status_code, json, headers, content)

    def respond_at(self, path, status_code=200, json=None, headers=None, content=None):
        """Register a canned response for an arbitrary API path."""
        self._routes[path] = {
            "status_code": status_code,
            "json": json,
            "headers": headers,
            "content": content,
        }

    def raise_error(self, owner, name, exc: Exception):
        """Make requests for one repository fail at the transport level."""
        self._routes[self._path(owner, name)] = exc

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(request.url.path)
        if isinstance(route, Exception):
            raise route
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        # Fresh response per call; httpx responses are single-use
        return httpx.Response(**route)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def test_settings():
    """Settings with a fake credential and API base; no environment involved."""
    return Settings(
        github_token=TEST_TOKEN,
        github_api_base=TEST_API_BASE,
        github_timeout_seconds=5.0,
        badge_cache_seconds=600,
        _env_file=None,
    )


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def github_client(test_settings, fake_github):
    return GitHubClient(test_settings, transport=fake_github.transport)


@pytest.fixture
def fixed_now():
    return datetime(2023, 4, 1, tzinfo=timezone.utc)


@pytest.fixture
def profile_payload():
    """Factory for community profile bodies."""
    return community_profile_payload
