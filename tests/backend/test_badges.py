"""
Tests for the badge and health endpoints.
"""

import pytest

from backend.app.dependencies import get_freshness_resolver


class TestHealth:
    """Tests for the fixed routes."""

    def test_root_greets(self, test_app_client, fake_github):
        response = test_app_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"message": "hello there!"}
        assert fake_github.call_count == 0

    def test_health(self, test_app_client):
        response = test_app_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_request_id_header(self, test_app_client):
        response = test_app_client.get("/", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"


class TestBadge:
    """Tests for GET /{owner}/{name}."""

    def test_three_months_scenario(self, test_app_client, fake_github, profile_payload):
        fake_github.respond("octocat", "hello-world", json=profile_payload("2023-01-01T00:00:00Z"))

        response = test_app_client.get("/octocat/hello-world")

        assert response.status_code == 200
        assert response.json() == {
            "schemaVersion": 1,
            "label": "⏱",
            "labelColor": "blue",
            "message": "3 months",
        }
        assert fake_github.call_count == 1

    def test_cache_control_header(self, test_app_client, fake_github, profile_payload):
        fake_github.respond("octocat", "hello-world", json=profile_payload("2023-03-31T00:00:00Z"))

        response = test_app_client.get("/octocat/hello-world")

        assert response.headers["Cache-Control"] == "public, max-age=600"
        assert response.json()["message"] == "a day"

    def test_identical_bodies_for_repeated_requests(
        self, test_app_client, fake_github, profile_payload
    ):
        fake_github.respond("octocat", "hello-world", json=profile_payload("2021-04-01T00:00:00Z"))

        first = test_app_client.get("/octocat/hello-world")
        second = test_app_client.get("/octocat/hello-world")

        assert first.content == second.content
        assert first.json()["message"] == "2 years"

    def test_extra_segments_stay_in_name(self, test_app_client, fake_github):
        response = test_app_client.get("/octocat/hello/world")

        assert response.status_code == 404
        raw_path = fake_github.requests[0].url.raw_path
        assert raw_path == b"/repos/octocat/hello%2Fworld/community/profile"

    def test_renamed_repository_follows_redirect(
        self, test_app_client, fake_github, profile_payload
    ):
        fake_github.respond(
            "old-owner",
            "old-name",
            status_code=301,
            headers={"Location": "https://api.github.test/repositories/42/community/profile"},
        )
        fake_github.respond_at(
            "/repositories/42/community/profile", json=profile_payload("2023-01-01T00:00:00Z")
        )

        response = test_app_client.get("/old-owner/old-name")

        assert response.status_code == 200
        assert response.json()["message"] == "3 months"


class TestBadgeErrors:
    """Tests for error statuses and bodies."""

    def test_unexpected_error_is_generic_500_with_request_id(self, test_app_client):
        class BrokenResolver:
            async def resolve(self, ref, now=None):
                raise RuntimeError("database password is hunter2")

        test_app_client.app.dependency_overrides[get_freshness_resolver] = BrokenResolver

        response = test_app_client.get("/octocat/hello-world", headers={"X-Request-ID": "req-9"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "req-9"
        assert response.json()["error"] == "InternalError"
        assert "hunter2" not in response.text

    def test_missing_slash_is_malformed(self, test_app_client, fake_github):
        response = test_app_client.get("/onlyowner")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Malformed"
        assert body["status_code"] == 400
        assert "owner/name" in body["detail"]
        assert fake_github.call_count == 0

    def test_trailing_slash_only_is_malformed(self, test_app_client, fake_github):
        response = test_app_client.get("/onlyowner/")

        assert response.status_code == 400
        assert fake_github.call_count == 0

    def test_ghost_repo_not_found(self, test_app_client, fake_github):
        response = test_app_client.get("/owner/ghost-repo")

        assert response.status_code == 404
        assert response.json()["error"] == "NotFound"
        assert fake_github.call_count == 1

    def test_auth_failure(self, test_app_client, fake_github, test_settings):
        fake_github.respond("octocat", "hello-world", status_code=401, json={})

        response = test_app_client.get("/octocat/hello-world")

        assert response.status_code == 502
        assert response.json()["error"] == "UpstreamAuthFailed"
        assert test_settings.github_token.get_secret_value() not in response.text

    def test_rate_limited_passes_retry_after(self, test_app_client, fake_github):
        fake_github.respond(
            "octocat",
            "hello-world",
            status_code=429,
            json={"message": "API rate limit exceeded"},
            headers={"Retry-After": "30"},
        )

        response = test_app_client.get("/octocat/hello-world")

        assert response.status_code == 429
        assert response.json()["error"] == "RateLimited"
        assert response.headers["Retry-After"] == "30"

    def test_upstream_unavailable(self, test_app_client, fake_github):
        fake_github.respond("octocat", "hello-world", status_code=503, json={})

        response = test_app_client.get("/octocat/hello-world")

        assert response.status_code == 502
        assert response.json()["error"] == "UpstreamUnavailable"

    @pytest.mark.parametrize("updated_at", [None, "soon"])
    def test_missing_timestamp(self, test_app_client, fake_github, profile_payload, updated_at):
        fake_github.respond("octocat", "hello-world", json=profile_payload(updated_at))

        response = test_app_client.get("/octocat/hello-world")

        assert response.status_code == 502
        assert response.json()["error"] == "MissingTimestamp"

    def test_errors_do_not_leak_into_next_request(
        self, test_app_client, fake_github, profile_payload
    ):
        fake_github.respond("octocat", "hello-world", json=profile_payload("2023-01-01T00:00:00Z"))

        assert test_app_client.get("/owner/ghost-repo").status_code == 404
        response = test_app_client.get("/octocat/hello-world")

        assert response.status_code == 200
        assert response.json()["message"] == "3 months"

    def test_error_responses_are_not_cached(self, test_app_client, fake_github):
        response = test_app_client.get("/owner/ghost-repo")

        assert "Cache-Control" not in response.headers

    def test_method_not_allowed_uses_error_shape(self, test_app_client):
        response = test_app_client.post("/octocat/hello-world")

        assert response.status_code == 405
        assert response.json()["error"] == "HTTPError"
