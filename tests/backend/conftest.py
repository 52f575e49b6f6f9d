import os
import sys
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.append(PROJECT_ROOT)

from backend.app.config import get_settings  # noqa: E402
from backend.app.dependencies import get_freshness_resolver  # noqa: E402
from backend.app.main import create_app  # noqa: E402
from freshness.services import FreshnessResolver  # noqa: E402


@pytest.fixture
def test_app_client(test_settings, github_client, fixed_now) -> Iterator[TestClient]:
    """App wired to the fake GitHub transport and a frozen clock."""
    app = create_app()

    def override_get_resolver() -> FreshnessResolver:
        return FreshnessResolver(github_client, clock=lambda: fixed_now)

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_freshness_resolver] = override_get_resolver

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()
