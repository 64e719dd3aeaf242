"""
Fixtures for journeys against a live deployment.

Journeys run only when BASE_URL points at a deployment; the stored session
from AUTH_STATE_PATH is restored by the ``playwright_client`` fixture.
"""
import pytest

from transport_ui_tests.config import settings


@pytest.fixture(autouse=True)
def require_live_target():
    if not settings.has_target:
        pytest.skip("BASE_URL is not set; live journeys need a deployed wizard")
