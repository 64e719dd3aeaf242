"""Harness tests run against the local mock wizard, never a live host."""
import threading

import pytest
import pytest_asyncio
from werkzeug.serving import make_server

from transport_ui_tests.config import settings
from transport_ui_tests.factories import minimal_waypoint_data
from transport_ui_tests.mock_wizard import create_mock_wizard_app
from transport_ui_tests.steps import PointType


class MockWizardServer:
    def __init__(self, host="127.0.0.1"):
        self.host = host
        self.app = create_mock_wizard_app()
        self.server = make_server(self.host, 0, self.app, threaded=True)
        self.port = self.server.server_port
        self.thread = None

    def start(self):
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        if self.thread:
            self.thread.join(timeout=5)

    @property
    def url(self):
        return f"http://{self.host}:{self.port}"

    @property
    def state(self):
        return self.app.mock_state


@pytest.fixture()
def mock_wizard_server():
    """A running mock wizard with fresh state."""
    server = MockWizardServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture(autouse=True)
def mock_profile(mock_wizard_server):
    """Point the active profile at the mock wizard for the duration of a test."""
    profile = settings.derive("mock", base_url=mock_wizard_server.url, auth_state_path=None)
    with settings.use_profile(profile) as active:
        yield active


@pytest_asyncio.fixture()
async def filled_waypoints(create_request):
    """Both default containers filled with just the required fields."""
    waypoints = create_request.waypoints
    await waypoints.ensure_container_count(2)
    pickup = await waypoints.fill_container(0, minimal_waypoint_data(PointType.PICKUP, 1))
    delivery = await waypoints.fill_container(1, minimal_waypoint_data(PointType.DELIVERY, 3))
    return [pickup, delivery]
