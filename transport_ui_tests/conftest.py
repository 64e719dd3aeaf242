import random

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError, expect

from transport_ui_tests.cleanup import AuctionCleanup, CreatedAuctions, cookie_header
from transport_ui_tests.config import settings
from transport_ui_tests.log import get_logger
from transport_ui_tests.playwright_client import PlaywrightClient
from transport_ui_tests.wizard import CreateTransportRequest

log = get_logger("fixtures")


@pytest_asyncio.fixture()
async def playwright_client():
    """Launch a browser for the active profile; skip when none can start."""
    client = PlaywrightClient(
        browser_type=settings.browser_type,
        headless=settings.headless,
        timeout=settings.timeouts.action,
        navigation_timeout=settings.timeouts.navigation,
        storage_state_path=settings.auth_state_path,
        base_url=settings.base_url or None,
    )
    try:
        await client.connect()
    except PlaywrightError as exc:
        pytest.skip(f"Playwright {settings.browser_type} could not be launched: {exc}")
    expect.set_options(timeout=settings.timeouts.expect)
    try:
        yield client
    finally:
        await client.close()


@pytest_asyncio.fixture()
async def page(playwright_client):
    return playwright_client.page


@pytest.fixture()
def rng():
    seed = random.randrange(2**32)
    log.info(f"Random seed for this test: {seed}")
    return random.Random(seed)


@pytest_asyncio.fixture()
async def create_request(page, rng):
    """Wizard facade on a fresh page, already at the create request URL."""
    wizard = CreateTransportRequest(page, settings.timeouts, rng)
    await wizard.navigate()
    await wizard.verify_page_url()
    return wizard


@pytest_asyncio.fixture()
async def created_auctions(playwright_client):
    """Collect auction ids a test creates and delete them afterwards.

    Cleanup runs on pass and on failure; any delete that does not answer
    204 fails the test at teardown.
    """
    auctions = CreatedAuctions()
    yield auctions

    ids = auctions.drain()
    cookies = await playwright_client.context.cookies(settings.base_url) if ids else []
    cleanup = AuctionCleanup(
        settings.base_url,
        cookie=cookie_header(cookies),
        timeout=settings.cleanup_timeout,
    )
    await cleanup.delete_all(ids)
