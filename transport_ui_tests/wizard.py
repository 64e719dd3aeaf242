"""Facade over the whole create-transport-request wizard."""
from __future__ import annotations

import random
import re

from playwright.async_api import Page, TimeoutError as PlaywrightTimeout

from transport_ui_tests.config import Timeouts, settings
from transport_ui_tests.errors import HarnessError
from transport_ui_tests.log import get_logger
from transport_ui_tests.steps import CargoInfoStep, CarriersStep, ReviewStep, WaypointsStep
from transport_ui_tests.submission import SubmissionWatcher
from transport_ui_tests.verifier import Verifier

CREATE_REQUEST_PATH = "/request/create"
CREATE_REQUEST_URL = re.compile(r"/request/create$")

log = get_logger("wizard")


class CreateTransportRequest:
    """Entry point composing every step object, the verifier and the submission watcher."""

    def __init__(self, page: Page, timeouts: Timeouts | None = None, rng: random.Random | None = None) -> None:
        self.page = page
        self.timeouts = timeouts or settings.timeouts

        self.waypoints = WaypointsStep(page, self.timeouts, rng)
        self.cargo_info = CargoInfoStep(page, self.timeouts, rng)
        self.carriers = CarriersStep(page, self.timeouts, rng)
        self.review = ReviewStep(page, self.timeouts, rng)
        self.verify = Verifier(page, self.timeouts)
        self.submission = SubmissionWatcher(page, self.timeouts)

    async def navigate(self) -> None:
        log.info("Navigating to create transport request page")
        await self.page.goto(settings.url(CREATE_REQUEST_PATH))

    async def verify_page_url(self) -> None:
        log.info("Verifying create transport request page URL")
        try:
            await self.page.wait_for_url(CREATE_REQUEST_URL, timeout=self.timeouts.navigation)
        except PlaywrightTimeout as exc:
            raise HarnessError(
                name="verify_page_url",
                message=f"page is at {self.page.url}, not {CREATE_REQUEST_PATH}",
                payload={"url": self.page.url},
            ) from exc

    async def continue_(self) -> None:
        """Press the wizard's Continue button."""
        log.info("Clicking 'Continue'")
        await self.page.get_by_role("button", name="Continue").click(timeout=self.timeouts.action)
