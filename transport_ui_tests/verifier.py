"""Read-only assertions over the rendered wizard.

The verifier never changes wizard state, except in ``click_and_verify_active``
whose click is the navigation under test.
"""
from __future__ import annotations

import re
from contextlib import suppress
from typing import Any, List, Union

from playwright.async_api import Error as PlaywrightError, Locator, Page, expect

from transport_ui_tests.config import Timeouts
from transport_ui_tests.errors import (
    ElementNotFound,
    HarnessError,
    MissingExpectedText,
    RegionNotVisible,
    StepNotActive,
)
from transport_ui_tests.locators import to_xpath
from transport_ui_tests.log import get_logger
from transport_ui_tests.model import flatten_texts

ACTIVE = re.compile(r"(^|\s)active(\s|$)")

REQUIRED_LABELS = "//label[contains(@class,'form-label') and contains(@class,'required') and @for]"
WAYPOINT_BLOCKS = ".waypoints .pb-3"

Region = Union[str, Locator]


def validation_message_xpath(field_id: str) -> str:
    return (
        f"//*[@*='{field_id}']/following-sibling::*[@class='validation-message']"
        "/p[not(@style='display: none;')]"
    )


def field_error_xpath(field_id: str, message: str) -> str:
    return (
        f'//label[@*="{field_id}"]/following-sibling::div'
        f"//span[contains(@class,'error-message') and normalize-space(.)='{message}']"
    )


class Verifier:
    def __init__(self, page: Page, timeouts: Timeouts) -> None:
        self._page = page
        self._timeouts = timeouts
        self._log = get_logger("verify")

    def region(self, region: Region) -> Locator:
        """Locator for ``region``; XPath strings start with ``/`` or ``xpath=``."""
        if isinstance(region, str):
            selector = to_xpath(region) if region.startswith("/") else region
            return self._page.locator(selector).first
        return region

    async def verify_contains(self, region: Region, expected: Any, label: str = "block") -> None:
        """Assert every distinct string leaf of ``expected`` is rendered in ``region``.

        All values are checked; the raised error names the first missing one
        and lists the rest. Values that are substrings of other rendered text
        pass, so scope ``region`` as narrowly as the page allows.
        """
        block = self.region(region)
        await self.verify_region_visible(block, label)

        missing: List[str] = []
        for value in flatten_texts(expected):
            try:
                await expect(block).to_contain_text(value, timeout=self._timeouts.expect)
            except AssertionError:
                self._log.warning(f"✗ {label} is missing: {value}")
                missing.append(value)
            else:
                self._log.info(f"✓ {label} contains: {value}")
        if missing:
            raise MissingExpectedText(missing[0], label, missing)

    async def verify_waypoint(self, position: int, expected: Any) -> None:
        """``verify_contains`` scoped to the review block of one waypoint."""
        block = self._page.locator(WAYPOINT_BLOCKS).nth(position)
        await self.verify_contains(block, expected, label=f"waypoint {position}")

    async def verify_region_visible(self, block: Locator, label: str) -> None:
        try:
            await expect(block).to_be_visible(timeout=self._timeouts.expect)
        except AssertionError as exc:
            raise RegionNotVisible(
                name="verify_contains",
                message=f"{label} is not visible",
                payload={"region": label},
            ) from exc

    async def verify_active(self, tab: Region, label: str = "tab") -> None:
        """Assert ``tab`` is visible and carries the ``active`` class."""
        locator = self.region(tab)
        self._log.info(f"Verifying {label} is active")
        try:
            await expect(locator).to_be_visible(timeout=self._timeouts.expect)
            await expect(locator).to_have_class(ACTIVE, timeout=self._timeouts.expect)
        except AssertionError as exc:
            raise StepNotActive(
                name="verify_active",
                message=f"{label} is not visible and active",
                payload={"tab": label},
            ) from exc

    async def click_and_verify_active(self, tab: Region, label: str | None = None) -> None:
        locator = self.region(tab)
        label = label or str(tab)
        self._log.info(f"Clicking {label} and verifying it becomes active")
        await self._expect_visible(locator, label)
        with suppress(PlaywrightError):
            await locator.scroll_into_view_if_needed(timeout=self._timeouts.action)
        await locator.click(timeout=self._timeouts.action)
        await self.verify_active(locator, label)

    def button(self, name: str) -> Locator:
        return self._page.get_by_role("button", name=name).first

    async def is_button_disabled(self, name: str) -> bool:
        button = self.button(name)
        await self._expect_visible(button, f"button '{name}'")
        return await button.is_disabled()

    async def verify_button_disabled(self, name: str) -> None:
        self._log.info(f"Verifying button '{name}' is disabled")
        button = self.button(name)
        await self._expect_visible(button, f"button '{name}'")
        try:
            await expect(button).to_be_disabled(timeout=self._timeouts.expect)
        except AssertionError as exc:
            raise HarnessError(
                name="verify_button_disabled",
                message=f"button '{name}' is enabled",
                payload={"button": name},
            ) from exc

    async def verify_button_enabled(self, name: str) -> None:
        self._log.info(f"Verifying button '{name}' is enabled")
        button = self.button(name)
        await self._expect_visible(button, f"button '{name}'")
        try:
            await expect(button).to_be_enabled(timeout=self._timeouts.expect)
        except AssertionError as exc:
            raise HarnessError(
                name="verify_button_enabled",
                message=f"button '{name}' is disabled",
                payload={"button": name},
            ) from exc

    async def verify_required_fields_have_errors(self) -> int:
        """Every required label with a ``for`` must show its validation message.

        Returns the number of required fields checked.
        """
        labels = self._page.locator(to_xpath(REQUIRED_LABELS))
        count = await labels.count()
        self._log.info(f"Required labels found: {count}")
        checked = 0
        for i in range(count):
            label = labels.nth(i)
            field_for = await label.get_attribute("for")
            if not field_for:
                continue
            text = (await label.inner_text()).strip()
            self._log.info(f"Checking validation message for '{field_for}' ({text})")
            message = self._page.locator(to_xpath(validation_message_xpath(field_for))).first
            await self._expect_visible(message, f"validation message for '{field_for}'")
            checked += 1
        return checked

    async def verify_field_error(self, field_id: str, message: str) -> None:
        error = self._page.locator(to_xpath(field_error_xpath(field_id, message))).first
        await self._expect_visible(error, f"error '{message}' for '{field_id}'")

    async def _expect_visible(self, locator: Locator, description: str) -> None:
        try:
            await expect(locator).to_be_visible(timeout=self._timeouts.expect)
        except AssertionError as exc:
            raise ElementNotFound(
                name="verify",
                message=f"{description} is not visible",
                payload={"target": description},
            ) from exc
