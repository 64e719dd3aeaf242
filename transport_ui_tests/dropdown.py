"""Open a multiselect-style dropdown, pick one visible option, close it."""
from __future__ import annotations

import random
import re
from contextlib import suppress
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Pattern

from playwright.async_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeout,
)

from transport_ui_tests.config import Timeouts
from transport_ui_tests.errors import ElementNotFound, NoOptionsAvailable
from transport_ui_tests.locators import to_xpath
from transport_ui_tests.log import get_logger
from transport_ui_tests.model import DropdownSelection

OPTION_CODE = re.compile(r"multiselect-option-([A-Za-z0-9_-]+)$")


class SelectMode(Enum):
    RANDOM = "random"
    BY_LABEL = "by_label"
    BY_CODE = "by_code"


@dataclass(frozen=True)
class DropdownLocators:
    opener: str
    options: str
    code_pattern: Pattern[str] = field(default=OPTION_CODE)


def first_line(text: str) -> str:
    """First non-blank line of ``text`` (options may render several lines)."""
    raw = (text or "").strip()
    for line in raw.splitlines():
        if line.strip():
            return line.strip()
    return raw


def parse_code(id_attr: str | None, pattern: Pattern[str] = OPTION_CODE) -> Optional[str]:
    match = pattern.search(id_attr or "")
    return match.group(1).upper() if match else None


def matches(selection: DropdownSelection, mode: SelectMode, target: str) -> bool:
    wanted = target.strip().casefold()
    if mode is SelectMode.BY_CODE:
        return (selection.code or "").casefold() == wanted
    return selection.label.casefold() == wanted


class DropdownSelector:
    def __init__(
        self,
        page: Page,
        timeouts: Timeouts,
        tag: str = "dropdown",
        rng: random.Random | None = None,
    ) -> None:
        self._page = page
        self._timeouts = timeouts
        self._rng = rng or random.Random()
        self._log = get_logger(tag)

    async def select(
        self,
        locators: DropdownLocators,
        mode: SelectMode = SelectMode.RANDOM,
        target: str | None = None,
    ) -> DropdownSelection:
        """Pick one currently visible option and return its label and code.

        ``BY_LABEL`` falls back to matching the option code when no label
        matches. Hidden options are never candidates.

        Raises:
            ElementNotFound: opener never became visible, or no option matched ``target``
            NoOptionsAvailable: no visible option within the wait window
        """
        if mode is not SelectMode.RANDOM and not target:
            raise ValueError(f"{mode.value} selection needs a target value")

        await self._open(locators)
        candidates = await self._visible_options(locators)

        if mode is SelectMode.RANDOM:
            index = self._rng.randrange(len(candidates))
            option = candidates[index]
            selection = await self._describe(option, locators)
            self._log.info(f"Selecting random option #{index}: {selection.label} ({selection.code or 'N/A'})")
        else:
            option, selection = await self._find(candidates, locators, mode, target)
            self._log.info(f"Selecting option {selection.label} ({selection.code or 'N/A'})")

        await option.click(timeout=self._timeouts.action)
        await self._dismiss(locators)
        return selection

    async def _open(self, locators: DropdownLocators) -> None:
        opener = self._page.locator(to_xpath(locators.opener)).first
        if await opener.count() == 0:
            self._log.info(f"No opener found for {locators.opener}, assuming dropdown is already open")
            return
        try:
            await opener.wait_for(state="visible", timeout=self._timeouts.visible)
        except PlaywrightTimeout as exc:
            raise ElementNotFound(
                name="select",
                message=f"dropdown opener not visible: {locators.opener}",
                payload={"opener": locators.opener},
            ) from exc
        await opener.scroll_into_view_if_needed()
        await opener.click(timeout=self._timeouts.action)

    async def _visible_options(self, locators: DropdownLocators) -> List[Locator]:
        options = self._page.locator(to_xpath(locators.options))
        try:
            await options.filter(visible=True).first.wait_for(state="visible", timeout=self._timeouts.expect)
        except PlaywrightTimeout as exc:
            raise NoOptionsAvailable(
                name="select",
                message=f"no visible options for {locators.options}",
                payload={"options": locators.options},
            ) from exc

        total = await options.count()
        visible = [options.nth(i) for i in range(total) if await options.nth(i).is_visible()]
        self._log.debug(f"Dropdown options: {len(visible)} visible of {total}")
        if not visible:
            raise NoOptionsAvailable(
                name="select",
                message=f"{total} options but none visible for {locators.options}",
                payload={"options": locators.options, "total": total},
            )
        return visible

    async def _describe(self, option: Locator, locators: DropdownLocators) -> DropdownSelection:
        raw = await option.get_attribute("aria-label") or await option.inner_text()
        code = parse_code(await option.get_attribute("id"), locators.code_pattern)
        return DropdownSelection(label=first_line(raw), code=code)

    async def _find(
        self,
        candidates: List[Locator],
        locators: DropdownLocators,
        mode: SelectMode,
        target: str,
    ) -> tuple[Locator, DropdownSelection]:
        described = [(option, await self._describe(option, locators)) for option in candidates]
        for option, selection in described:
            if matches(selection, mode, target):
                return option, selection
        if mode is SelectMode.BY_LABEL:
            for option, selection in described:
                if matches(selection, SelectMode.BY_CODE, target):
                    return option, selection
        raise ElementNotFound(
            name="select",
            message=f"no visible option matches '{target}' ({mode.value})",
            payload={"options": locators.options, "available": [s.label for _, s in described]},
        )

    async def _dismiss(self, locators: DropdownLocators) -> None:
        """Best effort: a dropdown that stays open never fails the selection."""
        with suppress(PlaywrightError):
            await self._page.keyboard.press("Escape")
        with suppress(PlaywrightError):
            await self._page.locator(to_xpath(locators.options)).first.wait_for(
                state="hidden", timeout=self._timeouts.dismiss
            )
