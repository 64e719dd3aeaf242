"""Resolve field specs to exactly one visible element."""
from __future__ import annotations

from typing import Union

from playwright.async_api import Locator, Page, TimeoutError as PlaywrightTimeout

from transport_ui_tests.config import Timeouts
from transport_ui_tests.errors import AmbiguousElement, ElementNotFound
from transport_ui_tests.model import FieldSpec, Strategy


def to_xpath(expr: str) -> str:
    """Prefix ``expr`` with ``xpath=`` unless it already carries it."""
    return expr if expr.startswith("xpath=") else f"xpath={expr}"


def by_id(element_id: str) -> str:
    return to_xpath(f'//*[@id="{element_id}"]')


def label_relative(field_id: str, path: str) -> FieldSpec:
    """Spec for an element found through ``label[@for=field_id]`` plus ``path``."""
    return FieldSpec(
        logical_key=field_id,
        strategy=Strategy.STRUCTURAL,
        target=f'//label[@for="{field_id}"]{path}',
    )


Target = Union[FieldSpec, str, Locator]


class LocatorResolver:
    """Turns specs and selectors into a single element, waiting a bounded time."""

    def __init__(self, page: Page, timeouts: Timeouts) -> None:
        self._page = page
        self._timeouts = timeouts

    @property
    def page(self) -> Page:
        return self._page

    def locate(self, target: Target) -> Locator:
        if isinstance(target, FieldSpec):
            return self._page.locator(target.selector)
        if isinstance(target, str):
            return self._page.locator(target)
        return target

    async def resolve(self, target: Target, timeout: int | None = None) -> Locator:
        """Wait for ``target`` to be visible and insist it is unique.

        Hidden matches are ignored; the returned locator covers visible
        elements only.

        Raises:
            ElementNotFound: nothing visible within the window
            AmbiguousElement: more than one visible element matched
        """
        locator = self.locate(target).filter(visible=True)
        description = _describe(target)
        window = timeout if timeout is not None else self._timeouts.visible
        try:
            await locator.first.wait_for(state="visible", timeout=window)
        except PlaywrightTimeout as exc:
            raise ElementNotFound(
                name="resolve",
                message=f"no visible element for {description} within {window}ms",
                payload={"target": description},
            ) from exc

        count = await locator.count()
        if count > 1:
            raise AmbiguousElement(
                name="resolve",
                message=f"{count} visible elements match {description}",
                payload={"target": description, "count": count},
            )
        return locator


def _describe(target: Target) -> str:
    if isinstance(target, FieldSpec):
        return f"{target.logical_key} ({target.strategy.value}: {target.target})"
    return str(target)
