"""Repeated, orderable sub-sections (waypoint containers).

Containers are addressed by position only. Removing position ``i`` shifts
every later container down by one, so batch removal always runs from the
highest position downward.
"""
from __future__ import annotations

from contextlib import suppress
from typing import Iterable, List

from playwright.async_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    TimeoutError as PlaywrightTimeout,
    expect,
)

from transport_ui_tests.config import Timeouts
from transport_ui_tests.errors import ContainerCountMismatch, ElementNotFound, IndexOutOfRange
from transport_ui_tests.log import get_logger


def removal_order(positions: Iterable[int]) -> List[int]:
    """Distinct positions, highest first."""
    return sorted(set(positions), reverse=True)


def plan_resize(current: int, target: int) -> tuple[int, List[int]]:
    """Return ``(adds, positions_to_remove)`` taking ``current`` to ``target``."""
    if target < 0:
        raise ValueError(f"target container count must be >= 0, got {target}")
    if current < target:
        return target - current, []
    return 0, removal_order(range(target, current))


class ContainerManager:
    def __init__(
        self,
        page: Page,
        timeouts: Timeouts,
        container_selector: str = ".draggable",
        add_button: str = "Add waypoint",
        remove_button: str = "Remove",
        tag: str = "containers",
    ) -> None:
        self._page = page
        self._timeouts = timeouts
        self._container_selector = container_selector
        self._add_button = add_button
        self._remove_button = remove_button
        self._log = get_logger(tag)

    @property
    def containers(self) -> Locator:
        return self._page.locator(self._container_selector)

    def nth(self, position: int) -> Locator:
        return self.containers.nth(position)

    async def count(self) -> int:
        return await self.containers.count()

    async def add(self) -> None:
        before = await self.count()
        self._log.info(f"Adding container (current count={before})")
        button = self._page.get_by_role("button", name=self._add_button)
        await self._wait_visible(button, f"button '{self._add_button}'")
        await button.scroll_into_view_if_needed()
        with suppress(PlaywrightError):
            await self._page.wait_for_load_state("networkidle", timeout=self._timeouts.dismiss)
        await button.click(timeout=self._timeouts.action)
        await self._expect_count(before + 1, "add")

    async def remove(self, position: int) -> None:
        total = await self.count()
        if position < 0 or position >= total:
            raise IndexOutOfRange(
                name="remove",
                message=f"position {position} out of bounds (count={total})",
                payload={"position": position, "count": total},
            )
        self._log.info(f"Removing container at position {position} (current count={total})")
        button = self.nth(position).get_by_role("button", name=self._remove_button)
        await self._wait_visible(button, f"button '{self._remove_button}' in container {position}")
        await button.scroll_into_view_if_needed()
        await button.click(timeout=self._timeouts.action)
        await self._expect_count(total - 1, "remove")

    async def remove_positions(self, positions: Iterable[int]) -> None:
        """Remove several containers, highest position first."""
        ordered = removal_order(positions)
        total = await self.count()
        out_of_range = [p for p in ordered if p < 0 or p >= total]
        if out_of_range:
            raise IndexOutOfRange(
                name="remove_positions",
                message=f"positions {out_of_range} out of bounds (count={total})",
                payload={"positions": ordered, "count": total},
            )
        for position in ordered:
            await self.remove(position)

    async def ensure_count(self, target: int) -> None:
        """Add or remove containers until exactly ``target`` remain."""
        current = await self.count()
        self._log.info(f"Ensuring container count = {target} (current={current})")
        adds, removals = plan_resize(current, target)
        for _ in range(adds):
            await self.add()
        if removals:
            await self.remove_positions(removals)
        await self.verify_count(target)

    async def verify_count(self, expected: int) -> None:
        self._log.info(f"Verifying container count equals {expected}")
        await self._expect_count(expected, "verify")

    async def _expect_count(self, expected: int, action: str) -> None:
        try:
            await expect(self.containers).to_have_count(expected, timeout=self._timeouts.expect)
        except AssertionError as exc:
            actual = await self.count()
            raise ContainerCountMismatch(
                name=action,
                message=f"expected {expected} containers, found {actual}",
                payload={"expected": expected, "actual": actual},
            ) from exc

    async def _wait_visible(self, locator: Locator, description: str) -> None:
        try:
            await locator.wait_for(state="visible", timeout=self._timeouts.expect)
        except PlaywrightTimeout as exc:
            raise ElementNotFound(
                name="containers",
                message=f"{description} not visible",
                payload={"target": description},
            ) from exc
