"""Fill a single field and commit it with Enter."""
from __future__ import annotations

from typing import Optional

from transport_ui_tests.locators import LocatorResolver, Target
from transport_ui_tests.log import get_logger
from transport_ui_tests.model import is_blank


class FieldFiller:
    def __init__(self, resolver: LocatorResolver, tag: str = "fill") -> None:
        self._resolver = resolver
        self._log = get_logger(tag)

    async def fill(self, target: Target, value: Optional[str]) -> bool:
        """Replace the field content with ``value`` and press Enter.

        Blank values are a no-op and return False. Filling may trigger
        client-side validation that later operations depend on.
        """
        if is_blank(value):
            self._log.debug(f"Skipping blank value for {target}")
            return False

        element = await self._resolver.resolve(target)
        self._log.info(f"Filling {_label(target)} with '{value}'")
        await element.fill(str(value))
        await element.press("Enter")
        return True


def _label(target: Target) -> str:
    logical_key = getattr(target, "logical_key", None)
    return f"'{logical_key}'" if logical_key else str(target)
