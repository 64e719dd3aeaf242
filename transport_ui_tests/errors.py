"""Failure taxonomy for the wizard harness.

Every error is an ``AssertionError`` so pytest reports it as a failed
assertion; none of them is meant to be caught and recovered from inside a
test body.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(eq=False)
class HarnessError(AssertionError):
    """Raised when a harness operation fails."""

    name: str
    message: str
    payload: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:  # pragma: no cover - human readable helper
        return f"{self.name} failed ({self.message}) with payload={self.payload}"


class ElementNotFound(HarnessError):
    """No interactable element matched within the wait window."""


class AmbiguousElement(HarnessError):
    """More than one element matched where exactly one was expected."""


class NoOptionsAvailable(HarnessError):
    """A dropdown opened but exposed no visible option."""


class StepNotActive(HarnessError):
    """A wizard tab is hidden or lacks its ``active`` marker."""


class ContainerCountMismatch(HarnessError):
    """The number of waypoint containers did not reach the expected value."""


class IndexOutOfRange(HarnessError):
    """A container position lies outside ``[0, count)``."""


class RegionNotVisible(HarnessError):
    """The region to verify is not visible."""


class UnexpectedStatus(HarnessError):
    """An HTTP exchange returned a status other than the expected one."""


class MalformedResponseBody(HarnessError):
    """A response body could not be read as the expected JSON shape."""


class MissingExpectedText(HarnessError):
    """A resolved value is not rendered inside the verified region."""

    def __init__(self, value: str, region: str, missing: List[str] | None = None) -> None:
        missing = missing or [value]
        super().__init__(
            name="verify_contains",
            message=f"'{value}' not found in {region}",
            payload={"region": region, "missing": missing},
        )
        self.value = value
        self.missing = missing
