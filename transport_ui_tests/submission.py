"""Click a control and observe the HTTP exchange it triggers.

The response wait is registered before the click is issued
(``page.expect_response`` wraps the click), so a fast response cannot slip
past unobserved.
"""
from __future__ import annotations

import re
from typing import Any, List, Pattern, Union
from urllib.parse import urlparse

from playwright.async_api import (
    Error as PlaywrightError,
    Locator,
    Page,
    Response,
    TimeoutError as PlaywrightTimeout,
    expect,
)

from transport_ui_tests.config import Timeouts
from transport_ui_tests.errors import (
    ElementNotFound,
    HarnessError,
    MalformedResponseBody,
    MissingExpectedText,
    UnexpectedStatus,
)
from transport_ui_tests.locators import to_xpath
from transport_ui_tests.log import get_logger
from transport_ui_tests.model import SubmissionResult

PathPattern = Union[str, Pattern[str]]
Trigger = Union[str, Locator]

TRANSPORT_REQUESTS_PATH = "/api/v1/transport-requests"
VALIDATE_PATH = re.compile(r"/api/v1/transport-requests/validate")


def normalize_path(url: str) -> str:
    """Path of ``url`` with trailing slashes stripped."""
    return urlparse(url).path.rstrip("/")


def path_matches(url: str, pattern: PathPattern) -> bool:
    """Exact match for strings, ``search`` for compiled patterns."""
    path = normalize_path(url)
    if isinstance(pattern, str):
        return path == pattern.rstrip("/")
    return pattern.search(path) is not None


def extract_ids(body: Any, key: str = "auctions") -> List[int]:
    """Integer ids under ``body[key]``; anything absent or malformed gives ``[]``."""
    if not isinstance(body, dict):
        return []
    raw = body.get(key)
    if not isinstance(raw, list):
        return []
    ids: List[int] = []
    for item in raw:
        if isinstance(item, bool):
            continue
        if isinstance(item, int):
            ids.append(item)
        elif isinstance(item, str) and item.strip().isdigit():
            ids.append(int(item))
    return ids


def field_errors(body: Any, collection: str, field: str) -> List[Any]:
    """Non-empty ``field`` errors from every entry of ``body[collection]``."""
    if not isinstance(body, dict) or not isinstance(body.get(collection), list):
        raise MalformedResponseBody(
            name="field_errors",
            message=f"expected a JSON object with a '{collection}' array",
            payload={"body": body},
        )
    return [entry.get(field) for entry in body[collection] if isinstance(entry, dict) and entry.get(field)]


def assert_field_errors(errors: List[Any], message: str, where: str) -> None:
    """At least one error, and every one of them carries ``message``."""
    if not errors:
        raise MissingExpectedText(message, where)
    for errs in errors:
        if isinstance(errs, list):
            found = message in errs
        else:
            found = message in str(errs)
        if not found:
            raise MissingExpectedText(message, where, [str(errs)])


class SubmissionWatcher:
    def __init__(self, page: Page, timeouts: Timeouts) -> None:
        self._page = page
        self._timeouts = timeouts
        self._log = get_logger("submit")

    async def submit_and_await(
        self,
        button_name: str,
        path_pattern: PathPattern = TRANSPORT_REQUESTS_PATH,
        method: str = "POST",
        expected_status: int = 200,
        ids_key: str = "auctions",
    ) -> SubmissionResult:
        """Click the named button and return the ids from the matching response."""
        button = self._page.get_by_role("button", name=button_name).first
        self._log.info(f"Clicking '{button_name}' and waiting for {method} {_pattern_text(path_pattern)}")
        response = await self._click_and_wait(button, path_pattern, method)

        status = response.status
        self._log.info(f"Response status: {status}")
        if status != expected_status:
            raise UnexpectedStatus(
                name="submit_and_await",
                message=f"expected HTTP {expected_status}, got {status} from {response.url}",
                payload={"expected": expected_status, "actual": status, "url": response.url},
            )

        body = await self._read_json(response, required=False)
        ids = extract_ids(body, ids_key)
        self._log.info(f"Extracted {ids_key}: {ids}")
        return SubmissionResult(status_code=status, extracted_ids=ids, body=body)

    async def submit_and_expect_rejection(
        self,
        trigger: Trigger,
        field: str,
        message: str,
        path_pattern: PathPattern = VALIDATE_PATH,
        collection: str = "waypoints",
        method: str | None = None,
        expected_status: int | None = 400,
    ) -> SubmissionResult:
        """Click ``trigger`` and expect a 4xx with ``message`` on ``field`` errors."""
        locator = self._trigger(trigger)
        self._log.info(f"Triggering {trigger} and expecting rejection from {_pattern_text(path_pattern)}")
        response = await self._click_and_wait(locator, path_pattern, method)

        status = response.status
        self._log.info(f"Response status: {status}")
        rejected = 400 <= status < 500 and (expected_status is None or status == expected_status)
        if not rejected:
            raise UnexpectedStatus(
                name="submit_and_expect_rejection",
                message=f"expected a 4xx ({expected_status or 'any'}), got {status} from {response.url}",
                payload={"expected": expected_status, "actual": status, "url": response.url},
            )

        body = await self._read_json(response, required=True)
        errors = field_errors(body, collection, field)
        assert_field_errors(errors, message, f"{collection}[*].{field}")
        self._log.info(f"{len(errors)} '{field}' error(s) carry '{message}'")
        return SubmissionResult(status_code=status, body=body)

    def _trigger(self, trigger: Trigger) -> Locator:
        if isinstance(trigger, str):
            selector = to_xpath(trigger) if trigger.startswith("/") else trigger
            return self._page.locator(selector).first
        return trigger

    async def _click_and_wait(self, trigger: Locator, path_pattern: PathPattern, method: str | None) -> Response:
        try:
            await expect(trigger).to_be_visible(timeout=self._timeouts.expect)
        except AssertionError as exc:
            raise ElementNotFound(
                name="submit",
                message=f"trigger {trigger} is not visible",
                payload={"trigger": str(trigger)},
            ) from exc

        def is_match(response: Response) -> bool:
            if method and response.request.method.upper() != method.upper():
                return False
            return path_matches(response.url, path_pattern)

        try:
            async with self._page.expect_response(is_match, timeout=self._timeouts.navigation) as response_info:
                await trigger.click(timeout=self._timeouts.action)
            return await response_info.value
        except PlaywrightTimeout as exc:
            raise HarnessError(
                name="submit",
                message=f"no {method or 'any'} response for {_pattern_text(path_pattern)} "
                f"within {self._timeouts.navigation}ms",
                payload={"pattern": _pattern_text(path_pattern), "method": method},
            ) from exc

    async def _read_json(self, response: Response, required: bool) -> Any:
        try:
            return await response.json()
        except (ValueError, PlaywrightError) as exc:
            if required:
                raise MalformedResponseBody(
                    name="read_json",
                    message=f"response from {response.url} is not JSON",
                    payload={"url": response.url},
                ) from exc
            self._log.warning(f"Response from {response.url} is not JSON; treating ids as empty")
            return None


def _pattern_text(pattern: PathPattern) -> str:
    return pattern if isinstance(pattern, str) else pattern.pattern
