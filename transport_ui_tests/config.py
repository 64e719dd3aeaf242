"""Shared configuration for the transport-request UI tests.

Values come from the process environment, seeded with defaults from
``env/.env.<ENV>`` (ENV defaults to ``stage``):

- BASE_URL: root of the application under test (live journeys skip without it)
- AUTH_STATE_PATH: stored Playwright session used for the live application
- PLAYWRIGHT_HEADLESS / PLAYWRIGHT_BROWSER: browser launch options
- UI_TIMEOUT_MS / UI_VISIBLE_TIMEOUT_MS / UI_EXPECT_TIMEOUT_MS /
  UI_NAVIGATION_TIMEOUT_MS: bounded wait windows in milliseconds
- CLEANUP_TIMEOUT_S: HTTP timeout for post-test cleanup, in seconds
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from copy import deepcopy
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Mapping
from urllib.parse import urljoin

from transport_ui_tests.env_defaults import load_env_defaults

DEFAULT_ENV = "stage"


@dataclass
class Timeouts:
    """Bounded wait windows, in milliseconds."""

    action: int = 10_000
    visible: int = 15_000
    expect: int = 10_000
    navigation: int = 30_000
    dismiss: int = 3_000


@dataclass
class UiTargetProfile:
    """Concrete host + session settings for a UI test target."""

    name: str
    base_url: str
    auth_state_path: str | None = None
    browser_type: str = "chromium"
    headless: bool = True
    timeouts: Timeouts | None = None
    cleanup_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.timeouts is None:
            self.timeouts = Timeouts()


def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes"}


def _int(values: Mapping[str, str], key: str, default: int) -> int:
    raw = values.get(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{key} must be an integer, got {raw!r}") from exc


def build_profile(name: str, environ: Mapping[str, str]) -> UiTargetProfile:
    """Build a profile from ``environ`` layered over the env file of its ENV."""
    env_name = environ.get("ENV") or DEFAULT_ENV
    values: Dict[str, str] = dict(load_env_defaults(env_name))
    values.update({k: v for k, v in environ.items() if v != ""})

    timeouts = Timeouts(
        action=_int(values, "UI_TIMEOUT_MS", Timeouts.action),
        visible=_int(values, "UI_VISIBLE_TIMEOUT_MS", Timeouts.visible),
        expect=_int(values, "UI_EXPECT_TIMEOUT_MS", Timeouts.expect),
        navigation=_int(values, "UI_NAVIGATION_TIMEOUT_MS", Timeouts.navigation),
    )
    return UiTargetProfile(
        name=name,
        base_url=values.get("BASE_URL", ""),
        auth_state_path=values.get("AUTH_STATE_PATH", ".auth/auth.json"),
        browser_type=values.get("PLAYWRIGHT_BROWSER", "chromium"),
        headless=_truthy(values.get("PLAYWRIGHT_HEADLESS", "true")),
        timeouts=timeouts,
        cleanup_timeout=float(values.get("CLEANUP_TIMEOUT_S", "30")),
    )


class UiTestConfig:
    """Configuration resolved once per process.

    Tests read the active profile through the properties below;
    ``use_profile`` swaps it temporarily (the harness tests point it at the
    local mock server this way).
    """

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        environ = os.environ if environ is None else environ
        self.env_name: str = environ.get("ENV") or DEFAULT_ENV
        primary = build_profile("primary", environ)
        self._profiles: Dict[str, UiTargetProfile] = {primary.name: primary}
        self._active: UiTargetProfile = primary

    # ---- active profile helpers -------------------------------------------------
    @property
    def profile(self) -> UiTargetProfile:
        return self._active

    @property
    def base_url(self) -> str:
        return self._active.base_url

    @property
    def has_target(self) -> bool:
        return bool(self._active.base_url)

    @property
    def auth_state_path(self) -> str | None:
        return self._active.auth_state_path

    @property
    def browser_type(self) -> str:
        return self._active.browser_type

    @property
    def headless(self) -> bool:
        return self._active.headless

    @property
    def timeouts(self) -> Timeouts:
        return self._active.timeouts

    @property
    def cleanup_timeout(self) -> float:
        return self._active.cleanup_timeout

    # ---- profile orchestration --------------------------------------------------
    def profiles(self) -> List[UiTargetProfile]:
        return list(self._profiles.values())

    def derive(self, name: str, **overrides) -> UiTargetProfile:
        """Copy the active profile with ``overrides`` applied."""
        return replace(deepcopy(self._active), name=name, **overrides)

    @contextmanager
    def use_profile(self, profile: UiTargetProfile) -> Iterator[UiTargetProfile]:
        """Temporarily switch the active profile (a copy, so mutations don't leak)."""
        previous = self._active
        self._active = deepcopy(profile)
        try:
            yield self._active
        finally:
            self._active = previous

    # ---- utility helpers --------------------------------------------------------
    def url(self, path: str) -> str:
        """Return an absolute URL for the provided path."""
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


settings = UiTestConfig()
