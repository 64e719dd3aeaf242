"""Environment-driven profile configuration."""

from __future__ import annotations

import pytest

from transport_ui_tests.config import Timeouts, UiTestConfig, build_profile
from transport_ui_tests.env_defaults import load_env_defaults, parse_env_lines

NO_FILE_ENV = {"ENV": "does-not-exist"}


def test_parse_env_lines_skips_comments_and_strips_quotes():
    text = """
    # comment
    BASE_URL="https://stage.example.com"
    PLAYWRIGHT_HEADLESS='false'
    EMPTY=
    not a pair
    UI_TIMEOUT_MS = 5000
    """
    assert parse_env_lines(text) == {
        "BASE_URL": "https://stage.example.com",
        "PLAYWRIGHT_HEADLESS": "false",
        "EMPTY": "",
        "UI_TIMEOUT_MS": "5000",
    }


def test_missing_env_file_gives_no_defaults():
    assert load_env_defaults("does-not-exist") == {}


def test_defaults_without_environment():
    profile = build_profile("primary", NO_FILE_ENV)

    assert profile.base_url == ""
    assert profile.auth_state_path == ".auth/auth.json"
    assert profile.browser_type == "chromium"
    assert profile.headless is True
    assert profile.timeouts == Timeouts()
    assert profile.cleanup_timeout == 30.0


def test_environment_overrides():
    profile = build_profile(
        "primary",
        {
            **NO_FILE_ENV,
            "BASE_URL": "https://stage.example.com",
            "PLAYWRIGHT_HEADLESS": "no",
            "PLAYWRIGHT_BROWSER": "firefox",
            "UI_TIMEOUT_MS": "2500",
            "UI_NAVIGATION_TIMEOUT_MS": "60000",
            "CLEANUP_TIMEOUT_S": "5",
        },
    )

    assert profile.base_url == "https://stage.example.com"
    assert profile.headless is False
    assert profile.browser_type == "firefox"
    assert profile.timeouts.action == 2500
    assert profile.timeouts.navigation == 60000
    assert profile.timeouts.visible == Timeouts.visible
    assert profile.cleanup_timeout == 5.0


def test_non_integer_timeout_is_rejected():
    with pytest.raises(RuntimeError):
        build_profile("primary", {**NO_FILE_ENV, "UI_TIMEOUT_MS": "soon"})


def test_use_profile_restores_previous_profile():
    config = UiTestConfig({**NO_FILE_ENV, "BASE_URL": "https://stage.example.com"})
    assert config.has_target

    with config.use_profile(config.derive("mock", base_url="http://127.0.0.1:5000")) as active:
        active.timeouts.action = 1
        assert config.base_url == "http://127.0.0.1:5000"
        assert config.profile.name == "mock"

    assert config.base_url == "https://stage.example.com"
    assert config.timeouts.action == Timeouts.action


def test_no_base_url_means_no_target():
    assert not UiTestConfig(NO_FILE_ENV).has_target


def test_url_joins_paths():
    config = UiTestConfig({**NO_FILE_ENV, "BASE_URL": "https://stage.example.com/app/"})
    assert config.url("/request/create") == "https://stage.example.com/app/request/create"
    assert config.url("api/v1/auctions/1/") == "https://stage.example.com/app/api/v1/auctions/1/"
