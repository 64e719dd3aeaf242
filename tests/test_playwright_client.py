"""Browser context options derived from the active profile."""

from __future__ import annotations

import pytest

from transport_ui_tests.playwright_client import PlaywrightClient


def test_context_options_include_base_url_and_existing_session(tmp_path):
    state = tmp_path / "auth.json"
    state.write_text('{"cookies": [], "origins": []}', encoding="utf-8")

    client = PlaywrightClient(base_url="https://stage.example.com", storage_state_path=str(state))

    assert client.context_options() == {
        "base_url": "https://stage.example.com",
        "storage_state": str(state),
    }


def test_missing_session_file_is_ignored(tmp_path):
    client = PlaywrightClient(storage_state_path=str(tmp_path / "missing.json"))
    assert client.context_options() == {}


def test_accessors_fail_before_connect():
    client = PlaywrightClient()
    with pytest.raises(RuntimeError):
        client.page
    with pytest.raises(RuntimeError):
        client.context
