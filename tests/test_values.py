"""Synthetic values used to populate the wizard."""

from __future__ import annotations

import re
from datetime import datetime

from transport_ui_tests import values


def test_token_is_uppercase_alphanumeric():
    token = values.token()
    assert re.fullmatch(r"[A-Z0-9]{6}", token)
    assert len(values.token(10)) == 10


def test_random_int_bounds_are_inclusive():
    seen = {values.random_int(1, 2) for _ in range(200)}
    assert seen == {1, 2}


def test_phone_uses_fixed_prefix():
    assert re.fullmatch(r"\+421911\d{6}", values.phone())


def test_company_name_and_post_code_shapes():
    assert values.company_name().endswith(" s.r.o.")
    assert re.fullmatch(r"\d{5}", values.post_code())


def test_email_is_lowercase():
    email = values.email()
    assert "@" in email
    assert email == email.lower()


def test_date_offset_formatting():
    base = datetime(2024, 12, 30, 8, 5)
    assert values.format_date_from_offset(3, base) == "02.01.2025 08:05"
    assert values.format_date_from_offset(-1, base) == "29.12.2024 08:05"
    assert values.format_date_from_offset(0, base) == "30.12.2024 08:05"
