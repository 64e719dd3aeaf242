"""Synthetic field values for populating the wizard.

Values are not seeded; uniqueness across runs relies on token length
(six upper-case alphanumerics give ~2e9 combinations).
"""
from __future__ import annotations

import string
from datetime import datetime, timedelta

from faker import Faker

fake = Faker()

PHONE_PREFIX = "+421911"
TOKEN_ALPHABET = string.ascii_uppercase + string.digits
DATE_FORMAT = "%d.%m.%Y %H:%M"


def random_int(low: int, high: int) -> int:
    """Random integer in ``[low, high]`` (both inclusive)."""
    return fake.random_int(min=low, max=high)


def token(length: int = 6) -> str:
    """Upper-case alphanumeric reference token."""
    return fake.lexify(text="?" * length, letters=TOKEN_ALPHABET)


def company_name() -> str:
    return f"{fake.company()} s.r.o."


def person_name() -> str:
    return fake.name()


def street() -> str:
    return f"{fake.street_name()} {random_int(1, 200)}"


def city() -> str:
    return fake.city()


def post_code() -> str:
    return fake.numerify("#####")


def phone() -> str:
    return f"{PHONE_PREFIX}{random_int(100000, 999999)}"


def email() -> str:
    return fake.email().lower()


def sentence() -> str:
    return fake.sentence()


def format_date_from_offset(days_offset: int, base: datetime | None = None) -> str:
    """Format ``base + days_offset`` days as ``dd.MM.yyyy HH:mm``."""
    base = base or datetime.now()
    return (base + timedelta(days=days_offset)).strftime(DATE_FORMAT)
