"""Response matching and body parsing for submissions."""

from __future__ import annotations

import re

import pytest

from transport_ui_tests.errors import MalformedResponseBody, MissingExpectedText
from transport_ui_tests.submission import (
    TRANSPORT_REQUESTS_PATH,
    VALIDATE_PATH,
    assert_field_errors,
    extract_ids,
    field_errors,
    normalize_path,
    path_matches,
)

EMAIL_ERROR = "Enter a valid email address."


def test_normalize_path_drops_query_and_trailing_slash():
    assert normalize_path("https://app.test/api/v1/transport-requests/?x=1") == "/api/v1/transport-requests"


def test_string_pattern_matches_exact_path_only():
    assert path_matches("https://app.test/api/v1/transport-requests/", TRANSPORT_REQUESTS_PATH)
    assert not path_matches("https://app.test/api/v1/transport-requests/validate/", TRANSPORT_REQUESTS_PATH)


def test_regex_pattern_searches_the_path():
    assert path_matches("https://app.test/api/v1/transport-requests/validate/", VALIDATE_PATH)
    assert path_matches("https://app.test/api/v1/auctions/12/", re.compile(r"/auctions/\d+$"))


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"auctions": [101, "102", " 103 "]}, [101, 102, 103]),
        ({"auctions": [True, "x", None, 5.5, 7]}, [7]),
        ({"auctions": []}, []),
        ({"auctions": 12}, []),
        ({"other": [1]}, []),
        (None, []),
        ("not json", []),
    ],
)
def test_extract_ids(body, expected):
    assert extract_ids(body) == expected


def test_extract_ids_with_custom_key():
    assert extract_ids({"ids": [1, 2]}, key="ids") == [1, 2]


def test_field_errors_collects_non_empty_entries():
    body = {"waypoints": [{"contactEmail": [EMAIL_ERROR]}, {}, {"contactEmail": []}, "junk"]}
    assert field_errors(body, "waypoints", "contactEmail") == [[EMAIL_ERROR]]


@pytest.mark.parametrize("body", [None, [], {"waypoints": {}}, {"cargo": []}])
def test_field_errors_rejects_wrong_shape(body):
    with pytest.raises(MalformedResponseBody):
        field_errors(body, "waypoints", "contactEmail")


def test_assert_field_errors_accepts_list_or_string_entries():
    assert_field_errors([[EMAIL_ERROR], f"['{EMAIL_ERROR}']"], EMAIL_ERROR, "waypoints[*].contactEmail")


def test_assert_field_errors_requires_at_least_one_error():
    with pytest.raises(MissingExpectedText):
        assert_field_errors([], EMAIL_ERROR, "waypoints[*].contactEmail")


def test_assert_field_errors_requires_message_in_every_error():
    with pytest.raises(MissingExpectedText) as excinfo:
        assert_field_errors([[EMAIL_ERROR], ["Required."]], EMAIL_ERROR, "waypoints[*].contactEmail")
    assert excinfo.value.missing == ["['Required.']"]
