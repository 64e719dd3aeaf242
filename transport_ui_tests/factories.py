"""Randomised step data for the wizard scenarios."""
from __future__ import annotations

from transport_ui_tests import values
from transport_ui_tests.model import RANDOM, StepData
from transport_ui_tests.steps import (
    CargoDropdown,
    CargoInput,
    PointType,
    ReviewInput,
    WaypointData,
    WaypointDropdown,
    WaypointInput,
)

EMAIL_ERROR = "Enter a valid email address."

INVALID_EMAILS = [
    "plainaddress",
    "missing-at.domain.com",
    "name@domain",
    "@nouser.com",
    "name@.com",
    "name@domain..com",
    "name@domain.c",
    "name@@domain.com",
    "name domain@domain.com",
]


def _availability(point_type: PointType, offset: int) -> dict:
    if point_type is PointType.PICKUP:
        return {"availability_start_offset": offset}
    return {"availability_end_offset": offset}


def waypoint_data(point_type: PointType, offset: int) -> WaypointData:
    """A fully populated waypoint with a random country."""
    return WaypointData(
        point_type=point_type,
        inputs={
            WaypointInput.NAME: values.company_name(),
            WaypointInput.STREET: values.street(),
            WaypointInput.CITY: values.city(),
            WaypointInput.POST_CODE: values.post_code(),
            WaypointInput.CONTACT_NAME: values.person_name(),
            WaypointInput.CONTACT_EMAIL: values.email(),
            WaypointInput.CONTACT_PHONE: values.phone(),
            WaypointInput.REFERENCE: f"+{point_type.value} {values.token()}",
        },
        dropdowns={WaypointDropdown.COUNTRY: RANDOM},
        **_availability(point_type, offset),
    )


def minimal_waypoint_data(point_type: PointType, offset: int) -> WaypointData:
    """Only what the wizard requires: city, country and one availability date."""
    return WaypointData(
        point_type=point_type,
        inputs={WaypointInput.CITY: values.city()},
        dropdowns={WaypointDropdown.COUNTRY: RANDOM},
        **_availability(point_type, offset),
    )


def cargo_data() -> StepData:
    return StepData(
        inputs={
            CargoInput.VALUE: str(values.random_int(1, 100)),
            CargoInput.MAX_LENGTH: str(values.random_int(1, 100)),
            CargoInput.WEIGHT: str(values.random_int(1, 100)),
            CargoInput.DESCRIPTION: values.sentence(),
        },
        dropdowns={key: RANDOM for key in CargoDropdown},
    )


def review_data() -> StepData:
    return StepData(
        inputs={
            ReviewInput.REFERENCE: f"REF-{values.token()}",
            ReviewInput.COST_CENTER: f"CC-{values.random_int(1000, 9999)}",
        }
    )
