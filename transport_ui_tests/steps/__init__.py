"""Step objects of the create-transport-request wizard."""
from transport_ui_tests.steps.base import FieldCategory, WizardStep, multiselect_locators
from transport_ui_tests.steps.cargo_info import CargoDropdown, CargoInfoStep, CargoInput
from transport_ui_tests.steps.carriers import CarriersStep
from transport_ui_tests.steps.review import ReviewInput, ReviewStep
from transport_ui_tests.steps.waypoints import (
    Availability,
    PointType,
    ResolvedWaypoint,
    TransportMode,
    TripType,
    WaypointData,
    WaypointDropdown,
    WaypointInput,
    WaypointsStep,
)

__all__ = [
    "Availability",
    "CargoDropdown",
    "CargoInfoStep",
    "CargoInput",
    "CarriersStep",
    "FieldCategory",
    "PointType",
    "ResolvedWaypoint",
    "ReviewInput",
    "ReviewStep",
    "TransportMode",
    "TripType",
    "WaypointData",
    "WaypointDropdown",
    "WaypointInput",
    "WaypointsStep",
    "WizardStep",
    "multiselect_locators",
]
