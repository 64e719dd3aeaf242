"""Cargo information step."""
from __future__ import annotations

from enum import Enum

from transport_ui_tests.steps.base import WizardStep


class CargoInput(Enum):
    VALUE = "cargo.value"
    MAX_LENGTH = "cargo.maxLength"
    WEIGHT = "cargo.weight"
    DESCRIPTION = "cargo.description"


class CargoDropdown(Enum):
    SPECIAL_REQUIREMENTS = "cargo.specialRequirements"
    TYPE = "cargo.type"
    LOAD_TYPE = "cargo.loadType"
    MAX_LENGTH_UNIT = "cargo.maxLengthUnit"
    WEIGHT_UNIT = "cargo.weightUnit"


class CargoInfoStep(WizardStep):
    tab_id = "button-step-Cargo info"
    tag = "cargo"
    input_keys = (CargoInput,)
    dropdown_keys = (CargoDropdown,)
