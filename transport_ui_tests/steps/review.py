"""Review step: request-level references, then final confirmation."""
from __future__ import annotations

from enum import Enum

from transport_ui_tests.steps.base import WizardStep


class ReviewInput(Enum):
    REFERENCE = "reference"
    COST_CENTER = "costCenter"


class ReviewStep(WizardStep):
    tab_id = "button-step-Review"
    tag = "review"
    input_keys = (ReviewInput,)
