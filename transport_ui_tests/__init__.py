"""Browser harness for the create-transport-request wizard."""
from transport_ui_tests.model import RANDOM, RawId, ResolvedStepData, StepData
from transport_ui_tests.wizard import CreateTransportRequest

__all__ = ["RANDOM", "RawId", "ResolvedStepData", "StepData", "CreateTransportRequest"]
