"""Data shapes shared by the wizard step objects.

A step is populated from a ``StepData`` (field key -> value) and answers
with a ``ResolvedStepData`` holding what actually ended up in the UI. Field
keys are per-step enums; ``RawId`` is the explicit escape hatch for
addressing an element by its raw id.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

RANDOM = "RANDOM"


def is_random(value: Optional[str]) -> bool:
    """True for the ``RANDOM`` sentinel (case-insensitive)."""
    return isinstance(value, str) and value.strip().upper() == RANDOM


def is_blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


@dataclass(frozen=True)
class RawId:
    """A field addressed directly by its DOM id, bypassing the step's mapping."""

    element_id: str


FieldKey = Union[Enum, RawId]


class Strategy(Enum):
    DIRECT_ID = "direct_id"
    MAPPED_ID = "mapped_id"
    STRUCTURAL = "structural"


@dataclass(frozen=True)
class FieldSpec:
    """How a logical field key resolves to one element on the page."""

    logical_key: str
    strategy: Strategy
    target: str

    @property
    def selector(self) -> str:
        if self.strategy is Strategy.STRUCTURAL:
            return self.target if self.target.startswith("xpath=") else f"xpath={self.target}"
        return f'xpath=//*[@id="{self.target}"]'


def key_name(key: FieldKey) -> str:
    if isinstance(key, RawId):
        return key.element_id
    return key.name.lower()


@dataclass
class StepData:
    """Declarative input for one step; blank values are skipped, never cleared."""

    inputs: Dict[FieldKey, Optional[str]] = field(default_factory=dict)
    dropdowns: Dict[FieldKey, Optional[str]] = field(default_factory=dict)

    def present_inputs(self) -> Dict[FieldKey, str]:
        return {k: str(v) for k, v in self.inputs.items() if not is_blank(v)}

    def present_dropdowns(self) -> Dict[FieldKey, str]:
        return {k: str(v) for k, v in self.dropdowns.items() if not is_blank(v)}


@dataclass
class ResolvedStepData:
    """Values actually applied to the UI; the oracle for later verification."""

    inputs: Dict[FieldKey, str] = field(default_factory=dict)
    dropdowns: Dict[FieldKey, str] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not any(flatten_texts(self))

    def texts(self) -> List[str]:
        return flatten_texts(self)


@dataclass
class DropdownSelection:
    label: str
    code: Optional[str] = None


@dataclass
class SubmissionResult:
    status_code: int
    extracted_ids: List[int] = field(default_factory=list)
    body: Any = None


def _walk(value: Any) -> Iterable[str]:
    if isinstance(value, Enum):
        return
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            yield stripped
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        for f in dataclasses.fields(value):
            yield from _walk(getattr(value, f.name))
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from _walk(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _walk(item)


def flatten_texts(value: Any) -> List[str]:
    """Distinct non-blank string leaves of ``value``, in first-seen order.

    Walks resolved step records, mappings and sequences. Keys, enums and
    non-string scalars are not leaves.
    """
    return list(dict.fromkeys(_walk(value)))
