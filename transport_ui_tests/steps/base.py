"""Common machinery for one wizard step."""
from __future__ import annotations

import random
from enum import Enum
from typing import Callable, Tuple, Type

from playwright.async_api import Page

from transport_ui_tests.config import Timeouts
from transport_ui_tests.dropdown import DropdownLocators, DropdownSelector, SelectMode
from transport_ui_tests.fields import FieldFiller
from transport_ui_tests.locators import LocatorResolver, by_id
from transport_ui_tests.log import get_logger
from transport_ui_tests.model import (
    DropdownSelection,
    FieldKey,
    FieldSpec,
    RawId,
    ResolvedStepData,
    StepData,
    Strategy,
    is_random,
    key_name,
)
from transport_ui_tests.verifier import Verifier


class FieldCategory(Enum):
    INPUT = "input"
    DROPDOWN = "dropdown"


SpecFor = Callable[[FieldKey, FieldCategory], FieldSpec]


def multiselect_locators(element_id: str) -> DropdownLocators:
    """Opener and option XPaths of a multiselect widget rooted at ``element_id``."""
    return DropdownLocators(
        opener=f"//*[@id='{element_id}']//*[contains(@class,'multiselect-wrapper')] | //*[@id='{element_id}']",
        options=f"//*[@id='{element_id}-dropdown']//*[self::li or @role='option']",
    )


class WizardStep:
    """A step of the create-transport-request wizard.

    Subclasses name their tab and, separately, the enums of text inputs and
    of dropdowns they understand. The mapping from key to element id is total
    over those enums plus ``RawId``; a key used in the other category's slot
    is rejected.
    """

    tab_id: str = ""
    tag: str = "step"
    input_keys: Tuple[Type[Enum], ...] = ()
    dropdown_keys: Tuple[Type[Enum], ...] = ()

    def __init__(self, page: Page, timeouts: Timeouts, rng: random.Random | None = None) -> None:
        self.page = page
        self.timeouts = timeouts
        self.resolver = LocatorResolver(page, timeouts)
        self.filler = FieldFiller(self.resolver, tag=self.tag)
        self.dropdowns = DropdownSelector(page, timeouts, tag=self.tag, rng=rng)
        self.verifier = Verifier(page, timeouts)
        self.log = get_logger(self.tag)

    @property
    def tab(self) -> str:
        return by_id(self.tab_id)

    async def verify_active(self) -> None:
        self.log.info(f"Verifying active step is {self.tag}")
        await self.verifier.verify_active(self.tab, label=f"{self.tag} step")

    async def open(self) -> None:
        """Navigate to this step through its tab and assert it became active."""
        await self.verifier.click_and_verify_active(self.tab, label=f"{self.tag} step")

    def element_id(self, key: Enum) -> str:
        return str(key.value)

    def category_of(self, key: Enum) -> FieldCategory:
        if isinstance(key, self.input_keys):
            return FieldCategory.INPUT
        if isinstance(key, self.dropdown_keys):
            return FieldCategory.DROPDOWN
        raise TypeError(f"{type(self).__name__} does not know field {key!r}")

    def check_category(self, key: FieldKey, expected: FieldCategory | None) -> None:
        """Reject a known key used where the other category is expected.

        ``RawId`` carries no category and passes; ``None`` accepts either.
        """
        if isinstance(key, RawId):
            return
        actual = self.category_of(key)
        if expected is not None and actual is not expected:
            raise TypeError(
                f"{type(self).__name__}: {key!r} belongs to {actual.value} fields, not {expected.value} fields"
            )

    def field_spec(self, key: FieldKey, category: FieldCategory | None = None) -> FieldSpec:
        self.check_category(key, category)
        if isinstance(key, RawId):
            return FieldSpec(logical_key=key.element_id, strategy=Strategy.DIRECT_ID, target=key.element_id)
        return FieldSpec(logical_key=key_name(key), strategy=Strategy.MAPPED_ID, target=self.element_id(key))

    def dropdown_locators(self, key: FieldKey, spec: FieldSpec) -> DropdownLocators:
        self.check_category(key, FieldCategory.DROPDOWN)
        return multiselect_locators(spec.target)

    def retained(self, key: FieldKey, selection: DropdownSelection) -> str:
        """Which part of a selection is recorded as the resolved value."""
        return selection.label

    async def fill(self, data: StepData) -> ResolvedStepData:
        self.log.info(f"Filling {self.tag} step")
        return await self.apply(data, ResolvedStepData(), self.field_spec)

    async def apply(self, data: StepData, resolved: ResolvedStepData, spec_for: SpecFor) -> ResolvedStepData:
        """Fill inputs, then resolve dropdowns, recording what was applied.

        Every key is checked against its category before the page is touched.
        """
        inputs = [(key, spec_for(key, FieldCategory.INPUT), value) for key, value in data.present_inputs().items()]
        dropdowns = [
            (key, self.dropdown_locators(key, spec_for(key, FieldCategory.DROPDOWN)), choice)
            for key, choice in data.present_dropdowns().items()
        ]

        for key, spec, value in inputs:
            await self.filler.fill(spec, value)
            resolved.inputs[key] = value

        for key, locators, choice in dropdowns:
            if is_random(choice):
                selection = await self.dropdowns.select(locators)
            else:
                selection = await self.dropdowns.select(locators, SelectMode.BY_LABEL, choice)
            resolved.dropdowns[key] = self.retained(key, selection)
        return resolved
