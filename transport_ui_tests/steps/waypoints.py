"""Waypoints (route) step: route type, transport mode and waypoint containers."""
from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from playwright.async_api import Page

from transport_ui_tests.config import Timeouts
from transport_ui_tests.containers import ContainerManager
from transport_ui_tests.dropdown import DropdownLocators
from transport_ui_tests.errors import HarnessError
from transport_ui_tests.locators import label_relative, to_xpath
from transport_ui_tests.model import (
    DropdownSelection,
    FieldKey,
    FieldSpec,
    RawId,
    ResolvedStepData,
    StepData,
    Strategy,
    key_name,
)
from transport_ui_tests.steps.base import FieldCategory, WizardStep
from transport_ui_tests.values import format_date_from_offset


class TripType(Enum):
    ONE_WAY = "ONE_WAY"
    ROUND_TRIP = "ROUND_TRIP"


class TransportMode(Enum):
    ROAD = "road"
    PLANE = "plane"
    SHIP = "ship"
    TRAIN = "train"
    TRUCK_PLANE = "truck-plane"


class PointType(Enum):
    PICKUP = "Pickup"
    DELIVERY = "Delivery"


class Availability(Enum):
    START = "availabilityStart"
    END = "availabilityEnd"


class WaypointInput(Enum):
    NAME = "name"
    STREET = "street"
    CITY = "city"
    POST_CODE = "postCode"
    CONTACT_NAME = "contactName"
    CONTACT_EMAIL = "contactEmail"
    CONTACT_PHONE = "contactPhone"
    REFERENCE = "reference"


class WaypointDropdown(Enum):
    COUNTRY = "country"


def waypoint_field_id(position: int, field: str) -> str:
    return f"waypoints[{position}].{field}"


@dataclass
class WaypointData(StepData):
    point_type: Optional[PointType] = None
    availability_start_offset: Optional[int] = None
    availability_end_offset: Optional[int] = None


@dataclass
class ResolvedWaypoint(ResolvedStepData):
    point_type: Optional[str] = None
    availability_start: Optional[str] = None
    availability_end: Optional[str] = None

    @property
    def country_code(self) -> Optional[str]:
        return self.dropdowns.get(WaypointDropdown.COUNTRY)


class WaypointsStep(WizardStep):
    tab_id = "button-step-Waypoints"
    tag = "waypoints"
    input_keys = (WaypointInput,)
    dropdown_keys = (WaypointDropdown,)

    def __init__(self, page: Page, timeouts: Timeouts, rng: random.Random | None = None) -> None:
        super().__init__(page, timeouts, rng)
        self.containers = ContainerManager(page, timeouts, tag=self.tag)

    # ---- route level -------------------------------------------------------------
    async def select_route_type(self, trip_type: TripType) -> None:
        self.log.info(f"Selecting route type: {trip_type.value}")
        radio = self.page.locator(to_xpath(f"//input[@type='radio' and @value='{trip_type.value}']"))
        await self.resolver.resolve(radio)
        await radio.check(timeout=self.timeouts.action)

    async def select_transport_mode(self, mode: TransportMode) -> None:
        """Click the button wrapping the ``fa-<mode>`` icon."""
        self.log.info(f"Selecting transport mode: {mode.value}")
        icon = self.page.locator(to_xpath(f"//i[contains(@class,'fa-{mode.value}')]")).first
        await icon.locator("..").click(timeout=self.timeouts.action)

    # ---- containers --------------------------------------------------------------
    async def ensure_container_count(self, count: int) -> None:
        await self.containers.ensure_count(count)

    async def get_container_count(self) -> int:
        return await self.containers.count()

    async def verify_container_count(self, expected: int) -> None:
        await self.containers.verify_count(expected)

    def field_spec_at(self, position: int, key: FieldKey, category: FieldCategory | None = None) -> FieldSpec:
        if isinstance(key, RawId):
            return super().field_spec(key)
        self.check_category(key, category)
        return FieldSpec(
            logical_key=key_name(key),
            strategy=Strategy.MAPPED_ID,
            target=waypoint_field_id(position, key.value),
        )

    def field_spec(self, key: FieldKey, category: FieldCategory | None = None) -> FieldSpec:
        return self.field_spec_at(0, key, category)

    def dropdown_locators(self, key: FieldKey, spec: FieldSpec) -> DropdownLocators:
        self.check_category(key, FieldCategory.DROPDOWN)
        return DropdownLocators(
            opener=f'//input[@id="{spec.target}"]',
            options=(
                "//li[contains(@class,'multiselect-option') and "
                f'starts-with(@id, "{spec.target}-multiselect-option-")]'
            ),
        )

    def retained(self, key: FieldKey, selection: DropdownSelection) -> str:
        if key is WaypointDropdown.COUNTRY:
            if not selection.code:
                raise HarnessError(
                    name="select_country",
                    message=f"could not parse a country code for '{selection.label}'",
                    payload={"label": selection.label},
                )
            return selection.code
        return selection.label

    async def select_point_type(self, position: int, point_type: PointType) -> None:
        """Check the pickup (first) or delivery (second) radio of a container."""
        self.log.info(f"Selecting waypoint type {point_type.value} (position {position})")
        radios = self.page.locator(to_xpath(f'//input[@name="{waypoint_field_id(position, "type")}"]'))
        index = 0 if point_type is PointType.PICKUP else 1
        await radios.nth(index).check(timeout=self.timeouts.action)

    async def set_calendar_date(
        self,
        position: int,
        days_offset: int,
        availability: Availability = Availability.START,
    ) -> str:
        """Type a ``dd.MM.yyyy HH:mm`` date and close the picker; returns the text written."""
        formatted = format_date_from_offset(days_offset)
        field_id = waypoint_field_id(position, availability.value)
        self.log.info(f"Setting {availability.value} for waypoint {position}: {formatted} (offset {days_offset}d)")

        date_input = await self.resolver.resolve(label_relative(field_id, "/following-sibling::div//input"))
        await date_input.fill(formatted)
        close = await self.resolver.resolve(
            label_relative(
                field_id,
                "/following-sibling::div//button[contains(@class,'dp__action_button') "
                "and contains(@class,'dp__action_cancel') and @type='button']",
            )
        )
        await close.click(timeout=self.timeouts.action)
        return formatted

    async def fill_input(self, position: int, field: WaypointInput, value: str) -> None:
        await self.filler.fill(self.field_spec_at(position, field, FieldCategory.INPUT), value)

    async def fill_container(self, position: int, data: WaypointData) -> ResolvedWaypoint:
        """Populate one container and return what was applied to it."""
        self.log.info(f"Filling container {position}")
        resolved = ResolvedWaypoint()
        if data.point_type is not None:
            await self.select_point_type(position, data.point_type)
            resolved.point_type = data.point_type.value
        if data.availability_start_offset is not None:
            resolved.availability_start = await self.set_calendar_date(
                position, data.availability_start_offset, Availability.START
            )
        if data.availability_end_offset is not None:
            resolved.availability_end = await self.set_calendar_date(
                position, data.availability_end_offset, Availability.END
            )
        await self.apply(data, resolved, lambda key, category: self.field_spec_at(position, key, category))
        return resolved
