"""Carrier selection step."""
from __future__ import annotations

from playwright.async_api import expect

from transport_ui_tests.errors import HarnessError
from transport_ui_tests.locators import by_id
from transport_ui_tests.steps.base import WizardStep


class CarriersStep(WizardStep):
    tab_id = "button-step-Carriers"
    tag = "carriers"

    async def check_carrier(self, carrier_id: str | int) -> None:
        """Tick the carrier checkbox whose input id is ``carrier_id``."""
        self.log.info(f"Checking carrier checkbox by id: {carrier_id}")
        checkbox = await self.resolver.resolve(by_id(str(carrier_id)))
        await checkbox.check(timeout=self.timeouts.action)
        try:
            await expect(checkbox).to_be_checked(timeout=self.timeouts.expect)
        except AssertionError as exc:
            raise HarnessError(
                name="check_carrier",
                message=f"carrier {carrier_id} did not stay checked",
                payload={"carrier_id": carrier_id},
            ) from exc
