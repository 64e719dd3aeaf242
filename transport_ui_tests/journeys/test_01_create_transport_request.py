"""
Journey 01: Create Transport Request

1. **Positive** - Full request through every step, verified on review,
   submitted, and the created auctions deleted afterwards
2. **Negative** - Send gated on carriers, invalid contact emails rejected
3. **Components** - Waypoint container management on the real page

Prerequisites:
- BASE_URL of a deployment with the wizard at /request/create
- Authenticated session stored at AUTH_STATE_PATH
"""
import pytest

from transport_ui_tests.factories import (
    EMAIL_ERROR,
    INVALID_EMAILS,
    cargo_data,
    minimal_waypoint_data,
    review_data,
    waypoint_data,
)
from transport_ui_tests.model import RawId, StepData
from transport_ui_tests.steps import PointType, TransportMode, TripType
from transport_ui_tests.steps.waypoints import waypoint_field_id

CARRIER_ID = 6401
SEND = "Send request"


async def _prepare_route(create_request):
    waypoints = create_request.waypoints
    await waypoints.verify_active()
    await waypoints.ensure_container_count(2)
    await waypoints.select_route_type(TripType.ONE_WAY)
    await waypoints.select_transport_mode(TransportMode.ROAD)


# ============================================================================
# Phase 1: Positive
# ============================================================================

class TestCreateTransportRequest:
    """Happy path through the whole wizard."""

    @pytest.mark.asyncio
    async def test_01_full_request_is_created(self, create_request, created_auctions):
        await _prepare_route(create_request)
        waypoints = create_request.waypoints
        pickup = await waypoints.fill_container(0, waypoint_data(PointType.PICKUP, 1))
        delivery = await waypoints.fill_container(1, waypoint_data(PointType.DELIVERY, 3))

        await create_request.continue_()
        await create_request.cargo_info.verify_active()
        cargo = await create_request.cargo_info.fill(cargo_data())
        review = await create_request.review.fill(review_data())

        await create_request.continue_()
        await create_request.carriers.verify_active()
        await create_request.carriers.check_carrier(CARRIER_ID)

        await create_request.continue_()
        await create_request.review.verify_active()

        verify = create_request.verify
        await verify.verify_waypoint(0, pickup)
        await verify.verify_waypoint(1, delivery)
        await verify.verify_contains("//*[@id='cargo-info']", cargo, "cargo")
        await verify.verify_contains("//*[@id='form-review']", review, "review")

        result = await create_request.submission.submit_and_await(SEND)
        created_auctions.record(result.extracted_ids)
        assert result.extracted_ids, f"No auction ids in response: {result.body}"

        await verify.verify_contains("//*[@id='form-review']", review, "review")
        await verify.click_and_verify_active("//*[@id='tab-request-route']")
        await verify.verify_waypoint(0, pickup)
        await verify.verify_waypoint(1, delivery)
        await verify.click_and_verify_active("//*[@id='tab-request-cargo']")
        await verify.verify_contains("//*[@id='cargo-info']", cargo, "cargo")


# ============================================================================
# Phase 2: Negative
# ============================================================================

class TestCreateTransportRequestErrors:
    """Gating and validation errors."""

    @pytest.mark.asyncio
    async def test_01_send_disabled_without_carrier(self, create_request):
        await _prepare_route(create_request)
        waypoints = create_request.waypoints
        await waypoints.fill_container(0, minimal_waypoint_data(PointType.PICKUP, 1))
        await waypoints.fill_container(1, minimal_waypoint_data(PointType.DELIVERY, 3))

        await create_request.continue_()
        await create_request.cargo_info.verify_active()
        await create_request.continue_()
        await create_request.carriers.verify_active()
        await create_request.continue_()
        await create_request.review.verify_active()

        await create_request.verify.verify_button_disabled(SEND)

    @pytest.mark.asyncio
    async def test_02_required_fields_flagged(self, create_request):
        await _prepare_route(create_request)

        await create_request.continue_()

        checked = await create_request.verify.verify_required_fields_have_errors()
        assert checked > 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email", INVALID_EMAILS)
    async def test_03_invalid_email_rejected(self, create_request, email):
        await _prepare_route(create_request)
        emails = StepData(inputs={RawId(waypoint_field_id(p, "contactEmail")): email for p in range(2)})
        await create_request.waypoints.fill(emails)

        await create_request.submission.submit_and_expect_rejection(
            create_request.verify.button("Continue"),
            field="contactEmail",
            message=EMAIL_ERROR,
        )
        await create_request.verify.verify_field_error(waypoint_field_id(0, "contactEmail"), EMAIL_ERROR)


# ============================================================================
# Phase 3: Components
# ============================================================================

class TestWaypointContainers:
    """Container management on the live page."""

    @pytest.mark.asyncio
    async def test_01_grow_and_shrink(self, create_request):
        waypoints = create_request.waypoints
        await waypoints.ensure_container_count(4)
        assert await waypoints.get_container_count() == 4
        await waypoints.ensure_container_count(1)
        assert await waypoints.get_container_count() == 1
