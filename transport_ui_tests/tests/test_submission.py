"""Send-request gating, the observed submission and post-test cleanup."""
import pytest
from playwright.async_api import expect

from transport_ui_tests.errors import HarnessError, UnexpectedStatus
from transport_ui_tests.factories import cargo_data, review_data

pytestmark = pytest.mark.asyncio

SEND = "Send request"


async def _to_review(create_request, with_carrier):
    await create_request.continue_()
    await create_request.cargo_info.verify_active()
    await create_request.cargo_info.fill(cargo_data())
    review = await create_request.review.fill(review_data())
    await create_request.continue_()
    await create_request.carriers.verify_active()
    if with_carrier:
        await create_request.carriers.check_carrier(6401)
    await create_request.continue_()
    await create_request.review.verify_active()
    return review


async def test_send_is_disabled_without_a_carrier(create_request, filled_waypoints):
    await _to_review(create_request, with_carrier=False)

    assert await create_request.verify.is_button_disabled(SEND)
    await create_request.verify.verify_button_disabled(SEND)
    with pytest.raises(HarnessError):
        await create_request.verify.verify_button_enabled(SEND)


async def test_send_is_enabled_with_a_carrier(create_request, filled_waypoints):
    await _to_review(create_request, with_carrier=True)

    assert not await create_request.verify.is_button_disabled(SEND)
    await create_request.verify.verify_button_enabled(SEND)


async def test_submission_returns_auction_ids_and_cleanup_deletes_them(
    create_request, filled_waypoints, mock_wizard_server, created_auctions
):
    review = await _to_review(create_request, with_carrier=True)

    result = await create_request.submission.submit_and_await(SEND)
    created_auctions.record(result.extracted_ids)

    assert result.status_code == 200
    assert len(result.extracted_ids) == 1
    assert set(result.extracted_ids) == mock_wizard_server.state["auctions"]
    await expect(create_request.page.locator("#submit-status")).to_have_text("Request sent")

    await create_request.verify.verify_contains("//*[@id='form-review']", review, "review")
    await create_request.verify.click_and_verify_active("//*[@id='tab-request-route']")
    await create_request.verify.verify_waypoint(0, filled_waypoints[0])
    await create_request.verify.click_and_verify_active("//*[@id='tab-request-cargo']")


async def test_unexpected_status_is_reported(create_request, filled_waypoints):
    await _to_review(create_request, with_carrier=True)

    with pytest.raises(UnexpectedStatus) as excinfo:
        await create_request.submission.submit_and_await(SEND, expected_status=201)
    assert excinfo.value.payload["actual"] == 200
