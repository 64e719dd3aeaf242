"""Client-side required markers and server-side email rejection."""
import pytest

from transport_ui_tests.errors import ElementNotFound, StepNotActive
from transport_ui_tests.factories import EMAIL_ERROR, INVALID_EMAILS
from transport_ui_tests.model import RawId, StepData
from transport_ui_tests.steps import WaypointInput
from transport_ui_tests.steps.waypoints import waypoint_field_id
from transport_ui_tests.submission import VALIDATE_PATH

pytestmark = pytest.mark.asyncio


async def test_continue_with_empty_waypoints_marks_required_fields(create_request):
    await create_request.continue_()

    checked = await create_request.verify.verify_required_fields_have_errors()

    # city and country in each of the two default containers
    assert checked == 4
    await create_request.waypoints.verify_active()


async def test_required_markers_clear_once_filled(create_request, filled_waypoints):
    await create_request.continue_()

    await create_request.cargo_info.verify_active()
    with pytest.raises(StepNotActive):
        await create_request.waypoints.verify_active()


async def test_field_error_absent_before_validation(create_request):
    with pytest.raises(ElementNotFound):
        await create_request.verify.verify_field_error(
            waypoint_field_id(0, WaypointInput.CONTACT_EMAIL.value), EMAIL_ERROR
        )


@pytest.mark.parametrize("email", INVALID_EMAILS)
async def test_invalid_email_is_rejected_for_every_container(create_request, email):
    waypoints = create_request.waypoints
    count = await waypoints.get_container_count()
    emails = StepData(
        inputs={RawId(waypoint_field_id(position, "contactEmail")): email for position in range(count)}
    )
    await waypoints.fill(emails)

    result = await create_request.submission.submit_and_expect_rejection(
        create_request.verify.button("Continue"),
        field="contactEmail",
        message=EMAIL_ERROR,
        path_pattern=VALIDATE_PATH,
    )

    assert result.status_code == 400
    for position in range(count):
        await create_request.verify.verify_field_error(waypoint_field_id(position, "contactEmail"), EMAIL_ERROR)
    await waypoints.verify_active()
