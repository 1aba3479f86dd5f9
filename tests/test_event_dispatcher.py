import pytest

from engagement_harness.errors import DispatchPreconditionError
from engagement_harness.events import EventDispatcher
from engagement_harness.forms import FormState, validate_form
from engagement_harness.sessions import SessionManager


@pytest.fixture
def dispatcher(session_manager: SessionManager, activity_log, preview) -> EventDispatcher:
    return EventDispatcher(session_manager, activity_log, preview)


@pytest.fixture
async def ready(session_manager: SessionManager, fake_sdk):
    await session_manager.on_form_state(FormState(app_id="X", user_id="U"))
    return fake_sdk.sessions[-1]


async def test_send_requires_a_ready_session(dispatcher: EventDispatcher) -> None:
    with pytest.raises(DispatchPreconditionError):
        await dispatcher.send("click", None)


async def test_send_requires_an_event_name(dispatcher: EventDispatcher, ready) -> None:
    with pytest.raises(DispatchPreconditionError):
        await dispatcher.send("", {"a": 1})
    assert ready.sent == []


async def test_send_form_requires_a_valid_form(dispatcher: EventDispatcher, ready) -> None:
    form = validate_form(FormState(app_id="X", user_id="U", event_name="e", event_payload_raw="{"))
    with pytest.raises(DispatchPreconditionError):
        await dispatcher.send_form(form)
    assert ready.sent == []


async def test_send_logs_clears_preview_and_forwards(
    dispatcher: EventDispatcher, ready, preview, activity_log
) -> None:
    preview.update("<p>stale</p>")
    form = validate_form(FormState(app_id="X", user_id="U", event_name="click", event_payload_raw='{"a":1}'))

    entry = await dispatcher.send_form(form)

    assert entry.message == "Send event"
    assert entry.payload == {"eventName": "click", "eventPayload": {"a": 1}}
    assert activity_log.snapshot()[0] == entry
    assert preview.template == ""
    assert ready.sent == [("click", {"a": 1})]


async def test_blank_payload_is_sent_as_null(dispatcher: EventDispatcher, ready) -> None:
    form = validate_form(FormState(app_id="X", user_id="U", event_name="click"))
    await dispatcher.send_form(form)
    assert ready.sent == [("click", None)]


async def test_send_failure_propagates_after_logging(
    dispatcher: EventDispatcher, ready, preview, activity_log
) -> None:
    preview.update("<p>stale</p>")
    ready.send_error = RuntimeError("rejected")

    with pytest.raises(RuntimeError, match="rejected"):
        await dispatcher.send("click", {"a": 1})

    assert activity_log.snapshot()[0].message == "Send event"
    assert preview.template == ""


async def test_engagement_after_send_lands_in_preview(dispatcher: EventDispatcher, ready, preview) -> None:
    await dispatcher.send("click", None)
    ready.push("<p>offer</p>")
    assert preview.template == "<p>offer</p>"
