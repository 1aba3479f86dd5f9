from engagement_harness.engagements import EngagementBridge, EngagementPreview
from engagement_harness.sdk import SessionOptions


def _entries(activity_log):
    return [(entry.message, entry.payload) for entry in reversed(activity_log.snapshot())]


async def test_every_push_is_logged_and_rendered(bridge: EngagementBridge, preview: EngagementPreview, fake_sdk, activity_log) -> None:
    session = await fake_sdk.create_session("X", "U", SessionOptions())
    bridge.subscribe(session)

    session.push("<p>first</p>")
    session.push("<p>first</p>")
    session.push("<p>second</p>")

    assert _entries(activity_log) == [
        ("Registered custom engagement listener", None),
        ("Engagement", {"template": "<p>first</p>"}),
        ("Engagement", {"template": "<p>first</p>"}),
        ("Engagement", {"template": "<p>second</p>"}),
    ]
    assert preview.template == "<p>second</p>"


async def test_cancelled_subscription_drops_pushes(bridge: EngagementBridge, preview: EngagementPreview, fake_sdk, activity_log) -> None:
    session = await fake_sdk.create_session("X", "U", SessionOptions())
    subscription = bridge.subscribe(session)
    listener = session.listeners[0]

    subscription.cancel()
    subscription.cancel()
    assert session.listeners == []

    # A push already captured by the SDK before detaching is still ignored
    listener("<p>late</p>")
    assert preview.template == ""
    assert len(activity_log) == 1


def test_preview_clear() -> None:
    preview = EngagementPreview()
    preview.update("<p>x</p>")
    preview.clear()
    assert preview.template == ""
