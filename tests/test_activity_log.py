import pytest
from pydantic import ValidationError

from engagement_harness.activity_log import ActivityLog, LogEntry, MonotonicClock, render_entry


def test_append_places_entry_first(activity_log: ActivityLog) -> None:
    activity_log.append("first")
    activity_log.append("second", {"k": 1})
    activity_log.append("third")

    messages = [entry.message for entry in activity_log.snapshot()]
    assert messages == ["third", "second", "first"]
    assert len(activity_log) == 3


def test_timestamps_never_decrease_across_appends(activity_log: ActivityLog) -> None:
    for index in range(50):
        activity_log.append(f"entry {index}")

    oldest_first = list(reversed(activity_log.snapshot()))
    stamps = [entry.timestamp for entry in oldest_first]
    assert stamps == sorted(stamps)
    assert all(round(stamp, 3) == stamp for stamp in stamps)


def test_clock_is_process_relative_and_monotonic() -> None:
    readings = iter([50.0, 50.0, 50.0012, 50.0003, 51.25])
    clock = MonotonicClock(counter=lambda: next(readings))

    assert clock.now() == pytest.approx(0.0)
    assert clock.now() == pytest.approx(0.001)
    # A counter that dips is clamped to the previous reading
    assert clock.now() == pytest.approx(0.001)
    assert clock.now() == pytest.approx(1.25)


def test_snapshot_is_a_copy(activity_log: ActivityLog) -> None:
    activity_log.append("one")
    snapshot = activity_log.snapshot()
    activity_log.append("two")

    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)


def test_entries_are_immutable(activity_log: ActivityLog) -> None:
    entry = activity_log.append("Init SDK", {"appId": "X"})
    with pytest.raises(ValidationError):
        entry.message = "changed"


def test_render_entry_includes_time_and_pretty_payload() -> None:
    entry = LogEntry(timestamp=1.5, message="Send event", payload={"eventName": "click"})
    rendered = render_entry(entry)

    assert rendered.splitlines()[0] == "Send event  1.500s."
    assert '"eventName": "click"' in rendered

    assert render_entry(LogEntry(timestamp=0.25, message="Registered")) == "Registered  0.250s."
