import asyncio
import logging
from typing import Any, List, Optional, Set, Tuple

import pytest

from engagement_harness.activity_log import ActivityLog, MonotonicClock
from engagement_harness.engagements import EngagementBridge, EngagementPreview
from engagement_harness.forms import DebouncedFormValidator, DebounceScheduler, DebounceWindows
from engagement_harness.sdk import (
    AbstractEngagementSDK,
    AbstractEngagementSession,
    EngagementCallback,
    SessionOptions,
    Unsubscribe,
)
from engagement_harness.sessions import SessionManager

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
)

FAST_WINDOWS = DebounceWindows(default_seconds=0.01, identity_seconds=0.08)


class StepCounter:
    """Deterministic counter for MonotonicClock: advances a fixed step per reading."""

    def __init__(self, step: float = 0.0015):
        self.value = 100.0
        self.step = step

    def __call__(self) -> float:
        current = self.value
        self.value += self.step
        return current


class FakeSession(AbstractEngagementSession):
    def __init__(self, app_id: str, user_id: str, options: SessionOptions):
        self.app_id = app_id
        self.user_id = user_id
        self.options = options
        self.listeners: List[EngagementCallback] = []
        self.sent: List[Tuple[str, Any]] = []
        self.send_error: Optional[Exception] = None
        self.closed = False

    def on_engagement(self, callback: EngagementCallback) -> Unsubscribe:
        self.listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self.listeners:
                self.listeners.remove(callback)

        return unsubscribe

    def push(self, template: str) -> None:
        for listener in list(self.listeners):
            listener(template)

    async def send_event(self, event_name: str, payload: Any) -> None:
        self.sent.append((event_name, payload))
        await asyncio.sleep(0)
        if self.send_error is not None:
            raise self.send_error

    async def close(self) -> None:
        self.closed = True


class FakeSDK(AbstractEngagementSDK):
    """Records every create_session call; can be gated or told to fail."""

    def __init__(self):
        self.calls: List[Tuple[str, str, SessionOptions]] = []
        self.sessions: List[FakeSession] = []
        self.fail_with: Optional[Exception] = None
        self.fail_user_ids: Set[str] = set()
        self.gate: Optional[asyncio.Event] = None
        self.closed = False

    async def create_session(self, app_id: str, user_id: str, options: SessionOptions) -> FakeSession:
        self.calls.append((app_id, user_id, options))
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if self.fail_with is not None:
            raise self.fail_with
        if user_id in self.fail_user_ids:
            raise ConnectionError(f"session refused for {user_id}")
        session = FakeSession(app_id, user_id, options)
        self.sessions.append(session)
        return session

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> MonotonicClock:
    return MonotonicClock(counter=StepCounter())


@pytest.fixture
def activity_log(clock) -> ActivityLog:
    return ActivityLog(clock)


@pytest.fixture
def preview() -> EngagementPreview:
    return EngagementPreview()


@pytest.fixture
def bridge(activity_log, preview) -> EngagementBridge:
    return EngagementBridge(activity_log, preview)


@pytest.fixture
def fake_sdk() -> FakeSDK:
    return FakeSDK()


@pytest.fixture
def session_manager(fake_sdk, activity_log, bridge) -> SessionManager:
    return SessionManager(
        fake_sdk,
        activity_log,
        bridge,
        SessionOptions(token="api-token", container="placeholder"),
    )


@pytest.fixture
def windows() -> DebounceWindows:
    return FAST_WINDOWS


@pytest.fixture
def scheduler() -> DebounceScheduler:
    return DebounceScheduler()


@pytest.fixture
def validator(scheduler, windows) -> DebouncedFormValidator:
    return DebouncedFormValidator(scheduler, windows)
