# engagement_harness/sdk/loopback.py
"""Offline engagement SDK that answers every event with a rendered engagement."""

import asyncio
import html
import json
import logging
from typing import Any, List, Optional
from uuid import uuid4

from .interfaces import (
    AbstractEngagementSDK,
    AbstractEngagementSession,
    EngagementCallback,
    SessionOptions,
    Unsubscribe,
)

logger = logging.getLogger(__name__)


def render_engagement(event_name: str, payload: Any, session_id: str) -> str:
    body = html.escape(json.dumps(payload, indent=2))
    return (
        f'<div class="engagement" data-session="{html.escape(session_id)}">'
        f"<h3>{html.escape(event_name)}</h3>"
        f"<pre>{body}</pre>"
        "</div>"
    )


class LoopbackEngagementSession(AbstractEngagementSession):
    def __init__(self, app_id: str, user_id: str, options: SessionOptions):
        self.session_id = uuid4().hex
        self.app_id = app_id
        self.user_id = user_id
        self.options = options
        self.sent_events: List[tuple] = []
        self._listeners: List[EngagementCallback] = []

    def on_engagement(self, callback: EngagementCallback) -> Unsubscribe:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def send_event(self, event_name: str, payload: Any) -> None:
        self.sent_events.append((event_name, payload))
        template = render_engagement(event_name, payload, self.session_id)
        # Deliver like a push: after the send call has returned to its caller
        asyncio.get_running_loop().call_soon(self._push, template)

    def _push(self, template: str) -> None:
        for listener in list(self._listeners):
            listener(template)


class LoopbackEngagementSDK(AbstractEngagementSDK):
    """Creates in-process sessions after a small simulated latency."""

    name = "loopback"

    def __init__(self, latency_seconds: float = 0.0):
        self.latency_seconds = latency_seconds
        self.sessions: List[LoopbackEngagementSession] = []

    async def create_session(
        self, app_id: str, user_id: str, options: SessionOptions
    ) -> LoopbackEngagementSession:
        if self.latency_seconds:
            await asyncio.sleep(self.latency_seconds)
        session = LoopbackEngagementSession(app_id, user_id, options)
        self.sessions.append(session)
        logger.info(f"Loopback session {session.session_id} created for app '{app_id}', user '{user_id}'")
        return session

    @property
    def last_session(self) -> Optional[LoopbackEngagementSession]:
        return self.sessions[-1] if self.sessions else None
