# engagement_harness/events/dispatcher.py
import logging
from typing import Any

from ..activity_log import ActivityLog, LogEntry
from ..engagements import EngagementPreview
from ..errors import DispatchPreconditionError
from ..forms import FormState
from ..payload import parse_payload
from ..sessions import SessionManager

logger = logging.getLogger(__name__)


class EventDispatcher:
    """Sends operator-authored events through the current session."""

    def __init__(self, sessions: SessionManager, log: ActivityLog, preview: EngagementPreview):
        self._sessions = sessions
        self._log = log
        self._preview = preview

    async def send_form(self, form: FormState) -> LogEntry:
        """Send the event described by a validated form snapshot."""
        if not form.is_valid:
            raise DispatchPreconditionError("The form is not valid; fix it before sending an event.")
        return await self.send(form.event_name, parse_payload(form.event_payload_raw))

    async def send(self, event_name: str, payload: Any) -> LogEntry:
        """
        Log the attempt, clear the stale preview, then forward to the session.

        The log entry and the cleared preview happen before the SDK call, so the
        intent is recorded even when the call fails. Failures propagate unchanged.
        """
        session = self._sessions.current_session
        if session is None:
            raise DispatchPreconditionError(
                f"No ready SDK session (state: {self._sessions.state.value})."
            )
        if not event_name:
            raise DispatchPreconditionError("Event name must not be empty.")

        entry = self._log.append("Send event", {"eventName": event_name, "eventPayload": payload})
        self._preview.clear()
        logger.info(f"send: forwarding event '{event_name}' to the SDK session")
        await session.send_event(event_name, payload)
        return entry
