# engagement_harness/harness.py
import logging
from typing import Optional

from .activity_log import ActivityLog, LogEntry, MonotonicClock
from .engagements import EngagementBridge, EngagementPreview
from .events import EventDispatcher
from .forms import DebouncedFormValidator, DebounceScheduler, DebounceWindows, FormState
from .sdk import AbstractEngagementSDK, SessionOptions, build_sdk
from .sessions import SessionManager
from .settings import Settings

logger = logging.getLogger(__name__)


class EngagementHarness:
    """
    Composition root wiring the harness components for one operator.

    Form edits flow through the debounced validator into the session manager;
    the bridge and the dispatcher share the activity log and the preview.
    """

    def __init__(
        self,
        settings: Settings,
        sdk: Optional[AbstractEngagementSDK] = None,
        clock: Optional[MonotonicClock] = None,
    ):
        self.settings = settings
        self.sdk = sdk or build_sdk(settings)
        self.log = ActivityLog(clock)
        self.preview = EngagementPreview()
        self.scheduler = DebounceScheduler()
        self.validator = DebouncedFormValidator(
            self.scheduler,
            DebounceWindows.from_milliseconds(
                settings.debounce_window_ms, settings.identity_debounce_window_ms
            ),
        )
        self.bridge = EngagementBridge(self.log, self.preview)
        self.sessions = SessionManager(
            self.sdk,
            self.log,
            self.bridge,
            SessionOptions(
                token=settings.api_key,
                container=settings.container_id,
                deployment=settings.deployment,
            ),
        )
        self.dispatcher = EventDispatcher(self.sessions, self.log, self.preview)
        self.validator.subscribe(self.sessions.on_form_state)

    def initial_form(self) -> FormState:
        return FormState(
            app_id=self.settings.app_id,
            user_id=self.settings.default_user_id,
            event_payload_raw=self.settings.default_event_payload,
        )

    async def start(self) -> None:
        """Seed the form with bootstrap defaults; must run inside the event loop."""
        self.log.append("Harness started", {"sdk": type(self.sdk).__name__})
        self.validator.seed(self.initial_form())

    async def send_current_event(self) -> LogEntry:
        return await self.dispatcher.send_form(self.validator.current())

    async def shutdown(self) -> None:
        logger.info("Harness shutdown initiated.")
        self.scheduler.cancel_all()
        await self.sessions.shutdown()
        await self.sdk.aclose()
        logger.info("Harness shut down.")
