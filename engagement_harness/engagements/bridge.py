# engagement_harness/engagements/bridge.py
import logging
from typing import Optional

from ..activity_log import ActivityLog
from ..sdk import AbstractEngagementSession, Unsubscribe

logger = logging.getLogger(__name__)


class EngagementPreview:
    """Latest engagement template pushed for the current session."""

    def __init__(self):
        self._template = ""

    @property
    def template(self) -> str:
        return self._template

    def update(self, template: str) -> None:
        self._template = template

    def clear(self) -> None:
        self._template = ""


class EngagementSubscription:
    """Handle for one session's push listener. Pushes arriving after cancel() are dropped."""

    def __init__(self, session: AbstractEngagementSession):
        self.session = session
        self.active = True
        self._unsubscribe: Optional[Unsubscribe] = None

    def attach(self, unsubscribe: Unsubscribe) -> None:
        self._unsubscribe = unsubscribe

    def cancel(self) -> None:
        if not self.active:
            return
        self.active = False
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


class EngagementBridge:
    """
    Turns SDK engagement pushes into activity log entries and preview updates.

    Every push is logged and rendered, including repeats of the previous
    template.
    """

    def __init__(self, log: ActivityLog, preview: EngagementPreview):
        self.log = log
        self.preview = preview

    def subscribe(self, session: AbstractEngagementSession) -> EngagementSubscription:
        subscription = EngagementSubscription(session)

        def on_engagement(template: str) -> None:
            if not subscription.active:
                logger.debug("Dropping engagement push for a cancelled subscription.")
                return
            self.log.append("Engagement", {"template": template})
            self.preview.update(template)

        subscription.attach(session.on_engagement(on_engagement))
        self.log.append("Registered custom engagement listener")
        return subscription
