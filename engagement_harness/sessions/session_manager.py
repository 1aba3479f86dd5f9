# engagement_harness/sessions/session_manager.py
import logging
from typing import Optional

from ..activity_log import ActivityLog
from ..engagements import EngagementBridge, EngagementSubscription
from ..errors import SessionBusyError, SessionKeyIncompleteError
from ..forms import FormState
from ..sdk import AbstractEngagementSDK, AbstractEngagementSession, SessionOptions
from .models import SessionKey, SessionState, SessionStatus

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Owns the single current SDK session and its engagement subscription.

    Every published form snapshot is reduced to a session key; a session is
    created only when that key differs from the last one acted on. While a
    creation call is in flight newer keys are queued and only the latest one is
    honored once the call settles.
    """

    def __init__(
        self,
        sdk: AbstractEngagementSDK,
        log: ActivityLog,
        bridge: EngagementBridge,
        base_options: Optional[SessionOptions] = None,
    ):
        self._sdk = sdk
        self._log = log
        self._bridge = bridge
        self._base_options = base_options or SessionOptions()

        self._state = SessionState.IDLE
        self._session: Optional[AbstractEngagementSession] = None
        self._subscription: Optional[EngagementSubscription] = None
        self._current_key: Optional[SessionKey] = None
        # Last key a creation was attempted for, successful or not
        self._target_key: Optional[SessionKey] = None
        self._pending_key: Optional[SessionKey] = None
        self._latest_key: Optional[SessionKey] = None
        self._last_error: Optional[str] = None
        self.sessions_created = 0
        logger.info(f"SessionManager initialized with SDK: {type(sdk).__name__}")

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_key(self) -> Optional[SessionKey]:
        return self._current_key

    @property
    def current_session(self) -> Optional[AbstractEngagementSession]:
        """The active session, only while it is ready to use."""
        if self._state != SessionState.READY:
            return None
        return self._session

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    @property
    def is_busy(self) -> bool:
        return self._state in (SessionState.INITIALIZING, SessionState.REINITIALIZING)

    def status(self) -> SessionStatus:
        return SessionStatus(
            state=self._state,
            key=self._current_key.public_view() if self._current_key else None,
            pending_key=self._pending_key.public_view() if self._pending_key else None,
            last_error=self._last_error,
            sessions_created=self.sessions_created,
        )

    async def on_form_state(self, form: FormState) -> None:
        """Form subscriber: act on the snapshot's key if it is complete and new."""
        key = SessionKey.from_form(form)
        if key is None:
            logger.debug("on_form_state: credential incomplete, no session action.")
            self._latest_key = None
            if self._pending_key is not None:
                logger.info("on_form_state: form no longer complete, dropping queued key.")
                self._pending_key = None
            return
        self._latest_key = key
        await self.request(key)

    async def reinitialize(self) -> None:
        """Re-create the session for the latest complete key, even if it did not change."""
        if self._latest_key is None:
            raise SessionKeyIncompleteError("The form does not hold a complete session key.")
        if self.is_busy:
            raise SessionBusyError("A session creation is already in flight; retry once it settles.")
        await self.request(self._latest_key, force=True)

    async def request(self, key: SessionKey, force: bool = False) -> None:
        if self.is_busy:
            if key == self._target_key:
                # Changed back to the key already in flight
                self._pending_key = None
            else:
                logger.info(f"request: creation in flight, queueing key {key.public_view()}")
                self._pending_key = key
            return

        if key == self._target_key and not force:
            logger.debug("request: key unchanged, keeping the current session.")
            return

        error: Optional[Exception] = None
        next_key: Optional[SessionKey] = key
        while next_key is not None:
            try:
                await self._initialize(next_key)
                error = None
            except Exception as e:
                error = e
            next_key = self._take_pending()

        if error is not None:
            raise error

    def _take_pending(self) -> Optional[SessionKey]:
        key, self._pending_key = self._pending_key, None
        if key is not None and key == self._target_key:
            return None
        return key

    def _options_for(self, key: SessionKey) -> SessionOptions:
        credential = None if key.is_anonymous else key.credential
        return self._base_options.model_copy(update={"credential": credential})

    def _detach(self) -> None:
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None
        self._session = None
        self._current_key = None

    async def _initialize(self, key: SessionKey) -> None:
        self._target_key = key
        self._state = (
            SessionState.REINITIALIZING if self._state == SessionState.READY else SessionState.INITIALIZING
        )
        self._log.append(key.init_message, key.public_view())
        logger.info(f"_initialize: creating SDK session ({self._state.value}) for {key.public_view()}")

        try:
            session = await self._sdk.create_session(key.app_id, key.user_id, self._options_for(key))
        except Exception as e:
            self._detach()
            self._state = SessionState.IDLE
            self._last_error = f"{type(e).__name__}: {e}"
            self._log.append("Init SDK failed", {**key.public_view(), "error": self._last_error})
            logger.error(f"_initialize: session creation failed for {key.public_view()}: {e}", exc_info=True)
            raise

        self._detach()
        self._session = session
        self._current_key = key
        self._last_error = None
        self._state = SessionState.READY
        self.sessions_created += 1
        self._subscription = self._bridge.subscribe(session)

    async def shutdown(self) -> None:
        session = self._session
        self._detach()
        self._state = SessionState.IDLE
        if session is not None:
            await session.close()
