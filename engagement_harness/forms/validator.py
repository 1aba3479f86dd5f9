# engagement_harness/forms/validator.py
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel

from ..payload import PayloadDecodeError, canonicalize
from .models import EDITABLE_FIELDS, IDENTITY_FIELDS, AuthMethod, FormState
from .scheduler import DebounceScheduler

logger = logging.getLogger(__name__)

FormSubscriber = Callable[[FormState], Awaitable[None]]

SEED_KEY = "__seed__"


def validate_form(state: FormState) -> FormState:
    """
    Apply the form validation rule to a snapshot and return the canonical result.

    The form is valid when the app id, the identity field of the selected auth
    method and the event name are all filled in, and the payload is either
    empty or valid JSON (whitespace alone is not). A valid payload is
    rewritten to its canonical pretty-printed form; a malformed one is kept
    exactly as typed.
    """
    payload_raw = state.event_payload_raw
    is_valid = bool(state.app_id) and bool(state.identity_value()) and bool(state.event_name)

    if payload_raw:
        try:
            payload_raw = canonicalize(payload_raw)
        except PayloadDecodeError as e:
            logger.debug(f"validate_form: payload rejected: {e.reason}")
            payload_raw = state.event_payload_raw
            is_valid = False

    return state.model_copy(update={"event_payload_raw": payload_raw, "is_valid": is_valid})


class DebounceWindows(BaseModel):
    """Quiet periods, in seconds, before an edited field is validated."""
    default_seconds: float = 0.5
    identity_seconds: float = 1.0

    @classmethod
    def from_milliseconds(cls, default_ms: int, identity_ms: int) -> "DebounceWindows":
        return cls(default_seconds=default_ms / 1000, identity_seconds=identity_ms / 1000)


class DebouncedFormValidator:
    """
    Coalesces raw form edits and publishes validated snapshots.

    Ordinary edits land in the draft immediately; identity edits are held back
    until their own, longer window elapses. Each field has its own timer, and
    whichever timer fires validates the latest draft, so superseded
    intermediate edits are never observed downstream.
    """

    def __init__(
        self,
        scheduler: DebounceScheduler,
        windows: Optional[DebounceWindows] = None,
        initial: Optional[FormState] = None,
    ):
        self._scheduler = scheduler
        self._windows = windows or DebounceWindows()
        self._draft: Dict[str, Any] = (initial or FormState()).model_dump(exclude={"is_valid"})
        self._held: Dict[str, str] = {}
        self._published = validate_form(FormState(**self._draft))
        self._subscribers: List[FormSubscriber] = []

    def subscribe(self, callback: FormSubscriber) -> None:
        self._subscribers.append(callback)

    def current(self) -> FormState:
        """The last published (validated) snapshot."""
        return self._published

    def draft(self) -> FormState:
        """What the operator currently sees, including edits still held back."""
        return FormState(**{**self._draft, **self._held}, is_valid=self._published.is_valid)

    def seed(self, state: FormState) -> None:
        """Replace the whole draft (e.g. with bootstrap defaults) and schedule validation."""
        self._draft = state.model_dump(exclude={"is_valid"})
        self._held.clear()
        self._scheduler.schedule(SEED_KEY, self._windows.default_seconds, self._settle)

    def apply_edit(self, field: str, value: str) -> None:
        """
        Record one raw edit and (re)start the debounce timer for that field.

        Raises ValueError for unknown fields or an unknown auth method; these
        are caller errors, not validation outcomes.
        """
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: '{field}'")

        if field == "auth_method":
            typed_value: Any = AuthMethod(value)
        else:
            typed_value = value

        if field in IDENTITY_FIELDS:
            self._held[field] = typed_value
            delay = self._windows.identity_seconds
        else:
            self._draft[field] = typed_value
            delay = self._windows.default_seconds

        logger.debug(f"apply_edit: '{field}' edited, validating in {delay:.3f}s")
        self._scheduler.schedule(field, delay, lambda: self._settle(field))

    async def _settle(self, field: Optional[str] = None) -> None:
        if field is not None and field in self._held:
            self._draft[field] = self._held.pop(field)

        state = validate_form(FormState(**self._draft))
        self._draft["event_payload_raw"] = state.event_payload_raw
        self._published = state
        logger.debug(f"_settle: published form state (is_valid={state.is_valid})")

        for callback in list(self._subscribers):
            await callback(state)
