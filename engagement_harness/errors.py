# engagement_harness/errors.py
from fastapi import HTTPException, status


class HarnessError(Exception):
    """Base class for errors raised by the harness core."""


class DispatchPreconditionError(HarnessError):
    """Raised when an event is sent without a valid form or a ready session.

    The operator surface is expected to disable sending in that case, so this
    signals a caller bug rather than a recoverable runtime condition.
    """


class SessionKeyIncompleteError(HarnessError):
    """Raised when a session is requested before the form yields a complete key."""


class SessionBusyError(HarnessError):
    """Raised when a forced re-creation is requested while a creation is in flight."""


class HarnessHTTPError(HTTPException):
    """Base class for errors reported by the harness HTTP surface."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class SendNotAllowedError(HarnessHTTPError):
    """Event sending was requested before the form and session were ready."""

    def __init__(self, detail: str = "Form is not valid or no SDK session is ready."):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class CollaboratorCallError(HarnessHTTPError):
    """The engagement SDK reported a failure for a session or event call."""

    def __init__(self, detail: str = "Engagement SDK call failed."):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)


class InvalidFormEditError(HarnessHTTPError):
    """A form edit named an unknown field or carried an unusable value."""

    def __init__(self, detail: str = "Invalid form edit."):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)
