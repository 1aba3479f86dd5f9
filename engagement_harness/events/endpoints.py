# engagement_harness/events/endpoints.py
import logging
from fastapi import APIRouter, Depends, status
from typing import Annotated

from ..activity_log import LogEntry
from ..dependencies import get_harness
from ..errors import CollaboratorCallError, DispatchPreconditionError, SendNotAllowedError
from ..harness import EngagementHarness

logger = logging.getLogger(__name__)

events_router = APIRouter(prefix="/events", tags=["Events"])


@events_router.post("/send", response_model=LogEntry, status_code=status.HTTP_202_ACCEPTED)
async def send_event_endpoint(harness: Annotated[EngagementHarness, Depends(get_harness)]):
    """
    Fire the event described by the published form.

    Returns 409 when the form is invalid or no session is ready, and 502 when
    the SDK rejects the call. Only the precondition failure leaves no
    "Send event" entry in the activity log.
    """
    try:
        entry = await harness.send_current_event()
    except DispatchPreconditionError as e:
        logger.warning(f"API: Send rejected: {e}")
        raise SendNotAllowedError(detail=str(e))
    except Exception as e:
        logger.error(f"API: SDK send_event failed: {e}", exc_info=True)
        raise CollaboratorCallError(detail=f"Event send failed: {e}")
    return entry
