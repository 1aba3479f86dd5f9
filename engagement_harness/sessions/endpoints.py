# engagement_harness/sessions/endpoints.py
import logging
from fastapi import APIRouter, Depends
from typing import Annotated

from ..dependencies import get_harness
from ..errors import CollaboratorCallError, SendNotAllowedError, SessionBusyError, SessionKeyIncompleteError
from ..harness import EngagementHarness
from .models import SessionStatus

logger = logging.getLogger(__name__)

session_router = APIRouter(prefix="/session", tags=["Session"])


@session_router.get("", response_model=SessionStatus)
async def get_session_status_endpoint(harness: Annotated[EngagementHarness, Depends(get_harness)]):
    """Return the session state machine's current state."""
    return harness.sessions.status()


@session_router.post("/reinitialize", response_model=SessionStatus)
async def reinitialize_session_endpoint(harness: Annotated[EngagementHarness, Depends(get_harness)]):
    """Re-create the SDK session for the latest complete form key."""
    try:
        await harness.sessions.reinitialize()
    except (SessionKeyIncompleteError, SessionBusyError) as e:
        raise SendNotAllowedError(detail=str(e))
    except Exception as e:
        logger.error(f"API: Session re-initialization failed: {e}", exc_info=True)
        raise CollaboratorCallError(detail=f"Session creation failed: {e}")
    return harness.sessions.status()
