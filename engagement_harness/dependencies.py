# engagement_harness/dependencies.py
import logging
from fastapi import HTTPException, Request, status

from .harness import EngagementHarness

logger = logging.getLogger(__name__)


async def get_harness(request: Request) -> EngagementHarness:
    """
    Returns the harness owned by the application lifespan.

    Raises 503 when the lifespan has not started (or already shut down) the harness.
    """
    harness = getattr(request.app.state, "harness", None)
    if harness is None:
        logger.critical("Harness requested before application startup completed.")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Harness is not running.",
        )
    return harness
