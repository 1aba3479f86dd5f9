# engagement_harness/activity_log/endpoints.py
from fastapi import APIRouter, Depends, Query
from typing import Annotated, List, Optional

from ..dependencies import get_harness
from ..harness import EngagementHarness
from .models import LogEntry

logs_router = APIRouter(prefix="/logs", tags=["Activity Log"])


@logs_router.get("", response_model=List[LogEntry])
async def list_log_entries_endpoint(
    harness: Annotated[EngagementHarness, Depends(get_harness)],
    limit: Annotated[Optional[int], Query(ge=1, description="Return only the newest N entries.")] = None,
):
    """Return the activity log, newest entry first."""
    entries = harness.log.snapshot()
    if limit is not None:
        entries = entries[:limit]
    return list(entries)
