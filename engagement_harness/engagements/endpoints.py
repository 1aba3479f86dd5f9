# engagement_harness/engagements/endpoints.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from pydantic import BaseModel
from typing import Annotated

from ..dependencies import get_harness
from ..harness import EngagementHarness

engagement_router = APIRouter(prefix="/engagement", tags=["Engagement"])


class EngagementView(BaseModel):
    template: str


@engagement_router.get("", response_model=EngagementView)
async def get_engagement_endpoint(harness: Annotated[EngagementHarness, Depends(get_harness)]):
    """Return the latest engagement template pushed for the current session."""
    return EngagementView(template=harness.preview.template)


@engagement_router.get("/preview", response_class=HTMLResponse)
async def preview_engagement_endpoint(harness: Annotated[EngagementHarness, Depends(get_harness)]):
    """Render the latest engagement as a standalone page (the custom placeholder)."""
    return HTMLResponse(
        "<!doctype html><html><body>"
        f'<div id="{harness.settings.container_id}">{harness.preview.template}</div>'
        "</body></html>"
    )
