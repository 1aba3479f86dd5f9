# engagement_harness/forms/endpoints.py
import logging
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from typing import Annotated

from ..dependencies import get_harness
from ..errors import InvalidFormEditError
from ..harness import EngagementHarness
from .models import FormEditBatch, FormState

logger = logging.getLogger(__name__)

form_router = APIRouter(prefix="/form", tags=["Form"])


class FormView(BaseModel):
    """The last validated snapshot next to what the operator is still typing."""
    published: FormState
    draft: FormState


def _view(harness: EngagementHarness) -> FormView:
    return FormView(published=harness.validator.current(), draft=harness.validator.draft())


@form_router.get("", response_model=FormView)
async def get_form_endpoint(harness: Annotated[EngagementHarness, Depends(get_harness)]):
    """Return the published and draft form state."""
    return _view(harness)


@form_router.patch("", response_model=FormView, status_code=status.HTTP_202_ACCEPTED)
async def edit_form_endpoint(
    batch: FormEditBatch,
    harness: Annotated[EngagementHarness, Depends(get_harness)],
):
    """Apply each provided field as a separate edit. Validation happens after the debounce window."""
    edits = batch.to_edits()
    logger.info(f"API: Received form edits for fields: {[edit.field for edit in edits]}")
    for edit in edits:
        try:
            harness.validator.apply_edit(edit.field, edit.value)
        except ValueError as e:
            logger.warning(f"API: Rejected form edit for '{edit.field}': {e}")
            raise InvalidFormEditError(detail=str(e))
    return _view(harness)
