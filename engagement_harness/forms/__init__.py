# engagement_harness/forms/__init__.py
"""
Operator form handling: the form snapshot model, the keyed debounce
scheduler and the debounced validator that publishes canonical snapshots.
"""

from .models import (
    ACCESS_TOKEN_METHODS,
    EDITABLE_FIELDS,
    IDENTITY_FIELDS,
    AuthMethod,
    FormEdit,
    FormEditBatch,
    FormState,
)
from .scheduler import DebounceScheduler
from .validator import DebouncedFormValidator, DebounceWindows, validate_form

__all__ = [
    "ACCESS_TOKEN_METHODS",
    "EDITABLE_FIELDS",
    "IDENTITY_FIELDS",
    "AuthMethod",
    "FormEdit",
    "FormEditBatch",
    "FormState",
    "DebounceScheduler",
    "DebouncedFormValidator",
    "DebounceWindows",
    "validate_form",
]
