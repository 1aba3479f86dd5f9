# engagement_harness/activity_log/__init__.py
"""
Operator-facing activity log.

Provides the monotonic clock, the immutable entry model and the append-only
log store that records every lifecycle and user action of the harness.
"""

from .clock import MonotonicClock
from .models import LogEntry
from .store import ActivityLog, render_entry

__all__ = [
    "MonotonicClock",
    "LogEntry",
    "ActivityLog",
    "render_entry",
]
