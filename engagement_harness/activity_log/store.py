# engagement_harness/activity_log/store.py
import json
import logging
from collections import deque
from typing import Any, Deque, Optional, Tuple

from .clock import MonotonicClock
from .models import LogEntry

logger = logging.getLogger(__name__)


class ActivityLog:
    """
    Append-only, newest-first log of harness lifecycle and operator actions.

    The log is owned by a single harness instance. Entries are never mutated or
    removed; growth is unbounded for the lifetime of the process.
    """

    def __init__(self, clock: Optional[MonotonicClock] = None):
        self._clock = clock or MonotonicClock()
        self._entries: Deque[LogEntry] = deque()

    def append(self, message: str, payload: Optional[Any] = None) -> LogEntry:
        """Stamp a new entry and place it ahead of every existing one."""
        entry = LogEntry(timestamp=self._clock.now(), message=message, payload=payload)
        self._entries.appendleft(entry)
        if payload is None:
            logger.info(f"[{entry.formatted_time}] {message}")
        else:
            logger.info(f"[{entry.formatted_time}] {message} | payload: {json.dumps(payload, default=str)}")
        return entry

    def snapshot(self) -> Tuple[LogEntry, ...]:
        """Return a read-only copy of the log, newest entry first."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


def render_entry(entry: LogEntry) -> str:
    """Render an entry the way the log view shows it: header line, then pretty payload."""
    header = f"{entry.message}  {entry.formatted_time}"
    if entry.payload is None:
        return header
    return f"{header}\n{json.dumps(entry.payload, indent=2, default=str)}"
