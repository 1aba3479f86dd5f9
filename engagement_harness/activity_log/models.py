# engagement_harness/activity_log/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional


class LogEntry(BaseModel):
    """A single immutable record in the operator-facing activity log."""

    model_config = ConfigDict(frozen=True)

    timestamp: float = Field(
        description="Process-relative monotonic seconds, millisecond precision."
    )
    message: str
    payload: Optional[Any] = None

    @property
    def formatted_time(self) -> str:
        return f"{self.timestamp:.3f}s."
