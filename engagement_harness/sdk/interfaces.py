# engagement_harness/sdk/interfaces.py
from abc import ABC, abstractmethod
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Callable, Optional

from ..credentials import AuthCredential

EngagementCallback = Callable[[str], None]
Unsubscribe = Callable[[], None]


class SessionOptions(BaseModel):
    """Options passed alongside app id and user id when a session is created."""
    model_config = ConfigDict(frozen=True)

    token: Optional[str] = Field(default=None, description="API token for the engagement backend.")
    container: Optional[str] = Field(default=None, description="Placeholder id the SDK renders into.")
    credential: Optional[AuthCredential] = None
    deployment: Optional[str] = None


class AbstractEngagementSession(ABC):
    """An active connection to the engagement backend for one session key."""

    @abstractmethod
    def on_engagement(self, callback: EngagementCallback) -> Unsubscribe:
        """Register a push listener; the returned callable detaches it."""
        pass

    @abstractmethod
    async def send_event(self, event_name: str, payload: Any) -> None:
        """Send a custom event; failures propagate to the caller unchanged."""
        pass

    async def close(self) -> None:
        """Release any resources held by the session."""
        return None


class AbstractEngagementSDK(ABC):
    """Entry point of the engagement SDK collaborator."""

    @abstractmethod
    async def create_session(
        self, app_id: str, user_id: str, options: SessionOptions
    ) -> AbstractEngagementSession:
        """Create a session; may raise, and the error is not retried here."""
        pass

    async def aclose(self) -> None:
        """Release SDK-wide resources such as HTTP clients."""
        return None
