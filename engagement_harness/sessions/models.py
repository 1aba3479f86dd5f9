# engagement_harness/sessions/models.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional

from ..credentials import AuthCredential, NoCredential, select_credential
from ..forms import FormState


class SessionState(str, Enum):
    IDLE = "IDLE"
    INITIALIZING = "INITIALIZING"
    READY = "READY"
    REINITIALIZING = "REINITIALIZING"


class SessionKey(BaseModel):
    """
    The combination a session is created for.

    Two keys are equal exactly when app id, user id and credential all match,
    which is the comparison the session manager uses to decide whether to act.
    """

    model_config = ConfigDict(frozen=True)

    app_id: str
    user_id: str
    credential: AuthCredential

    @classmethod
    def from_form(cls, form: FormState) -> Optional["SessionKey"]:
        """Build the key for a form snapshot, or None while the credential is incomplete."""
        credential = select_credential(form)
        if credential is None:
            return None
        return cls(app_id=form.app_id, user_id=form.user_id, credential=credential)

    @property
    def is_anonymous(self) -> bool:
        return isinstance(self.credential, NoCredential)

    @property
    def init_message(self) -> str:
        if self.is_anonymous:
            return "Init SDK"
        return f"Init SDK with {self.credential.type} auth"

    def public_view(self) -> Dict[str, Any]:
        view: Dict[str, Any] = {"appId": self.app_id, "userId": self.user_id}
        if not self.is_anonymous:
            view.update(self.credential.public_view())
        return view


class SessionStatus(BaseModel):
    """Read-only view of the session manager for the operator surface."""
    state: SessionState
    key: Optional[Dict[str, Any]] = Field(default=None, description="Public view of the current session key.")
    pending_key: Optional[Dict[str, Any]] = None
    last_error: Optional[str] = None
    sessions_created: int = 0
