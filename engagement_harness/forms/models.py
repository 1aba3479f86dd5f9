# engagement_harness/forms/models.py
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional


class AuthMethod(str, Enum):
    """Authentication strategies the SDK session can be established with."""
    NONE = "NONE"
    EMAIL = "EMAIL"
    OAUTH_FACEBOOK = "OAUTH_FACEBOOK"
    OAUTH_GOOGLE = "OAUTH_GOOGLE"
    OAUTH_APPLE = "OAUTH_APPLE"
    FIREBASE = "FIREBASE"
    TRUSTED_3RD_PARTY = "TRUSTED_3RD_PARTY"


ACCESS_TOKEN_METHODS = frozenset({
    AuthMethod.OAUTH_FACEBOOK,
    AuthMethod.OAUTH_GOOGLE,
    AuthMethod.OAUTH_APPLE,
    AuthMethod.FIREBASE,
})


class FormState(BaseModel):
    """
    Snapshot of the operator form.

    Only the editing layer and the debounced validator produce new snapshots;
    the validator's sole rewrites are the canonical payload and `is_valid`.
    """

    app_id: str = ""
    user_id: str = ""
    auth_method: AuthMethod = AuthMethod.NONE
    event_name: str = ""
    event_payload_raw: str = ""

    # Method-specific fields
    email: str = ""
    password: str = ""
    access_token: str = ""
    external_user_id: str = ""
    external_token: str = ""

    is_valid: bool = Field(default=False, description="Derived by the validator, never set by editors.")

    def identity_value(self) -> str:
        """Return the field that plays the role of the user id for the selected method."""
        if self.auth_method == AuthMethod.NONE:
            return self.user_id
        if self.auth_method == AuthMethod.EMAIL:
            return self.email
        if self.auth_method in ACCESS_TOKEN_METHODS:
            return self.access_token
        if self.auth_method == AuthMethod.TRUSTED_3RD_PARTY:
            return self.external_user_id
        raise ValueError(f"Unhandled auth method: {self.auth_method}")


# Every FormState field an operator may edit; `is_valid` is derived.
EDITABLE_FIELDS = frozenset(name for name in FormState.model_fields if name != "is_valid")

# Edits to these are held back for the longer identity debounce window.
IDENTITY_FIELDS = frozenset({"user_id", "email", "external_user_id"})


class FormEdit(BaseModel):
    """One raw edit coming from the operator surface."""
    field: str
    value: str


class FormEditBatch(BaseModel):
    """Partial form update; every provided field is applied as an individual edit."""
    app_id: Optional[str] = None
    user_id: Optional[str] = None
    auth_method: Optional[AuthMethod] = None
    event_name: Optional[str] = None
    event_payload_raw: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    access_token: Optional[str] = None
    external_user_id: Optional[str] = None
    external_token: Optional[str] = None

    def to_edits(self) -> list:
        edits = []
        for name, value in self.model_dump(exclude_none=True).items():
            if isinstance(value, AuthMethod):
                value = value.value
            edits.append(FormEdit(field=name, value=value))
        return edits
