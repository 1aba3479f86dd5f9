# engagement_harness/credentials/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Literal, Union
from typing_extensions import Annotated


class _CredentialBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def public_view(self) -> Dict[str, Any]:
        """Non-secret parts of the credential, safe to show in the activity log."""
        return {"authMethod": self.type}  # type: ignore[attr-defined]


class NoCredential(_CredentialBase):
    """Anonymous (legacy) session: app id and user id only."""
    type: Literal["NONE"] = "NONE"

    def to_sdk_payload(self) -> Dict[str, Any]:
        return {}


class EmailCredential(_CredentialBase):
    type: Literal["EMAIL"] = "EMAIL"
    email: str
    password: str

    def public_view(self) -> Dict[str, Any]:
        return {"authMethod": self.type, "email": self.email}

    def to_sdk_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "email": self.email, "password": self.password}


class AccessTokenCredential(_CredentialBase):
    """OAuth provider or Firebase token issued outside the harness."""
    type: Literal["OAUTH_FACEBOOK", "OAUTH_GOOGLE", "OAUTH_APPLE", "FIREBASE"]
    access_token: str

    def to_sdk_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "accessToken": self.access_token}


class TrustedThirdPartyCredential(_CredentialBase):
    type: Literal["TRUSTED_3RD_PARTY"] = "TRUSTED_3RD_PARTY"
    external_user_id: str
    token: str

    def public_view(self) -> Dict[str, Any]:
        return {"authMethod": self.type, "externalUserId": self.external_user_id}

    def to_sdk_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "externalUserId": self.external_user_id, "token": self.token}


AuthCredential = Annotated[
    Union[NoCredential, EmailCredential, AccessTokenCredential, TrustedThirdPartyCredential],
    Field(discriminator="type"),
]
