# engagement_harness/credentials/__init__.py
from .models import (
    AccessTokenCredential,
    AuthCredential,
    EmailCredential,
    NoCredential,
    TrustedThirdPartyCredential,
)
from .selector import select_credential

__all__ = [
    "AccessTokenCredential",
    "AuthCredential",
    "EmailCredential",
    "NoCredential",
    "TrustedThirdPartyCredential",
    "select_credential",
]
