# engagement_harness/credentials/selector.py
from typing import Optional

from ..forms.models import ACCESS_TOKEN_METHODS, AuthMethod, FormState
from .models import (
    AccessTokenCredential,
    AuthCredential,
    EmailCredential,
    NoCredential,
    TrustedThirdPartyCredential,
)


def select_credential(form: FormState) -> Optional[AuthCredential]:
    """
    Derive the credential for the selected auth method.

    Returns None while the fields the method requires are incomplete, which is
    a "not yet ready" state rather than an error. Fields belonging to other
    methods are ignored.
    """
    if not form.app_id:
        return None

    method = form.auth_method

    if method == AuthMethod.NONE:
        if not form.user_id:
            return None
        return NoCredential()

    if method == AuthMethod.EMAIL:
        if not (form.email and form.password):
            return None
        return EmailCredential(email=form.email, password=form.password)

    if method in ACCESS_TOKEN_METHODS:
        if not form.access_token:
            return None
        return AccessTokenCredential(type=method.value, access_token=form.access_token)

    if method == AuthMethod.TRUSTED_3RD_PARTY:
        if not (form.external_user_id and form.external_token):
            return None
        return TrustedThirdPartyCredential(
            external_user_id=form.external_user_id,
            token=form.external_token,
        )

    raise ValueError(f"No credential mapping for auth method: {method}")
