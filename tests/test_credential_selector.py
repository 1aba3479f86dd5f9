import pytest

from engagement_harness.credentials import (
    AccessTokenCredential,
    EmailCredential,
    NoCredential,
    TrustedThirdPartyCredential,
    select_credential,
)
from engagement_harness.forms import AuthMethod, FormState


def test_none_method_requires_app_and_user() -> None:
    assert select_credential(FormState(app_id="X", user_id="U")) == NoCredential()
    assert select_credential(FormState(app_id="X")) is None
    assert select_credential(FormState(user_id="U")) is None


def test_email_credential_from_form() -> None:
    form = FormState(
        app_id="X", user_id="U", auth_method=AuthMethod.EMAIL, email="e@x.com", password="p"
    )
    credential = select_credential(form)

    assert credential == EmailCredential(email="e@x.com", password="p")
    assert credential.to_sdk_payload() == {"type": "EMAIL", "email": "e@x.com", "password": "p"}
    assert "password" not in credential.public_view()


def test_email_without_password_is_incomplete() -> None:
    form = FormState(app_id="X", auth_method=AuthMethod.EMAIL, email="e@x.com")
    assert select_credential(form) is None


@pytest.mark.parametrize(
    "method",
    [AuthMethod.OAUTH_FACEBOOK, AuthMethod.OAUTH_GOOGLE, AuthMethod.OAUTH_APPLE, AuthMethod.FIREBASE],
)
def test_access_token_methods(method: AuthMethod) -> None:
    form = FormState(app_id="X", auth_method=method, access_token="tok", email="ignored@x.com")
    credential = select_credential(form)

    assert isinstance(credential, AccessTokenCredential)
    assert credential.type == method.value
    assert credential.to_sdk_payload() == {"type": method.value, "accessToken": "tok"}
    assert select_credential(form.model_copy(update={"access_token": ""})) is None


def test_trusted_third_party_maps_external_token() -> None:
    form = FormState(
        app_id="X",
        auth_method=AuthMethod.TRUSTED_3RD_PARTY,
        external_user_id="ext-1",
        external_token="secret",
    )
    credential = select_credential(form)

    assert credential == TrustedThirdPartyCredential(external_user_id="ext-1", token="secret")
    assert credential.public_view() == {"authMethod": "TRUSTED_3RD_PARTY", "externalUserId": "ext-1"}
    assert select_credential(form.model_copy(update={"external_token": ""})) is None


def test_every_method_is_mapped() -> None:
    filled = FormState(
        app_id="X",
        user_id="U",
        email="e",
        password="p",
        access_token="t",
        external_user_id="x",
        external_token="y",
    )
    for method in AuthMethod:
        credential = select_credential(filled.model_copy(update={"auth_method": method}))
        assert credential is not None
        assert credential.type == method.value
        expected_type = {} if method is AuthMethod.NONE else {"type": method.value}
        assert expected_type.items() <= credential.to_sdk_payload().items()
