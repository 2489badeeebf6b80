import pytest
from botocore.exceptions import ClientError

from app.core.errors import UpstreamFailureError
from app.modules.auth.services.credentials import InvalidCredentialsError


def test_get_subject_reads_sub_attribute(credential_service):
    assert credential_service.get_subject("token-alice") == "alice"


def test_rejected_token_raises_invalid_credentials(credential_service):
    with pytest.raises(InvalidCredentialsError):
        credential_service.get_subject("garbage")


def test_sign_up_returns_subject(credential_service, cognito_client):
    assert credential_service.sign_up("new@example.com", "Passw0rd!") == "new-user-sub"

    name, kwargs = cognito_client.calls[-1]
    assert name == "sign_up"
    assert kwargs["ClientId"] == "test-client-id"
    assert kwargs["Username"] == "new@example.com"


def test_login_maps_tokens(credential_service, cognito_client):
    result = credential_service.login("a@example.com", "Passw0rd!")

    assert result == {"email": "a@example.com", "token": "access-abc", "refreshToken": "refresh-abc"}
    assert cognito_client.calls[-1][1]["AuthFlow"] == "USER_PASSWORD_AUTH"


def test_provider_errors_become_upstream_failures(credential_service, cognito_client):
    cognito_client.error = ClientError(
        {"Error": {"Code": "UsernameExistsException", "Message": "User already exists"}}, "SignUp"
    )

    with pytest.raises(UpstreamFailureError) as exc_info:
        credential_service.sign_up("a@example.com", "Passw0rd!")

    assert "User already exists" in exc_info.value.message
