"""Credential service backed by an AWS Cognito user pool"""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings
from app.core.errors import UpstreamFailureError

logger = logging.getLogger("app")


class InvalidCredentialsError(Exception):
    """The identity provider rejected a token"""


def _error_message(error: Exception) -> str:
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Message", str(error))
    return str(error)


class CognitoCredentialService:
    """Issues and checks credentials; returns the pool's subject id as the user identity"""

    def __init__(self, client=None):
        self.client = client or boto3.client("cognito-idp", region_name=settings.AWS_REGION)

    @property
    def client_id(self) -> str:
        return settings.require("USER_POOL_CLIENT_ID")["USER_POOL_CLIENT_ID"]

    def _call(self, action: str, operation, **kwargs) -> Dict[str, Any]:
        try:
            return operation(**kwargs)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Identity provider call '{action}' failed: {_error_message(e)}")
            raise UpstreamFailureError(f"Failed to {action}: {_error_message(e)}") from e

    def sign_up(self, email: str, password: str) -> str:
        """Register the email and return the new subject id"""
        response = self._call(
            "register user",
            self.client.sign_up,
            ClientId=self.client_id,
            Username=email,
            Password=password,
            UserAttributes=[{"Name": "email", "Value": email}],
        )
        return response["UserSub"]

    def confirm_email(self, email: str, verification_code: str) -> None:
        self._call(
            "confirm email",
            self.client.confirm_sign_up,
            ClientId=self.client_id,
            Username=email,
            ConfirmationCode=verification_code,
        )

    def login(self, email: str, password: str) -> Dict[str, Optional[str]]:
        response = self._call(
            "authenticate user",
            self.client.initiate_auth,
            ClientId=self.client_id,
            AuthFlow="USER_PASSWORD_AUTH",
            AuthParameters={"USERNAME": email, "PASSWORD": password},
        )
        result = response.get("AuthenticationResult") or {}
        return {
            "email": email,
            "token": result.get("AccessToken"),
            "refreshToken": result.get("RefreshToken"),
        }

    def forgot_password(self, email: str) -> None:
        self._call(
            "request password reset",
            self.client.forgot_password,
            ClientId=self.client_id,
            Username=email,
        )

    def confirm_password(self, email: str, password: str, verification_code: str) -> None:
        self._call(
            "reset password",
            self.client.confirm_forgot_password,
            ClientId=self.client_id,
            Username=email,
            Password=password,
            ConfirmationCode=verification_code,
        )

    def get_subject(self, access_token: str) -> str:
        """Resolve an access token to the caller's subject id"""
        try:
            response = self.client.get_user(AccessToken=access_token)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code in ("NotAuthorizedException", "UserNotFoundException"):
                raise InvalidCredentialsError(_error_message(e)) from e
            logger.error(f"Identity provider call 'get user' failed: {_error_message(e)}")
            raise UpstreamFailureError(f"Failed to resolve caller: {_error_message(e)}") from e
        except BotoCoreError as e:
            raise UpstreamFailureError(f"Failed to resolve caller: {e}") from e

        for attribute in response.get("UserAttributes", []):
            if attribute.get("Name") == "sub":
                return attribute["Value"]
        return response["Username"]


# Global instance for app-wide usage
credential_service = CognitoCredentialService()
