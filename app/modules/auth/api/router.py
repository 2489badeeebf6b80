"""Authentication router backed by the identity pool"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.responses import format_default_response
from app.db.session import get_db
from app.deps import get_credential_service, require_settings
from app.modules.auth.schemas.auth import (
    ConfirmEmailRequest,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    ResetPasswordRequest,
)
from app.modules.auth.services import auth as auth_service
from app.modules.auth.services.credentials import CognitoCredentialService

router = APIRouter()

pool_settings = require_settings("USER_POOL_ID", "USER_POOL_CLIENT_ID")

@router.post("/register")
def register(
    *,
    config: Dict[str, str] = Depends(require_settings("USER_POOL_ID", "USER_POOL_CLIENT_ID", "USER_TABLE")),
    db: Session = Depends(get_db),
    request: RegisterRequest,
    credentials: CognitoCredentialService = Depends(get_credential_service),
) -> Any:
    """Register a new user; a confirmation code is emailed by the identity pool"""
    auth_service.register_user(db, credentials, request.email, request.password, request.name)
    return format_default_response(
        status.HTTP_200_OK, "User registered successfully, check your email for the confirmation code"
    )

@router.post("/confirm-email")
def confirm_email(
    *,
    config: Dict[str, str] = Depends(pool_settings),
    request: ConfirmEmailRequest,
    credentials: CognitoCredentialService = Depends(get_credential_service),
) -> Any:
    auth_service.confirm_email(credentials, request.email, request.verification_code)
    return format_default_response(status.HTTP_200_OK, "User confirmed successfully")

@router.post("/login")
def login(
    *,
    config: Dict[str, str] = Depends(pool_settings),
    request: LoginRequest,
    credentials: CognitoCredentialService = Depends(get_credential_service),
) -> Any:
    tokens = auth_service.login(credentials, request.email, request.password)
    return format_default_response(status.HTTP_200_OK, None, LoginResponse(**tokens))

@router.post("/forgot-password")
def forgot_password(
    *,
    config: Dict[str, str] = Depends(pool_settings),
    request: EmailRequest,
    credentials: CognitoCredentialService = Depends(get_credential_service),
) -> Any:
    credentials.forgot_password(request.email)
    return format_default_response(status.HTTP_200_OK, "Password reset code sent")

@router.post("/reset-password")
def reset_password(
    *,
    config: Dict[str, str] = Depends(pool_settings),
    request: ResetPasswordRequest,
    credentials: CognitoCredentialService = Depends(get_credential_service),
) -> Any:
    auth_service.reset_password(credentials, request.email, request.password, request.verification_code)
    return format_default_response(status.HTTP_200_OK, "Password changed successfully")
