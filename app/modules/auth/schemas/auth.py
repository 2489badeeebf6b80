from typing import Optional
from pydantic import EmailStr, field_validator

from app.core.schemas import CamelModel

class EmailRequest(CamelModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower()

class RegisterRequest(EmailRequest):
    password: Optional[str] = None
    name: Optional[str] = None

class ConfirmEmailRequest(EmailRequest):
    verification_code: Optional[str] = None

class LoginRequest(EmailRequest):
    password: Optional[str] = None

class ResetPasswordRequest(EmailRequest):
    password: Optional[str] = None
    verification_code: Optional[str] = None

class LoginResponse(CamelModel):
    email: str
    token: Optional[str] = None
    refresh_token: Optional[str] = None
