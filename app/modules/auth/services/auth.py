import re
import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError
from app.modules.auth.services.credentials import CognitoCredentialService
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import create_user, validate_name

logger = logging.getLogger("app")

# At least eight characters with upper, lower, digit and special characters
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z\d]).{8,}$")
VERIFICATION_CODE_LENGTH = 6

def validate_password(password: Optional[str]) -> str:
    if not password or not PASSWORD_PATTERN.match(password):
        raise InvalidInputError(
            "Invalid password: it must have at least eight characters including "
            "upper case, lower case, numeric and special characters"
        )
    return password

def validate_verification_code(code: Optional[str]) -> str:
    if not code or len(code) != VERIFICATION_CODE_LENGTH:
        raise InvalidInputError("Invalid verification code")
    return code

def register_user(
    db: Session, credentials: CognitoCredentialService, email: str, password: Optional[str], name: Optional[str]
) -> User:
    """Register the identity, then create the profile keyed by its subject id"""
    password = validate_password(password)
    name = validate_name(name)

    subject = credentials.sign_up(email, password)
    logger.info(f"Registered identity {subject}")
    return create_user(db, cognito_id=subject, name=name, email=email)

def confirm_email(credentials: CognitoCredentialService, email: str, code: Optional[str]) -> None:
    credentials.confirm_email(email, validate_verification_code(code))

def login(credentials: CognitoCredentialService, email: str, password: Optional[str]) -> Dict[str, Optional[str]]:
    if not password:
        raise InvalidInputError("Email and password are required")
    return credentials.login(email, password)

def reset_password(
    credentials: CognitoCredentialService, email: str, password: Optional[str], code: Optional[str]
) -> None:
    password = validate_password(password)
    credentials.confirm_password(email, password, validate_verification_code(code))
