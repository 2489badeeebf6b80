from typing import Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.storage import S3ObjectStore, object_store
from app.db.session import get_db
from app.modules.auth.services.credentials import (
    CognitoCredentialService,
    InvalidCredentialsError,
    credential_service,
)
from app.modules.user_management.models.user import User
from app.modules.user_management.services.user import require_user

bearer_scheme = HTTPBearer(auto_error=False)

def require_settings(*names: str) -> Callable[[], Dict[str, str]]:
    """
    Dependency factory checking the configuration a route needs.

    Declare it as the route's first parameter so it runs before anything
    touches a store.
    """
    def dependency() -> Dict[str, str]:
        return settings.require(*names)
    return dependency

def get_object_store() -> S3ObjectStore:
    return object_store

def get_credential_service() -> CognitoCredentialService:
    return credential_service

def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    service: CognitoCredentialService = Depends(get_credential_service),
) -> str:
    """
    Dependency resolving the caller's identity from the bearer access token
    """
    if not credentials or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing access token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return service.get_subject(credentials.credentials)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

def get_current_user(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> User:
    """
    Dependency for getting the caller's profile record
    """
    return require_user(db, user_id)
