from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.orm import Session

from app.core.responses import format_default_response
from app.core.storage import S3ObjectStore, read_upload
from app.db.session import get_db
from app.deps import get_current_user_id, get_object_store, require_settings
from app.modules.user_management.services.user import (
    require_user,
    search_users,
    to_public_user,
    update_profile,
)

router = APIRouter()
logger = logging.getLogger("app")

user_settings = require_settings("USER_TABLE", "AVATAR_BUCKET")

@router.get("/me")
def read_user_me(
    config: Dict[str, str] = Depends(user_settings),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """Get current user"""
    user = require_user(db, user_id)
    return format_default_response(
        status.HTTP_200_OK, None, to_public_user(user, object_store, config["AVATAR_BUCKET"])
    )

@router.patch("/me")
async def update_user_me(
    *,
    config: Dict[str, str] = Depends(user_settings),
    db: Session = Depends(get_db),
    name: Optional[str] = Form(None),
    avatar: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """Update display name and/or avatar of the current user"""
    avatar_file = await read_upload(avatar)
    update_profile(db, object_store, config["AVATAR_BUCKET"], user_id, name=name, avatar=avatar_file)
    return format_default_response(status.HTTP_200_OK, "User updated successfully")

@router.get("/search/{filter}")
def search(
    *,
    config: Dict[str, str] = Depends(user_settings),
    db: Session = Depends(get_db),
    filter: str,
    last_key: Optional[str] = Query(None, alias="lastKey"),
    user_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """Search users by name or email"""
    page = search_users(db, object_store, config["AVATAR_BUCKET"], filter, last_key)
    return format_default_response(status.HTTP_200_OK, None, page)

@router.get("/{target_id}")
def read_user_by_id(
    *,
    config: Dict[str, str] = Depends(user_settings),
    db: Session = Depends(get_db),
    target_id: str,
    user_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """Get a specific user by id"""
    user = require_user(db, target_id)
    return format_default_response(
        status.HTTP_200_OK, None, to_public_user(user, object_store, config["AVATAR_BUCKET"])
    )
