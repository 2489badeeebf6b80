from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.responses import format_default_response
from app.db.session import get_db
from app.deps import get_current_user_id, require_settings
from app.modules.follows.services.follow import toggle_follow

router = APIRouter()
logger = logging.getLogger(__name__)

@router.patch("/{follow_id}/follow")
def toggle_follow_user(
    *,
    config: Dict[str, str] = Depends(require_settings("USER_TABLE")),
    db: Session = Depends(get_db),
    follow_id: str,
    user_id: str = Depends(get_current_user_id),
) -> Any:
    """Follow the user, or unfollow if already following"""
    result = toggle_follow(db, user_id, follow_id)
    message = "User followed successfully" if result.following else "You no longer follow this user"
    return format_default_response(status.HTTP_200_OK, message, result)
