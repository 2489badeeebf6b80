from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.responses import format_default_response
from app.db.session import get_db
from app.deps import get_current_user_id, require_settings
from app.modules.posts.likes.services.like import toggle_like

router = APIRouter()

@router.patch("")
def toggle_post_like(
    *,
    config: Dict[str, str] = Depends(require_settings("POST_TABLE")),
    db: Session = Depends(get_db),
    post_id: str,
    user_id: str = Depends(get_current_user_id),
) -> Any:
    """Like the post, or remove the like if the caller already liked it"""
    result = toggle_like(db, user_id, post_id)
    message = "Like added successfully" if result.liked else "Like removed successfully"
    return format_default_response(status.HTTP_200_OK, message, result)
