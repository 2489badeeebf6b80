from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import logging

from app.core.responses import format_default_response
from app.db.session import get_db
from app.deps import get_current_user_id, require_settings
from app.modules.posts.comments.schemas.comment import CommentCreate
from app.modules.posts.comments.services.comment import add_comment

router = APIRouter()
logger = logging.getLogger("app")

@router.post("")
def create_post_comment(
    *,
    config: Dict[str, str] = Depends(require_settings("POST_TABLE")),
    db: Session = Depends(get_db),
    post_id: str,
    comment_in: CommentCreate,
    user_id: str = Depends(get_current_user_id),
) -> Any:
    """Append a comment to the post"""
    add_comment(db, user_id, post_id, comment_in.comment)
    return format_default_response(status.HTTP_200_OK, "Comment added successfully")
