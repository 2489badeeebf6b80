import logging

from sqlalchemy.orm import Session

from app.core.toggle import toggle_membership
from app.modules.posts.likes.schemas.like import LikeToggle
from app.modules.posts.services.post import require_post, save_post

logger = logging.getLogger(__name__)

def toggle_like(db: Session, actor_id: str, post_id: str) -> LikeToggle:
    """Like the post if not liked yet, remove the like otherwise. Owners may like their own posts."""
    post = require_post(db, post_id)
    result = toggle_membership(post.likes, actor_id)
    post.likes = result.members
    save_post(db, post)
    logger.info(f"{actor_id} {'liked' if result.was_added else 'unliked'} post {post_id}")
    return LikeToggle(liked=result.was_added)
