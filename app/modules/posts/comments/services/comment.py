import logging

from sqlalchemy.orm import Session

from app.core.clock import utc_now
from app.core.errors import InvalidInputError
from app.modules.posts.models.post import Post
from app.modules.posts.services.post import require_post, save_post

logger = logging.getLogger(__name__)

MIN_COMMENT_LENGTH = 2

def add_comment(db: Session, actor_id: str, post_id: str, text: str) -> Post:
    """Append a comment; list order is the temporal order"""
    post = require_post(db, post_id)
    if not text or len(text.strip()) < MIN_COMMENT_LENGTH:
        raise InvalidInputError("Invalid comment")

    comment = {"userId": actor_id, "comment": text.strip(), "date": utc_now().isoformat()}
    post.comments = list(post.comments or []) + [comment]
    save_post(db, post)
    logger.info(f"{actor_id} commented on post {post_id}")
    return post
