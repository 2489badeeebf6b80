from typing import Optional
import uuid
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.clock import utc_now
from app.core.errors import InvalidInputError, NotFoundError, UpstreamFailureError
from app.core.storage import ImageFile, S3ObjectStore, validate_image
from app.modules.posts.models.post import Post
from app.modules.user_management.services.user import require_user, save_user

logger = logging.getLogger(__name__)

MIN_DESCRIPTION_LENGTH = 5

def get_post(db: Session, post_id: str) -> Optional[Post]:
    """Get post by ID"""
    return db.query(Post).filter(Post.id == post_id).first()

def require_post(db: Session, post_id: str) -> Post:
    post = get_post(db, post_id)
    if not post:
        raise NotFoundError("Post not found")
    return post

def save_post(db: Session, post: Post) -> Post:
    """Persist a post record as one independent write"""
    try:
        db.add(post)
        db.commit()
        db.refresh(post)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save post {post.id}: {e}")
        raise UpstreamFailureError(f"Failed to save post: {e}") from e
    return post

def create_post(
    db: Session,
    object_store: S3ObjectStore,
    bucket: str,
    owner_id: str,
    description: Optional[str],
    image: Optional[ImageFile],
) -> Post:
    """
    Create a post and bump the owner's post counter.

    Input is validated before anything is uploaded or written. The post save
    and the counter save are two independent writes.
    """
    validate_image(image)
    if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        raise InvalidInputError("Invalid description")

    owner = require_user(db, owner_id)
    image_key = object_store.store(bucket, "post", image)

    post = Post(
        id=str(uuid.uuid4()),
        user_id=owner_id,
        description=description,
        date=utc_now(),
        image=image_key,
        likes=[],
        comments=[],
    )
    save_post(db, post)
    logger.info(f"Created post {post.id} for user {owner_id}")

    owner.posts = (owner.posts or 0) + 1
    save_user(db, owner)
    return post
