from typing import List, Optional
import logging

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query, Session

from app.core.config import settings
from app.core.errors import InvalidInputError
from app.core.schemas import Page
from app.core.storage import S3ObjectStore
from app.modules.feed.schemas.feed import HomeFeedCursor, OwnFeedCursor
from app.modules.posts.models.post import Post as PostModel
from app.modules.posts.schemas.post import Post as PostSchema
from app.modules.user_management.services.user import require_user

logger = logging.getLogger(__name__)

def list_own_posts(
    db: Session,
    object_store: S3ObjectStore,
    bucket: str,
    user_id: str,
    cursor: Optional[OwnFeedCursor] = None,
    page_size: Optional[int] = None,
) -> Page[PostSchema]:
    """A user's posts, newest first, resuming after the cursor"""
    page_size = page_size or settings.OWN_FEED_PAGE_SIZE
    require_user(db, user_id)

    query = db.query(PostModel).filter(PostModel.user_id == user_id)
    if cursor:
        if cursor.user_id != user_id:
            raise InvalidInputError("Pagination cursor belongs to another user")
        query = query.filter(
            or_(
                PostModel.date < cursor.date,
                and_(PostModel.date == cursor.date, PostModel.id < cursor.id),
            )
        )
    query = query.order_by(PostModel.date.desc(), PostModel.id.desc())

    posts, has_more = _fetch_page(query, page_size)
    last_key = OwnFeedCursor.after(posts[-1]).to_query() if has_more else None
    return _build_page(posts, last_key, object_store, bucket)

def list_home_feed(
    db: Session,
    object_store: S3ObjectStore,
    bucket: str,
    user_id: str,
    cursor: Optional[HomeFeedCursor] = None,
    page_size: Optional[int] = None,
) -> Page[PostSchema]:
    """
    Posts by everyone the user follows plus the user's own.

    This is a membership scan in storage-key order, not a merge by date:
    items are not globally sorted by recency across owners.
    """
    page_size = page_size or settings.HOME_FEED_PAGE_SIZE
    user = require_user(db, user_id)

    owner_ids = list(user.following or [])
    if user_id not in owner_ids:
        owner_ids.append(user_id)

    query = db.query(PostModel).filter(PostModel.user_id.in_(owner_ids))
    if cursor:
        query = query.filter(PostModel.id > cursor.id)
    query = query.order_by(PostModel.id)

    posts, has_more = _fetch_page(query, page_size)
    last_key = HomeFeedCursor(id=posts[-1].id).to_query() if has_more else None
    return _build_page(posts, last_key, object_store, bucket)

def _fetch_page(query: Query, page_size: int):
    """Fetch one extra row so the last page carries no cursor"""
    rows = query.limit(page_size + 1).all()
    return rows[:page_size], len(rows) > page_size

def _build_page(posts: List[PostModel], last_key, object_store: S3ObjectStore, bucket: str) -> Page[PostSchema]:
    data = [_enrich_post(post, object_store, bucket) for post in posts]
    return Page[PostSchema](count=len(data), lastkey=last_key, data=data)

def _enrich_post(post: PostModel, object_store: S3ObjectStore, bucket: str) -> PostSchema:
    """Request-scoped copy with the image key swapped for a URL; the stored row keeps the key"""
    item = PostSchema.model_validate(post)
    if post.image:
        return item.model_copy(update={"image": object_store.resolve(bucket, post.image)})
    return item.model_copy(update={"image": None})
