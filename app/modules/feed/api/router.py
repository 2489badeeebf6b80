from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.responses import format_default_response
from app.core.storage import S3ObjectStore
from app.db.session import get_db
from app.deps import get_current_user_id, get_object_store, require_settings
from app.modules.feed.schemas.feed import HomeFeedCursor, OwnFeedCursor
from app.modules.feed.services.feed import list_home_feed, list_own_posts

router = APIRouter()

feed_settings = require_settings("USER_TABLE", "POST_TABLE", "POST_BUCKET")

@router.get("/users/{user_id}")
def read_user_feed(
    *,
    config: Dict[str, str] = Depends(feed_settings),
    db: Session = Depends(get_db),
    user_id: str,
    id: Optional[str] = Query(None),
    cursor_user_id: Optional[str] = Query(None, alias="userId"),
    date: Optional[str] = Query(None),
    caller_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """One page of a user's posts, newest first; id, userId and date continue a listing"""
    cursor = OwnFeedCursor.from_query(id, cursor_user_id, date)
    page = list_own_posts(db, object_store, config["POST_BUCKET"], user_id, cursor)
    return format_default_response(status.HTTP_200_OK, None, page)

@router.get("/home")
def read_home_feed(
    *,
    config: Dict[str, str] = Depends(feed_settings),
    db: Session = Depends(get_db),
    last_key: Optional[str] = Query(None, alias="lastKey"),
    user_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """Get the home feed for the current user: followed users plus their own posts"""
    page = list_home_feed(
        db, object_store, config["POST_BUCKET"], user_id, HomeFeedCursor.from_query(last_key)
    )
    return format_default_response(status.HTTP_200_OK, None, page)
