from typing import Any, Dict, Optional
import logging

from fastapi import APIRouter, Depends, UploadFile, File, Form, status
from sqlalchemy.orm import Session

from app.core.responses import format_default_response
from app.core.storage import S3ObjectStore, read_upload
from app.db.session import get_db
from app.deps import get_current_user_id, get_object_store, require_settings
from app.modules.posts.services.post import create_post

logger = logging.getLogger(__name__)

# Create a router that explicitly disables the automatic trailing slash behavior
router = APIRouter(prefix="")

post_settings = require_settings("POST_TABLE", "POST_BUCKET")

@router.post("/")
@router.post("")
async def create_new_post(
    *,
    config: Dict[str, str] = Depends(post_settings),
    db: Session = Depends(get_db),
    description: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    object_store: S3ObjectStore = Depends(get_object_store),
) -> Any:
    """
    Create a new post with an image.
    """
    image_file = await read_upload(image)
    post = create_post(db, object_store, config["POST_BUCKET"], user_id, description, image_file)
    return format_default_response(status.HTTP_200_OK, "Post created successfully", {"id": post.id})
