from typing import Optional
import logging

from sqlalchemy import or_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import InvalidInputError, NotFoundError, UpstreamFailureError
from app.core.schemas import Page
from app.core.storage import ImageFile, S3ObjectStore, validate_image
from app.modules.user_management.models.user import User
from app.modules.user_management.schemas.user import User as UserSchema

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_SEARCH_LENGTH = 2

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get user by identity"""
    return db.query(User).filter(User.cognito_id == user_id).first()

def require_user(db: Session, user_id: str, message: str = "User not found") -> User:
    user = get_user(db, user_id)
    if not user:
        raise NotFoundError(message)
    return user

def save_user(db: Session, user: User) -> User:
    """Persist a user record as one independent write"""
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save user {user.cognito_id}: {e}")
        raise UpstreamFailureError(f"Failed to save user: {e}") from e
    return user

def create_user(db: Session, cognito_id: str, name: str, email: str) -> User:
    """Create the profile record for a freshly registered identity"""
    user = User(
        cognito_id=cognito_id,
        name=name.strip(),
        email=email,
        following=[],
        followers=0,
        posts=0,
    )
    return save_user(db, user)

def validate_name(name: Optional[str]) -> str:
    if not name or len(name.strip()) < MIN_NAME_LENGTH:
        raise InvalidInputError("Invalid name")
    return name.strip()

def update_profile(
    db: Session,
    object_store: S3ObjectStore,
    bucket: str,
    user_id: str,
    name: Optional[str] = None,
    avatar: Optional[ImageFile] = None,
) -> User:
    """Update display name and/or avatar; all input is checked before the upload"""
    if name is None and avatar is None:
        raise InvalidInputError("Nothing to update")
    if name is not None:
        name = validate_name(name)
    if avatar is not None:
        validate_image(avatar)

    user = require_user(db, user_id)
    if avatar is not None:
        user.avatar = object_store.store(bucket, "avatar", avatar)
    if name is not None:
        user.name = name
    return save_user(db, user)

def to_public_user(user: User, object_store: S3ObjectStore, bucket: str) -> UserSchema:
    """Copy a user for the response, resolving the avatar key to a URL"""
    public = UserSchema.model_validate(user)
    if user.avatar:
        public = public.model_copy(update={"avatar": object_store.resolve(bucket, user.avatar)})
    return public

def search_users(
    db: Session,
    object_store: S3ObjectStore,
    bucket: str,
    filter_: str,
    last_key: Optional[str] = None,
    page_size: Optional[int] = None,
) -> Page[UserSchema]:
    """Case-insensitive name/email search, paginated in identity order"""
    if not filter_ or len(filter_.strip()) < MIN_SEARCH_LENGTH:
        raise InvalidInputError("Search filter must have at least 2 characters")
    page_size = page_size or settings.USER_SEARCH_PAGE_SIZE

    pattern = f"%{filter_.strip().lower()}%"
    query = db.query(User).filter(
        or_(
            func.lower(User.name).like(pattern),
            func.lower(User.email).like(pattern),
        )
    )
    if last_key:
        query = query.filter(User.cognito_id > last_key)
    rows = query.order_by(User.cognito_id).limit(page_size + 1).all()

    has_more = len(rows) > page_size
    rows = rows[:page_size]
    data = [to_public_user(user, object_store, bucket) for user in rows]
    return Page[UserSchema](
        count=len(data),
        lastkey=rows[-1].cognito_id if has_more else None,
        data=data,
    )
