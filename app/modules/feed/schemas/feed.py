from typing import Dict, Optional
from datetime import datetime

from pydantic import ValidationError, field_validator

from app.core.clock import to_naive_utc
from app.core.errors import InvalidInputError
from app.core.schemas import CamelModel

class OwnFeedCursor(CamelModel):
    """Last post seen in a user's own feed, as (id, owner, date)"""
    id: str
    user_id: str
    date: datetime

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @classmethod
    def from_query(cls, id: Optional[str], user_id: Optional[str], date: Optional[str]) -> Optional["OwnFeedCursor"]:
        """Build the cursor from query parameters; all three or none"""
        values = (id, user_id, date)
        if not any(values):
            return None
        if not all(values):
            raise InvalidInputError("Pagination cursor requires id, userId and date")
        try:
            return cls(id=id, user_id=user_id, date=date)
        except ValidationError as e:
            raise InvalidInputError(f"Invalid pagination cursor: {e.errors()[0]['msg']}") from e

    @classmethod
    def after(cls, post) -> "OwnFeedCursor":
        return cls(id=post.id, user_id=post.user_id, date=post.date)

    def to_query(self) -> Dict[str, str]:
        return {"id": self.id, "userId": self.user_id, "date": self.date.isoformat()}

class HomeFeedCursor(CamelModel):
    """Identifier of the last post seen in the home feed scan"""
    id: str

    @classmethod
    def from_query(cls, last_key: Optional[str]) -> Optional["HomeFeedCursor"]:
        return cls(id=last_key) if last_key else None

    def to_query(self) -> str:
        return self.id
