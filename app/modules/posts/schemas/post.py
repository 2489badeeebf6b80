from typing import Optional, List
from datetime import datetime

from app.core.schemas import CamelModel

class Comment(CamelModel):
    user_id: str
    comment: str
    date: datetime

class Post(CamelModel):
    """Post returned to client; in feeds `image` holds a resolved URL"""
    id: str
    user_id: str
    description: str
    date: datetime
    image: Optional[str] = None
    likes: List[str] = []
    comments: List[Comment] = []
