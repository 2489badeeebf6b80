from typing import List, Optional

from app.core.schemas import CamelModel

class UserBase(CamelModel):
    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None

class User(UserBase):
    """User returned to client, avatar resolved to a URL"""
    cognito_id: str
    following: List[str] = []
    followers: int = 0
    posts: int = 0
