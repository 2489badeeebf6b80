from typing import Optional
from pydantic import BaseModel

class CommentCreate(BaseModel):
    comment: Optional[str] = None
