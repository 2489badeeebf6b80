from pydantic import BaseModel

class LikeToggle(BaseModel):
    liked: bool
