from pydantic import BaseModel

class FollowToggle(BaseModel):
    """State of the follow edge after a toggle"""
    following: bool
