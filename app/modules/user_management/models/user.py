from sqlalchemy import Column, String, Integer, JSON

from app.core.config import settings
from app.db.session import Base

class User(Base):
    __tablename__ = settings.USER_TABLE

    cognito_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, index=True)
    avatar = Column(String, nullable=True)  # object key in the avatar bucket
    following = Column(JSON, nullable=False, default=list)
    followers = Column(Integer, nullable=False, default=0)  # inbound edges, denormalized
    posts = Column(Integer, nullable=False, default=0)
