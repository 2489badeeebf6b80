from sqlalchemy import Column, String, DateTime, Text, JSON

from app.core.config import settings
from app.db.session import Base

class Post(Base):
    __tablename__ = settings.POST_TABLE

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    image = Column(String, nullable=True)  # object key in the post bucket
    likes = Column(JSON, nullable=False, default=list)
    # [{"userId": ..., "comment": ..., "date": ...}] in append order
    comments = Column(JSON, nullable=False, default=list)
