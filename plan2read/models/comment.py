from sqlalchemy import Column, Integer, String, Text, DateTime
from plan2read.database import Base
from plan2read.models.clock import utcnow

class Comment(Base):
    """Comment attached to a discussion post by post_id"""
    __tablename__ = "comments"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    comment_id = Column(String, index=True, nullable=False)
    post_id = Column(String, index=True, nullable=False)
    user_id = Column(String, default="guest")
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow)
