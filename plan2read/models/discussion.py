from sqlalchemy import Column, Integer, String, Text, DateTime
from plan2read.database import Base
from plan2read.models.clock import utcnow

class Discussion(Base):
    """Discussion board post"""
    __tablename__ = "discussions"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(String, index=True, nullable=False)
    user_id = Column(String, default="guest")
    category = Column(String, default="")
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow)
