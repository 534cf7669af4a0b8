from sqlalchemy import Column, Integer, String, Boolean, DateTime
from plan2read.database import Base
from plan2read.models.clock import utcnow

class Schedule(Base):
    """Schedule header row, one per schedule_id across the whole store"""
    __tablename__ = "schedules"

    row_id = Column(Integer, primary_key=True, autoincrement=True)  # append order
    schedule_id = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(String, index=True, nullable=False)
    schedule_name = Column(String, nullable=False)
    description = Column(String, default="")
    is_public = Column(Boolean, default=False)
    updated_at = Column(DateTime, default=utcnow)
