from sqlalchemy import Column, Integer, String
from plan2read.database import Base

class StudySession(Base):
    """Scheduled study block; schedule_id is not enforced as a foreign key"""
    __tablename__ = "study_sessions"

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(String, unique=True, index=True, nullable=False)
    schedule_id = Column(String, index=True, nullable=False)
    day_of_week = Column(String, nullable=False)  # "Monday" ... "Sunday"
    subject = Column(String, nullable=False)
    start_time = Column(String, nullable=False)  # "HH:MM"
    end_time = Column(String, nullable=False)
