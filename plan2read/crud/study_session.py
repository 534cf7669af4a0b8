from sqlalchemy.orm import Session
from plan2read.models import StudySession
from plan2read.schemas import SessionCreate
from typing import List

def get_sessions(db: Session, schedule_id: str) -> List[StudySession]:
    """Get all sessions of a schedule in storage order"""
    return db.query(StudySession).filter(
        StudySession.schedule_id == schedule_id
    ).order_by(StudySession.row_id).all()

def add_session(db: Session, session: SessionCreate) -> StudySession:
    """Append a session row. Overlap checking is the caller's job."""
    db_session = StudySession(
        session_id=session.session_id,
        schedule_id=session.schedule_id,
        day_of_week=session.day_of_week.value,
        subject=session.subject,
        start_time=session.start_time,
        end_time=session.end_time
    )
    db.add(db_session)
    db.commit()
    db.refresh(db_session)
    return db_session

def delete_session(db: Session, session_id: str) -> bool:
    """Delete the most recently stored row with this session ID"""
    db_session = db.query(StudySession).filter(
        StudySession.session_id == session_id
    ).order_by(StudySession.row_id.desc()).first()
    if not db_session:
        return False
    db.delete(db_session)
    db.commit()
    return True
