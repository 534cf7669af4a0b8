from sqlalchemy import or_
from sqlalchemy.orm import Session
from plan2read.models import Schedule, StudySession
from plan2read.models.clock import utcnow
from plan2read.schemas import ScheduleCreate, ScheduleClone
from typing import List, Optional

def get_schedules(db: Session, user_id: Optional[str] = None) -> List[Schedule]:
    """
    Get schedules visible to a user.

    With a user id: that user's schedules plus every public one.
    Without: public schedules only.
    """
    query = db.query(Schedule)
    if user_id:
        query = query.filter(or_(Schedule.user_id == user_id, Schedule.is_public.is_(True)))
    else:
        query = query.filter(Schedule.is_public.is_(True))
    return query.order_by(Schedule.row_id).all()

def get_schedule(db: Session, schedule_id: str) -> Optional[Schedule]:
    """Get schedule header by ID"""
    return db.query(Schedule).filter(Schedule.schedule_id == schedule_id).first()

def create_schedule(db: Session, schedule: ScheduleCreate) -> Schedule:
    """Append a schedule header row"""
    db_schedule = Schedule(
        schedule_id=schedule.schedule_id,
        user_id=schedule.user_id,
        schedule_name=schedule.schedule_name,
        description=schedule.description or "",
        is_public=bool(schedule.is_public),
        updated_at=utcnow()
    )
    db.add(db_schedule)
    db.commit()
    db.refresh(db_schedule)
    return db_schedule

def clone_schedule(db: Session, clone: ScheduleClone) -> int:
    """
    Copy a schedule header and all of its sessions under a new ID.

    The new header is private and notes its source. If a header with the new
    ID already exists (a share publishes the header first) it is kept as is
    and only the sessions are copied.

    Returns:
        Number of sessions copied
    """
    if get_schedule(db, clone.new_schedule_id) is None:
        db.add(Schedule(
            schedule_id=clone.new_schedule_id,
            user_id=clone.new_user_id,
            schedule_name=clone.new_schedule_name,
            description=f"Cloned from {clone.source_schedule_id}",
            is_public=False,
            updated_at=utcnow()
        ))

    sources = db.query(StudySession).filter(
        StudySession.schedule_id == clone.source_schedule_id
    ).order_by(StudySession.row_id).all()

    copies = [
        StudySession(
            session_id=f"sess_{clone.new_schedule_id}_{source.row_id}",
            schedule_id=clone.new_schedule_id,
            day_of_week=source.day_of_week,
            subject=source.subject,
            start_time=source.start_time,
            end_time=source.end_time
        )
        for source in sources
    ]
    db.add_all(copies)
    db.commit()
    return len(copies)
