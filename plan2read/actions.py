"""Local simulation of the remote store's action API.

Mirrors the deployed backend: reads go through ``handle_get_request`` and
writes through ``handle_post_request``; both answer with the
``{status, message?, data?}`` envelope and never raise for bad input.
Rows live in SQLAlchemy tables so the simulation can run in memory
(``sqlite://``) or persist to a file between runs.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

import pydantic
from sqlalchemy.exc import SQLAlchemyError

from plan2read import crud
from plan2read.database import init_db, make_engine, make_session_factory
from plan2read.schemas import (
    CommentCreate,
    PostCreate,
    ScheduleClone,
    ScheduleCreate,
    SessionCreate,
)

logger = logging.getLogger(__name__)

READ_ACTIONS = frozenset({"getSchedules", "getSessions", "getDiscussions", "getComments"})
WRITE_ACTIONS = frozenset({
    "createSchedule",
    "cloneSchedule",
    "addSession",
    "deleteSession",
    "createPost",
    "addComment",
})


def success(message: Optional[str] = None, data: Any = None, **extra) -> Dict[str, Any]:
    envelope: Dict[str, Any] = {"status": "success"}
    if message is not None:
        envelope["message"] = message
    if data is not None:
        envelope["data"] = data
    envelope.update(extra)
    return envelope


def error(message: str) -> Dict[str, Any]:
    return {"status": "error", "message": message}


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def schedule_row(row) -> Dict[str, Any]:
    return {
        "schedule_id": row.schedule_id,
        "user_id": row.user_id,
        "schedule_name": row.schedule_name,
        "description": row.description or "",
        "is_public": bool(row.is_public),
        "updated_at": _iso(row.updated_at),
    }


def session_row(row) -> Dict[str, Any]:
    return {
        "session_id": row.session_id,
        "schedule_id": row.schedule_id,
        "day_of_week": row.day_of_week,
        "subject": row.subject,
        "start_time": row.start_time,
        "end_time": row.end_time,
    }


def post_row(row) -> Dict[str, Any]:
    return {
        "post_id": row.post_id,
        "user_id": row.user_id,
        "category": row.category,
        "title": row.title,
        "content": row.content,
        "created_at": _iso(row.created_at),
    }


def comment_row(row) -> Dict[str, Any]:
    return {
        "comment_id": row.comment_id,
        "post_id": row.post_id,
        "user_id": row.user_id,
        "content": row.content,
        "created_at": _iso(row.created_at),
    }


class LocalBackend:
    """In-process implementation of the backend action set"""

    def __init__(self, database_url: str = "sqlite://"):
        self.engine = make_engine(database_url)
        init_db(self.engine)
        self.SessionLocal = make_session_factory(self.engine)

    def handle(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Route to the GET or POST handler the way the HTTP endpoint would"""
        if action in READ_ACTIONS:
            return self.handle_get_request(action, payload)
        if action in WRITE_ACTIONS:
            return self.handle_post_request(action, payload)
        return error(f"Unknown action: {action}")

    def handle_get_request(self, action: str, params: Dict[str, Any]) -> Dict[str, Any]:
        db = self.SessionLocal()
        try:
            if action == "getSchedules":
                rows = crud.get_schedules(db, params.get("user_id") or None)
                return success(data=[schedule_row(r) for r in rows])

            if action == "getSessions":
                rows = crud.get_sessions(db, str(params.get("schedule_id", "")))
                return success(data=[session_row(r) for r in rows])

            if action == "getDiscussions":
                return success(data=[post_row(r) for r in crud.get_discussions(db)])

            if action == "getComments":
                rows = crud.get_comments(db, str(params.get("post_id", "")))
                return success(data=[comment_row(r) for r in rows])

            return error(f"Unknown action: {action}")
        except SQLAlchemyError as e:
            logger.error("Local store failed on %s: %s", action, e)
            return error(f"Store error: {e.__class__.__name__}")
        finally:
            db.close()

    def handle_post_request(self, action: str, data: Dict[str, Any]) -> Dict[str, Any]:
        db = self.SessionLocal()
        try:
            if action == "createSchedule":
                payload = ScheduleCreate(**data)
                if crud.get_schedule(db, payload.schedule_id):
                    return error(f"Schedule {payload.schedule_id} already exists")
                crud.create_schedule(db, payload)
                return success("Schedule created", schedule_id=payload.schedule_id)

            if action == "cloneSchedule":
                payload = ScheduleClone(**data)
                copied = crud.clone_schedule(db, payload)
                logger.debug("Cloned %s -> %s (%d sessions)",
                             payload.source_schedule_id, payload.new_schedule_id, copied)
                return success("Schedule cloned successfully")

            if action == "addSession":
                crud.add_session(db, SessionCreate(**data))
                return success("Session added")

            if action == "deleteSession":
                if crud.delete_session(db, str(data.get("session_id", ""))):
                    return success("Deleted")
                return error("Not found")

            if action == "createPost":
                crud.create_post(db, PostCreate(**data))
                return success("Post created")

            if action == "addComment":
                crud.add_comment(db, CommentCreate(**data))
                return success("Comment added")

            return error(f"Unknown action: {action}")
        except pydantic.ValidationError as e:
            return error(f"Invalid payload for {action}: {e.error_count()} field error(s)")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Local store failed on %s: %s", action, e)
            return error(f"Store error: {e.__class__.__name__}")
        finally:
            db.close()
