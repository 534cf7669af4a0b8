from plan2read.crud.schedule import get_schedules, get_schedule, create_schedule, clone_schedule
from plan2read.crud.study_session import get_sessions, add_session, delete_session
from plan2read.crud.discussion import (
    get_discussions,
    create_post,
    get_comments,
    add_comment
)

__all__ = [
    "get_schedules",
    "get_schedule",
    "create_schedule",
    "clone_schedule",
    "get_sessions",
    "add_session",
    "delete_session",
    "get_discussions",
    "create_post",
    "get_comments",
    "add_comment",
]
