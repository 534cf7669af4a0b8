from plan2read.models.schedule import Schedule
from plan2read.models.study_session import StudySession
from plan2read.models.discussion import Discussion
from plan2read.models.comment import Comment

__all__ = [
    "Schedule",
    "StudySession",
    "Discussion",
    "Comment"
]
