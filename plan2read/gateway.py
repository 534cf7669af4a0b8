import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import pydantic

from plan2read.errors import NotFoundError, TransportError
from plan2read.schemas import (
    Comment,
    CommentCreate,
    Post,
    PostCreate,
    Result,
    Schedule,
    ScheduleClone,
    ScheduleCreate,
    Session,
    SessionCreate,
    WireModel,
)
from plan2read.transports import Transport

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=WireModel)


class RemoteStoreGateway:
    """
    The only component that talks to the backend.

    ``call`` sends one action and returns the success envelope. Every
    failure, whether the transport broke, the body was malformed or the
    backend answered ``status: error``, is raised as ``TransportError``
    (``NotFoundError`` for a missing row), so callers handle one path.
    """

    def __init__(self, transport: Transport):
        self.transport = transport

    def call(self, action: str, payload: Optional[Dict[str, Any]] = None) -> Result:
        payload = payload or {}
        logger.debug("-> %s %s", action, payload)
        raw = self.transport.send(action, payload)

        try:
            result = Result.model_validate(raw)
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed response to {action}") from e

        if not result.ok:
            message = result.message or f"{action} failed"
            logger.warning("Backend rejected %s: %s", action, message)
            if message.lower().startswith("not found"):
                raise NotFoundError(message)
            raise TransportError(message)
        return result

    def _rows(self, action: str, result: Result, model: Type[RowT]) -> List[RowT]:
        if result.data is not None and not isinstance(result.data, list):
            raise TransportError(f"Malformed response to {action}: data is not a list")
        try:
            return [model.model_validate(row) for row in result.rows()]
        except pydantic.ValidationError as e:
            raise TransportError(f"Malformed {model.__name__} row in {action}") from e

    # Reads

    def get_schedules(self, user_id: Optional[str] = None) -> List[Schedule]:
        payload = {"user_id": user_id} if user_id else {}
        return self._rows("getSchedules", self.call("getSchedules", payload), Schedule)

    def get_sessions(self, schedule_id: str) -> List[Session]:
        result = self.call("getSessions", {"schedule_id": schedule_id})
        return self._rows("getSessions", result, Session)

    def get_discussions(self) -> List[Post]:
        return self._rows("getDiscussions", self.call("getDiscussions"), Post)

    def get_comments(self, post_id: str) -> List[Comment]:
        result = self.call("getComments", {"post_id": post_id})
        return self._rows("getComments", result, Comment)

    # Writes

    def create_schedule(
        self,
        schedule_id: str,
        user_id: str,
        schedule_name: str,
        description: Optional[str] = None,
        is_public: Optional[bool] = None
    ) -> Result:
        payload = ScheduleCreate(
            schedule_id=schedule_id,
            user_id=user_id,
            schedule_name=schedule_name,
            description=description,
            is_public=is_public
        )
        return self.call("createSchedule", payload.model_dump(exclude_none=True))

    def clone_schedule(self, source_schedule_id: str, new_schedule_id: str, new_user_id: str, new_schedule_name: str) -> Result:
        payload = ScheduleClone(
            source_schedule_id=source_schedule_id,
            new_schedule_id=new_schedule_id,
            new_user_id=new_user_id,
            new_schedule_name=new_schedule_name
        )
        return self.call("cloneSchedule", payload.model_dump())

    def add_session(self, session: Session) -> Result:
        payload = SessionCreate(**session.to_wire())
        return self.call("addSession", payload.model_dump(mode="json"))

    def delete_session(self, session_id: str) -> Result:
        return self.call("deleteSession", {"session_id": session_id})

    def create_post(self, post_id: str, category: str, title: str, content: str, user_id: Optional[str] = None) -> Result:
        payload = PostCreate(post_id=post_id, user_id=user_id, category=category, title=title, content=content)
        return self.call("createPost", payload.model_dump(exclude_none=True))

    def add_comment(self, comment_id: str, post_id: str, content: str, user_id: Optional[str] = None) -> Result:
        payload = CommentCreate(comment_id=comment_id, post_id=post_id, user_id=user_id, content=content)
        return self.call("addComment", payload.model_dump(exclude_none=True))
