import logging
from typing import List, Optional, Union

from plan2read.errors import PublishIncompleteError, TransportError, ValidationError
from plan2read.gateway import RemoteStoreGateway
from plan2read.identity import new_id
from plan2read.repository import ScheduleRepository
from plan2read.schemas import Schedule
from plan2read.state import LoadedSchedule

logger = logging.getLogger(__name__)


def share_description(source_id: str) -> str:
    return f"Shared via Community from {source_id}"


def default_copy_name(name: str) -> str:
    return f"Copy of {name}"


class CommunityWorkflow:
    """
    Publishing schedules to the community and copying public ones.

    Both flows are sequences of independent backend calls. Nothing rolls
    back when a later call fails; see ``share_schedule``.
    """

    def __init__(self, gateway: RemoteStoreGateway, user_id: str, repository: Optional[ScheduleRepository] = None):
        self.gateway = gateway
        self.user_id = user_id
        self.repository = repository
        self.schedules: List[Schedule] = []

    def list_community(self) -> List[Schedule]:
        """All public schedules, the caller's own shared copies included"""
        rows = self.gateway.get_schedules()
        self.schedules = [s for s in rows if s.is_public]
        return self.schedules

    def share_schedule(self, schedule: Union[LoadedSchedule, Schedule, None] = None) -> str:
        """
        Publish a public copy of a schedule.

        Step 1 creates a public header under a fresh ID, step 2 clones the
        source's sessions onto it. If step 2 fails the public schedule
        already exists with no sessions; that is reported as
        PublishIncompleteError rather than hidden.

        Args:
            schedule: defaults to the repository's loaded schedule

        Returns:
            ID of the published schedule
        """
        if schedule is None and self.repository is not None:
            schedule = self.repository.current_schedule
        if schedule is None:
            raise ValidationError("No schedule is loaded")

        shared_id = new_id("shared_")
        self.gateway.create_schedule(
            shared_id,
            self.user_id,
            schedule.name,
            description=share_description(schedule.id),
            is_public=True
        )

        try:
            self.gateway.clone_schedule(schedule.id, shared_id, self.user_id, schedule.name)
        except TransportError as e:
            logger.error("Published %s but copying sessions from %s failed: %s", shared_id, schedule.id, e)
            raise PublishIncompleteError(
                f"'{schedule.name}' was published without its sessions: {e}",
                schedule_id=shared_id,
                cause=e
            ) from e

        logger.info("Shared schedule %s as %s", schedule.id, shared_id)
        return shared_id

    def copy_schedule(self, shared_id: str, new_name: str) -> str:
        """
        Clone a public schedule into a new private schedule owned by the caller.

        Returns:
            ID of the new schedule
        """
        new_name = (new_name or "").strip()
        if not new_name:
            raise ValidationError("A name for the copy is required")

        copy_id = new_id()
        self.gateway.clone_schedule(str(shared_id), copy_id, self.user_id, new_name)
        logger.info("Copied schedule %s into %s", shared_id, copy_id)

        if self.repository is not None:
            self.repository.load_schedules()
        return copy_id
