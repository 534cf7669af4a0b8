import logging
from typing import Dict, List, Optional, Union

from plan2read.errors import ConflictError, UnsupportedOperationError, ValidationError
from plan2read.gateway import RemoteStoreGateway
from plan2read.identity import new_id
from plan2read.preferences import PreferenceStore
from plan2read.schemas import Schedule, Session
from plan2read.state import LoadedSchedule, PlannerState
from plan2read.timeutil import TimeRange, Weekday, first_overlap, format_hhmm

logger = logging.getLogger(__name__)


class ScheduleRepository:
    """
    Cache of the current user's schedules and of one loaded schedule's sessions.

    Reads replace the cache wholesale. Writes go to the gateway first and touch
    the cache only after the backend confirmed them; when the gateway raises,
    the cache is left exactly as it was and the error propagates.
    """

    def __init__(
        self,
        gateway: RemoteStoreGateway,
        user_id: str,
        prefs: Optional[PreferenceStore] = None,
        state: Optional[PlannerState] = None
    ):
        self.gateway = gateway
        self.user_id = user_id
        self.prefs = prefs or PreferenceStore()
        self.state = state or PlannerState()

    @property
    def schedules(self) -> List[Schedule]:
        return self.state.schedules

    @property
    def current_schedule(self) -> Optional[LoadedSchedule]:
        return self.state.current_schedule

    @property
    def selected_day(self) -> Optional[Weekday]:
        return self.state.selected_day

    # Schedules

    def load_schedules(self) -> List[Schedule]:
        """Fetch schedules and keep only the ones this user owns"""
        rows = self.gateway.get_schedules(self.user_id)
        # getSchedules also returns other users' public schedules; those belong to the community view
        self.state.schedules = [s for s in rows if s.owner_id == self.user_id]
        logger.debug("Loaded %d schedule(s)", len(self.state.schedules))
        return self.state.schedules

    def find_schedule(self, schedule_id: str) -> Optional[Schedule]:
        return next((s for s in self.state.schedules if s.id == str(schedule_id)), None)

    def load_schedule(self, schedule_id: str) -> Optional[LoadedSchedule]:
        """
        Hydrate one of the user's schedules with its sessions.

        Unknown IDs are ignored and return None.
        """
        meta = self.find_schedule(schedule_id)
        if meta is None:
            return None

        sessions = self.gateway.get_sessions(meta.id)
        self.state.current_schedule = LoadedSchedule(id=meta.id, name=meta.name, sessions=sessions)
        self.prefs.current_schedule_id = meta.id
        return self.state.current_schedule

    def open_planner(self) -> Optional[LoadedSchedule]:
        """Load the schedule list, then the remembered schedule or the first one"""
        self.load_schedules()
        remembered = self.prefs.current_schedule_id
        if remembered and self.find_schedule(remembered):
            return self.load_schedule(remembered)
        if self.state.schedules:
            return self.load_schedule(self.state.schedules[0].id)
        self.state.current_schedule = None
        return None

    def create_schedule(self, name: str) -> str:
        """Create an empty private schedule and refresh the list. Returns its ID."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Schedule name is required")

        schedule_id = new_id()
        self.gateway.create_schedule(schedule_id, self.user_id, name, description="", is_public=False)
        logger.info("Created schedule %s (%s)", schedule_id, name)
        self.load_schedules()
        return schedule_id

    def delete_schedule(self):
        # No deleteSchedule action exists on the backend yet
        raise UnsupportedOperationError("Deleting schedules is not yet supported")

    # Days

    def select_day(self, day: Union[Weekday, str]) -> Weekday:
        try:
            self.state.selected_day = Weekday.parse(day)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        return self.state.selected_day

    def clear_day(self):
        """Back to the weekly view"""
        self.state.selected_day = None

    def sessions_for_day(self, day: Union[Weekday, str, None] = None) -> List[Session]:
        """Sessions of the loaded schedule on one day, earliest first"""
        if self.state.current_schedule is None:
            return []
        try:
            day = Weekday.parse(day) if day is not None else self.state.selected_day
        except ValueError as e:
            raise ValidationError(str(e)) from None
        matches = [s for s in self.state.current_schedule.sessions if s.day_of_week == day]
        return sorted(matches, key=lambda s: s.time_range.start)

    def session_counts(self) -> Dict[Weekday, int]:
        """Number of sessions per weekday, Monday first"""
        counts = {day: 0 for day in Weekday}
        if self.state.current_schedule is not None:
            for session in self.state.current_schedule.sessions:
                counts[session.day_of_week] += 1
        return counts

    # Sessions

    def add_session(
        self,
        subject: str,
        start_time: str,
        end_time: str,
        day: Union[Weekday, str, None] = None
    ) -> Session:
        """
        Validate a new session against the loaded schedule and store it.

        Checks run in order: required fields, start before end, no overlap
        with another session that day. Only then is the backend called, and
        the session shows up locally once the backend accepted it.

        Args:
            day: defaults to the selected day; passing one does not change the selection

        Raises:
            ValidationError: missing/malformed input or start not before end
            ConflictError: overlaps an existing session on that day
            TransportError: the backend rejected or never received the write
        """
        current = self.state.current_schedule
        if current is None:
            raise ValidationError("No schedule is loaded")
        if day is not None:
            try:
                day = Weekday.parse(day)
            except ValueError as e:
                raise ValidationError(str(e)) from None
        else:
            day = self.state.selected_day
        if day is None:
            raise ValidationError("No day is selected")

        subject = (subject or "").strip()
        if not subject or not start_time or not end_time:
            logger.info("Rejected session: missing fields")
            raise ValidationError("Subject, start time and end time are required")

        try:
            candidate = TimeRange.from_strings(start_time, end_time)
        except ValueError as e:
            raise ValidationError(str(e)) from None
        if candidate.is_empty:
            logger.info("Rejected session %s: start not before end", candidate)
            raise ValidationError("Start time must precede end time")

        same_day = [(s, s.time_range) for s in current.sessions if s.day_of_week == day]
        clash = first_overlap(candidate, same_day)
        if clash is not None:
            logger.info("Rejected session %s on %s: overlaps %s", candidate, day.value, clash.id)
            raise ConflictError(
                f"{format_hhmm(candidate.start)}-{format_hhmm(candidate.end)} overlaps "
                f"{clash.subject} ({clash.start_time}-{clash.end_time}) on {day.value}"
            )

        session = Session(
            id=new_id(),
            schedule_id=current.id,
            day_of_week=day,
            subject=subject,
            start_time=format_hhmm(candidate.start),
            end_time=format_hhmm(candidate.end)
        )
        self.gateway.add_session(session)
        current.sessions.append(session)
        return session

    def delete_session(self, session_id: str):
        """Delete remotely, then drop the session from the loaded schedule"""
        self.gateway.delete_session(session_id)
        current = self.state.current_schedule
        if current is not None:
            current.sessions = [s for s in current.sessions if s.id != session_id]
