from dataclasses import dataclass, field
from typing import List, Optional

from plan2read.schemas import Schedule, Session
from plan2read.timeutil import Weekday


@dataclass
class LoadedSchedule:
    """The one schedule whose sessions are held in memory"""
    id: str
    name: str
    sessions: List[Session] = field(default_factory=list)


@dataclass
class PlannerState:
    """Planner view state, owned and mutated only by ScheduleRepository"""
    schedules: List[Schedule] = field(default_factory=list)
    current_schedule: Optional[LoadedSchedule] = None
    selected_day: Optional[Weekday] = None
