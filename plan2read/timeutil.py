import re
from enum import Enum
from typing import Iterable, Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class Weekday(str, Enum):
    """Day labels used on the wire, Monday first"""
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def parse(cls, value) -> "Weekday":
        """Accept a Weekday or its label in any case"""
        if isinstance(value, cls):
            return value
        label = str(value).strip().capitalize()
        try:
            return cls(label)
        except ValueError:
            raise ValueError(f"Unknown day of week: {value!r}") from None


def parse_hhmm(value: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(str(value).strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {value!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {value!r}")
    return hh, mm


def to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" string"""
    hh, mm = parse_hhmm(value)
    return hh * 60 + mm


def format_hhmm(minutes: int) -> str:
    """Zero-padded 24-hour "HH:MM" for minutes since midnight"""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_hhmm(value: str) -> str:
    """Re-emit a time as zero-padded "HH:MM" ("9:05" -> "09:05")"""
    return format_hhmm(to_minutes(value))


class TimeRange:
    """
    Half-open interval [start, end) in minutes since midnight.

    Two ranges overlap iff a.start < b.end and a.end > b.start, so ranges that
    only touch (10:00-11:00 and 11:00-12:00) do not overlap.
    """

    __slots__ = ("start", "end")

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end

    @classmethod
    def from_strings(cls, start: str, end: str) -> "TimeRange":
        return cls(to_minutes(start), to_minutes(end))

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def overlaps(self, other: "TimeRange") -> bool:
        return self.start < other.end and self.end > other.start

    def __eq__(self, other):
        if not isinstance(other, TimeRange):
            return NotImplemented
        return (self.start, self.end) == (other.start, other.end)

    def __repr__(self):
        return f"TimeRange({format_hhmm(self.start)}-{format_hhmm(self.end)})"


def first_overlap(candidate: TimeRange, existing: Iterable[Tuple[object, TimeRange]]):
    """Return the first item whose range overlaps ``candidate``, or None"""
    for item, rng in existing:
        if candidate.overlaps(rng):
            return item
    return None
