"""
Slot generation and conflict filtering for one availability window.

Both are pure: no store access, no clock. Times are UTC.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Iterable, Iterator, Protocol

from mentorship.core.constants import SESSION_DURATION, SLOT_STEP, TIME_FORMAT
from mentorship.core.errors import InvalidInputError
from mentorship.core.status import BLOCKING_STATUS_LIMIT
from mentorship.core.time import as_utc


class Weekday(str, Enum):
    """Stored weekday abbreviation; .number matches date.weekday() (Mon=0)."""
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"
    SUN = "Sun"

    @property
    def number(self) -> int:
        return list(Weekday).index(self)

    @classmethod
    def parse(cls, raw: str) -> "Weekday":
        try:
            return cls((raw or "").strip()[:3].title())
        except ValueError:
            raise InvalidInputError(f"Invalid weekday {raw!r}. Use Mon..Sun.") from None


def parse_time_of_day(raw: str) -> time:
    try:
        return datetime.strptime((raw or "").strip(), TIME_FORMAT).time()
    except ValueError:
        raise InvalidInputError(f"Invalid time {raw!r}. Use HH:MM.") from None


@dataclass(frozen=True)
class AvailabilityWindow:
    """Parsed, validated weekly window."""
    weekday: Weekday
    time_from: time
    time_to: time

    @classmethod
    def parse(cls, weekday: str, time_from: str, time_to: str) -> "AvailabilityWindow":
        window = cls(Weekday.parse(weekday), parse_time_of_day(time_from), parse_time_of_day(time_to))
        if window.time_from >= window.time_to:
            raise InvalidInputError(f"Availability {time_from}-{time_to} must start before it ends.")
        return window

    @classmethod
    def from_row(cls, row) -> "AvailabilityWindow":
        """Build from anything with weekday/time_from/time_to attributes (e.g. the ORM row)."""
        return cls.parse(row.weekday, row.time_from, row.time_to)

    def matches(self, day: date) -> bool:
        return day.weekday() == self.weekday.number


@dataclass(frozen=True)
class TimeSlot:
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class TimeSlotRange:
    """
    Candidate slots for one window on one date. Iterating again restarts from the first slot.

    The loop runs while start < time_to and emits while start < time_to + session_duration,
    so the last slot may end past time_to.
    """
    window: AvailabilityWindow
    day: date
    slot_step: timedelta = SLOT_STEP
    session_duration: timedelta = SESSION_DURATION

    def __iter__(self) -> Iterator[TimeSlot]:
        start = datetime.combine(self.day, self.window.time_from, tzinfo=timezone.utc)
        end = datetime.combine(self.day, self.window.time_to, tzinfo=timezone.utc)
        current = start
        while current < end:
            if current < end + self.session_duration:
                yield TimeSlot(start_time=current, end_time=current + self.session_duration)
            current += self.slot_step


def generate_time_slots(window: AvailabilityWindow, day: date) -> TimeSlotRange:
    return TimeSlotRange(window=window, day=day)


class BookedInterval(Protocol):
    session_time_start: datetime
    session_time_end: datetime
    status: int


def _blocks(booked: BookedInterval) -> bool:
    return booked.status < BLOCKING_STATUS_LIMIT


def _overlaps(slot: TimeSlot, start: datetime, end: datetime) -> bool:
    return slot.end_time > start and slot.start_time < end


def filter_conflicts(slots: Iterable[TimeSlot], booked_sessions: Iterable[BookedInterval]) -> Iterator[TimeSlot]:
    """Drop slots overlapping any active booking; canceled/expired bookings never block."""
    blocking = [
        (as_utc(b.session_time_start), as_utc(b.session_time_end)) for b in booked_sessions if _blocks(b)
    ]
    for slot in slots:
        if not any(_overlaps(slot, start, end) for start, end in blocking):
            yield slot
