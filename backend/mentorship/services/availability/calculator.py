"""
Availability across days: which dates are bookable and which slots are free on a date.
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from mentorship.services.availability.slots import (
    AvailabilityWindow,
    BookedInterval,
    TimeSlot,
    filter_conflicts,
    generate_time_slots,
)


@dataclass(frozen=True)
class AvailableWeekday:
    date: date
    weekday: str  # full English name, e.g. "Monday"


def available_weekdays(
    availabilities: Iterable[AvailabilityWindow],
    from_date: date,
    to_date: date,
) -> list[AvailableWeekday]:
    """Every date in [from_date, to_date] whose weekday has at least one window, in date order."""
    weekdays = {w.weekday.number for w in availabilities}
    result: list[AvailableWeekday] = []
    current = from_date
    while current <= to_date:
        if current.weekday() in weekdays:
            result.append(AvailableWeekday(date=current, weekday=current.strftime("%A")))
        current += timedelta(days=1)
    return result


def available_slots(
    availabilities: Sequence[AvailabilityWindow],
    booked_sessions: Iterable[BookedInterval],
    day: date,
) -> list[TimeSlot]:
    """
    Free slots on one date. Windows matching the weekday are concatenated in input order;
    overlapping windows each emit their own slots (no dedup, see deduplicate_slots).
    """
    candidates: list[TimeSlot] = []
    for window in availabilities:
        if window.matches(day):
            candidates.extend(generate_time_slots(window, day))
    return list(filter_conflicts(candidates, list(booked_sessions)))


def deduplicate_slots(slots: Iterable[TimeSlot]) -> list[TimeSlot]:
    """Opt-in: keep the first slot per start time. Not applied by available_slots."""
    seen = set()
    result = []
    for slot in slots:
        if slot.start_time in seen:
            continue
        seen.add(slot.start_time)
        result.append(slot)
    return result
