from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from conftest import add_availability, add_session
from mentorship.core.errors import InvalidInputError, NotFoundError
from mentorship.core.status import SessionStatus
from mentorship.services.availability import (
    AvailabilityWindow,
    available_slots,
    available_weekdays,
    deduplicate_slots,
)
from mentorship.services.availability_service import get_available_slots, get_available_weekdays

MONDAY = date(2030, 1, 7)


def at(hour, minute=0, day=MONDAY):
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=timezone.utc)


def test_available_weekdays_lists_every_matching_date():
    windows = [
        AvailabilityWindow.parse("Mon", "09:00", "11:00"),
        AvailabilityWindow.parse("Mon", "14:00", "15:00"),
        AvailabilityWindow.parse("Wed", "09:00", "10:00"),
    ]
    result = available_weekdays(windows, date(2030, 1, 6), date(2030, 1, 16))
    assert [(r.date, r.weekday) for r in result] == [
        (date(2030, 1, 7), "Monday"),
        (date(2030, 1, 9), "Wednesday"),
        (date(2030, 1, 14), "Monday"),
        (date(2030, 1, 16), "Wednesday"),
    ]


def test_available_weekdays_is_idempotent_and_bounded():
    windows = [AvailabilityWindow.parse("Sun", "09:00", "10:00")]
    first = available_weekdays(windows, date(2030, 1, 1), date(2030, 1, 31))
    assert first == available_weekdays(windows, date(2030, 1, 1), date(2030, 1, 31))
    assert all(date(2030, 1, 1) <= r.date <= date(2030, 1, 31) for r in first)
    assert all(r.date.weekday() == 6 for r in first)
    assert len(first) == 4


def test_available_weekdays_empty_for_reversed_range():
    windows = [AvailabilityWindow.parse("Mon", "09:00", "10:00")]
    assert available_weekdays(windows, date(2030, 1, 14), date(2030, 1, 7)) == []


def test_available_slots_without_bookings():
    windows = [AvailabilityWindow.parse("Mon", "09:00", "11:00")]
    slots = available_slots(windows, [], MONDAY)
    assert [(s.start_time, s.end_time) for s in slots] == [
        (at(9), at(10)),
        (at(9, 30), at(10, 30)),
        (at(10), at(11)),
        (at(10, 30), at(11, 30)),
    ]


def test_available_slots_ignores_other_weekdays():
    windows = [AvailabilityWindow.parse("Tue", "09:00", "11:00")]
    assert available_slots(windows, [], MONDAY) == []


def test_overlapping_windows_emit_duplicates_unless_deduplicated():
    windows = [
        AvailabilityWindow.parse("Mon", "09:00", "10:00"),
        AvailabilityWindow.parse("Mon", "09:30", "10:30"),
    ]
    slots = available_slots(windows, [], MONDAY)
    assert [s.start_time for s in slots] == [at(9), at(9, 30), at(9, 30), at(10)]
    assert [s.start_time for s in deduplicate_slots(slots)] == [at(9), at(9, 30), at(10)]


def test_available_slots_applies_conflicts_once_across_windows():
    windows = [
        AvailabilityWindow.parse("Mon", "09:00", "10:00"),
        AvailabilityWindow.parse("Mon", "13:00", "14:00"),
    ]
    bookings = [
        SimpleNamespace(session_time_start=at(9, 30), session_time_end=at(10, 30), status=int(SessionStatus.CONFIRMED)),
        SimpleNamespace(session_time_start=at(13), session_time_end=at(14), status=int(SessionStatus.EXPIRED)),
    ]
    slots = available_slots(windows, bookings, MONDAY)
    assert [s.start_time for s in slots] == [at(13), at(13, 30)]


def test_service_slots_exclude_booked_sessions(store, mentor, mentee):
    add_availability(store, mentor, "Mon", "09:00", "11:00")
    add_session(store, mentor, mentee, at(10, 30), status=SessionStatus.CONFIRMED)
    add_session(store, mentor, mentee, at(9), status=SessionStatus.CANCELED_BY_MENTEE)
    slots = get_available_slots(store, mentor.id, "2030-01-07")
    assert [s.start_time for s in slots] == [at(9), at(9, 30)]


def test_service_weekdays(store, mentor):
    add_availability(store, mentor, "Fri", "18:00", "20:00")
    result = get_available_weekdays(store, mentor.id, "2030-01-01", "2030-01-14")
    assert [r.date for r in result] == [date(2030, 1, 4), date(2030, 1, 11)]


def test_service_weekdays_without_availability_is_not_found(store, mentor):
    with pytest.raises(NotFoundError):
        get_available_weekdays(store, mentor.id, "2030-01-01", "2030-01-14")


def test_service_unknown_user_is_not_found(store):
    with pytest.raises(NotFoundError):
        get_available_slots(store, 999, "2030-01-07")


@pytest.mark.parametrize("raw", ["2030-13-01", "07.01.2030", "", "2030-01-07T10:00"])
def test_service_rejects_malformed_dates(store, mentor, raw):
    with pytest.raises(InvalidInputError):
        get_available_slots(store, mentor.id, raw)
