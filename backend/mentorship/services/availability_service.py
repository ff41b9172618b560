"""
Availability lookups for a user: bookable dates in a range and free slots on one date.
Parses wire values (YYYY-MM-DD), loads windows and bookings from the store.
"""
import logging
from datetime import date, datetime, time, timedelta, timezone

from mentorship.core.constants import DATE_FORMAT, SESSION_DURATION
from mentorship.core.errors import InvalidInputError, NotFoundError
from mentorship.db.store import Store
from mentorship.models.availability import Availability
from mentorship.models.session import MentorSession
from mentorship.models.user import User
from mentorship.services.availability import (
    AvailabilityWindow,
    AvailableWeekday,
    TimeSlot,
    available_slots,
    available_weekdays,
)

logger = logging.getLogger(__name__)


def parse_date(raw: str, field_name: str = "date") -> date:
    try:
        return datetime.strptime((raw or "").strip(), DATE_FORMAT).date()
    except ValueError:
        logger.info("Error parsing %s (%s)", field_name, raw)
        raise InvalidInputError(f"Invalid {field_name} {raw!r}. Use YYYY-MM-DD.") from None


def _load_windows(store: Store, user_id: int) -> list[AvailabilityWindow]:
    if store.get(User, user_id) is None:
        raise NotFoundError("user", user_id)
    rows = store.find(Availability, Availability.user_id == user_id, order_by=(Availability.id,))
    return [AvailabilityWindow.from_row(r) for r in rows]


def get_available_weekdays(store: Store, user_id: int, from_str: str, to_str: str) -> list[AvailableWeekday]:
    from_date = parse_date(from_str, "from")
    to_date = parse_date(to_str, "to")
    windows = _load_windows(store, user_id)
    if not windows:
        raise NotFoundError("availability for user", user_id)
    return available_weekdays(windows, from_date, to_date)


def get_available_slots(store: Store, user_id: int, date_str: str) -> list[TimeSlot]:
    day = parse_date(date_str)
    windows = _load_windows(store, user_id)
    day_start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    # Slots may run past midnight by up to one session length
    range_end = day_start + timedelta(days=1) + SESSION_DURATION
    booked = store.find(
        MentorSession,
        MentorSession.mentor_id == user_id,
        MentorSession.session_time_end > day_start,
        MentorSession.session_time_start < range_end,
    )
    return available_slots(windows, booked, day)
