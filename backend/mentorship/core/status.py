"""
Session status: a persisted ordinal with a total order.

The integer values are part of the stored contract. Scheduler filters and the
pending/upcoming grouping compare ordinals, so reordering members changes job semantics.
"""
from enum import IntEnum


class SessionStatus(IntEnum):
    CREATED_BY_MENTEE = 0
    PENDING_BY_MENTOR = 1
    RESCHEDULING_BY_MENTOR = 2
    RESCHEDULING_BY_MENTEE = 3
    CONFIRMED = 4
    COMPLETED = 5
    CANCELED_BY_MENTOR = 6
    CANCELED_BY_MENTEE = 7
    EXPIRED = 8


TERMINAL_STATUSES = frozenset(
    {
        SessionStatus.COMPLETED,
        SessionStatus.CANCELED_BY_MENTOR,
        SessionStatus.CANCELED_BY_MENTEE,
        SessionStatus.EXPIRED,
    }
)

RESCHEDULING_STATUSES = frozenset(
    {SessionStatus.RESCHEDULING_BY_MENTOR, SessionStatus.RESCHEDULING_BY_MENTEE}
)

# Booked sessions below this ordinal block overlapping slots (CREATED_BY_MENTEE..CONFIRMED)
BLOCKING_STATUS_LIMIT = SessionStatus.COMPLETED

UNKNOWN_STATUS_TEXT = "Unknown"

PENDING_GROUP = "pending"
UPCOMING_GROUP = "upcoming"

_STATUS_NAMES = {
    SessionStatus.CREATED_BY_MENTEE: "CreatedByMentee",
    SessionStatus.PENDING_BY_MENTOR: "PendingByMentor",
    SessionStatus.RESCHEDULING_BY_MENTOR: "ReschedulingByMentor",
    SessionStatus.RESCHEDULING_BY_MENTEE: "ReschedulingByMentee",
    SessionStatus.CONFIRMED: "Confirmed",
    SessionStatus.COMPLETED: "Completed",
    SessionStatus.CANCELED_BY_MENTOR: "CanceledByMentor",
    SessionStatus.CANCELED_BY_MENTEE: "CanceledByMentee",
    SessionStatus.EXPIRED: "Expired",
}

_STATUS_FOR_MENTOR = {
    SessionStatus.CREATED_BY_MENTEE: "New request",
    SessionStatus.PENDING_BY_MENTOR: "Waiting for your confirmation",
    SessionStatus.RESCHEDULING_BY_MENTOR: "Waiting for mentee to accept the new time",
    SessionStatus.RESCHEDULING_BY_MENTEE: "Mentee proposed a new time",
    SessionStatus.CONFIRMED: "Confirmed",
    SessionStatus.COMPLETED: "Completed",
    SessionStatus.CANCELED_BY_MENTOR: "Canceled by you",
    SessionStatus.CANCELED_BY_MENTEE: "Canceled by mentee",
    SessionStatus.EXPIRED: "Expired",
}

_STATUS_FOR_MENTEE = {
    SessionStatus.CREATED_BY_MENTEE: "Request created",
    SessionStatus.PENDING_BY_MENTOR: "Waiting for mentor confirmation",
    SessionStatus.RESCHEDULING_BY_MENTOR: "Mentor proposed a new time",
    SessionStatus.RESCHEDULING_BY_MENTEE: "Waiting for mentor to accept the new time",
    SessionStatus.CONFIRMED: "Confirmed",
    SessionStatus.COMPLETED: "Completed",
    SessionStatus.CANCELED_BY_MENTOR: "Canceled by mentor",
    SessionStatus.CANCELED_BY_MENTEE: "Canceled by you",
    SessionStatus.EXPIRED: "Expired",
}


def _lookup(table: dict[SessionStatus, str], value: int | None) -> str:
    if value is None:
        return UNKNOWN_STATUS_TEXT
    try:
        return table.get(SessionStatus(value), UNKNOWN_STATUS_TEXT)
    except ValueError:
        return UNKNOWN_STATUS_TEXT


def status_name(value: int | None) -> str:
    return _lookup(_STATUS_NAMES, value)


def status_for_mentor(value: int | None) -> str:
    return _lookup(_STATUS_FOR_MENTOR, value)


def status_for_mentee(value: int | None) -> str:
    return _lookup(_STATUS_FOR_MENTEE, value)


def status_group(value: int) -> str:
    """
    Display group for a status ordinal.

    Everything from CONFIRMED upward is "upcoming", so COMPLETED (and the canceled/expired
    side statuses) land in "upcoming" too. Downstream consumers rely on this split as-is.
    """
    return PENDING_GROUP if value < SessionStatus.CONFIRMED else UPCOMING_GROUP


def is_terminal(value: int) -> bool:
    try:
        return SessionStatus(value) in TERMINAL_STATUSES
    except ValueError:
        return False
