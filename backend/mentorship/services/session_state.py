"""
Session lifecycle: pure transition logic.

Each action takes the current session (anything with the MentorSession attributes) and
returns a Transition: the next status plus the field values to persist. Nothing here
touches the store or the clock; session_service applies the result.

The scheduler-driven expire/complete rules live here too, as bulk criteria that the
status job hands to Store.update_many with the EXPIRE / COMPLETE transitions.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from mentorship.core.constants import SESSION_DURATION
from mentorship.core.errors import InvalidTransitionError
from mentorship.core.status import (
    RESCHEDULING_STATUSES,
    SessionStatus,
    is_terminal,
    status_name,
)
from mentorship.models.session import MentorSession


@dataclass(frozen=True)
class Transition:
    status: SessionStatus
    changes: dict[str, Any] = field(default_factory=dict)

    def values(self) -> dict[str, Any]:
        """Column values to write, status included."""
        return {**self.changes, "status": int(self.status)}


def _ensure_active(session, action: str) -> None:
    if is_terminal(session.status):
        raise InvalidTransitionError(
            f"Cannot {action} session {session.id}: status is {status_name(session.status)}"
        )


def create_booking(mentor, session_time_start: datetime) -> Transition:
    """New booking from a mentee: waits for the mentor, copies the mentor's link and first price."""
    return Transition(
        status=SessionStatus.PENDING_BY_MENTOR,
        changes={
            "session_time_start": session_time_start,
            "session_time_end": session_time_start + SESSION_DURATION,
            "meeting_link": mentor.meeting_link,
            "payment_details": mentor.first_price,
        },
    )


def request_reschedule(session, actor_id: int, new_session_time_start: datetime) -> Transition:
    """Propose a new time; committed times stay until the other side confirms."""
    _ensure_active(session, "reschedule")
    status = (
        SessionStatus.RESCHEDULING_BY_MENTOR
        if actor_id == session.mentor_id
        else SessionStatus.RESCHEDULING_BY_MENTEE
    )
    return Transition(
        status=status,
        changes={
            "new_session_time_start": new_session_time_start,
            "new_session_time_end": new_session_time_start + SESSION_DURATION,
        },
    )


def confirm(session) -> Transition:
    """
    Confirm a pending booking or a pending reschedule.

    A plain booking keeps its times. A reschedule promotes new_* into the committed
    fields and clears new_*.
    """
    if session.status in (SessionStatus.CREATED_BY_MENTEE, SessionStatus.PENDING_BY_MENTOR):
        return Transition(status=SessionStatus.CONFIRMED)
    if session.status in RESCHEDULING_STATUSES and session.new_session_time_start is not None:
        new_end = session.new_session_time_end or session.new_session_time_start + SESSION_DURATION
        return Transition(
            status=SessionStatus.CONFIRMED,
            changes={
                "session_time_start": session.new_session_time_start,
                "session_time_end": new_end,
                "new_session_time_start": None,
                "new_session_time_end": None,
            },
        )
    raise InvalidTransitionError(
        f"Session {session.id} has nothing to confirm (status {status_name(session.status)})"
    )


def cancel(session, actor_id: int) -> Transition:
    _ensure_active(session, "cancel")
    if actor_id == session.mentor_id:
        return Transition(status=SessionStatus.CANCELED_BY_MENTOR)
    return Transition(status=SessionStatus.CANCELED_BY_MENTEE)


EXPIRE = Transition(status=SessionStatus.EXPIRED)
COMPLETE = Transition(status=SessionStatus.COMPLETED)


def expire_criteria(now: datetime) -> list:
    """Pending or rescheduling sessions whose end has passed."""
    return [
        MentorSession.session_time_end < now,
        MentorSession.status < int(SessionStatus.CONFIRMED),
    ]


def complete_criteria(now: datetime) -> list:
    """Confirmed sessions that have started."""
    return [
        MentorSession.session_time_start < now,
        MentorSession.status == int(SessionStatus.CONFIRMED),
    ]
