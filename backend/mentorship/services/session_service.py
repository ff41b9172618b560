"""
Session operations over the store: booking, reschedule, confirm, cancel, listings.

Transitions come from session_state; this module only loads, persists and shapes views.
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from mentorship.core.errors import InvalidInputError, InvalidTransitionError, NotFoundError
from mentorship.core.status import (
    SessionStatus,
    status_for_mentee,
    status_for_mentor,
    status_group,
    status_name,
)
from mentorship.core.time import as_utc
from mentorship.db.store import Store
from mentorship.models.session import MentorSession
from mentorship.models.user import User
from mentorship.services import session_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionView:
    session_id: int
    mentor_id: int
    mentee_id: int
    session_time_start: datetime
    session_time_end: datetime
    new_session_time_start: datetime | None
    new_session_time_end: datetime | None
    session_status: int
    status: str
    status_for_mentor: str
    status_for_mentee: str
    group: str
    request_from_mentee: str | None
    payment_details: str | None
    meeting_link: str | None
    mentee_review: str | None
    mentee_rating: int | None


def to_view(row: MentorSession) -> SessionView:
    return SessionView(
        session_id=row.id,
        mentor_id=row.mentor_id,
        mentee_id=row.mentee_id,
        session_time_start=as_utc(row.session_time_start),
        session_time_end=as_utc(row.session_time_end),
        new_session_time_start=as_utc(row.new_session_time_start),
        new_session_time_end=as_utc(row.new_session_time_end),
        session_status=row.status,
        status=status_name(row.status),
        status_for_mentor=status_for_mentor(row.status),
        status_for_mentee=status_for_mentee(row.status),
        group=status_group(row.status),
        request_from_mentee=row.request_from_mentee,
        payment_details=row.payment_details,
        meeting_link=row.meeting_link,
        mentee_review=row.mentee_review,
        mentee_rating=row.mentee_rating,
    )


def _require_utc(value: datetime, field_name: str) -> datetime:
    if value is None:
        raise InvalidInputError(f"{field_name} is required.")
    if value.tzinfo is None:
        raise InvalidInputError(f"{field_name} must include a timezone.")
    return value.astimezone(timezone.utc)


def _load_session(store: Store, session_id: int) -> MentorSession:
    row = store.get(MentorSession, session_id)
    if row is None:
        raise NotFoundError("session", session_id)
    return row


def _apply(store: Store, row: MentorSession, transition: session_state.Transition) -> SessionView:
    # The transition was checked against row.status; write only if it still holds
    updated = store.update_one(
        MentorSession, row.id, transition.values(), MentorSession.status == row.status
    )
    if updated is None:
        current = _load_session(store, row.id)
        raise InvalidTransitionError(
            f"Session {row.id} changed to {status_name(current.status)} while "
            f"moving from {status_name(row.status)} to {status_name(transition.status)}"
        )
    logger.info(
        "Session %s: %s -> %s", row.id, status_name(row.status), status_name(updated.status)
    )
    return to_view(updated)


def create_booking(
    store: Store,
    mentor_id: int,
    mentee_id: int,
    session_time_start: datetime,
    request_from_mentee: str | None = None,
) -> SessionView:
    start = _require_utc(session_time_start, "session_time_start")
    mentor = store.find_one(User, User.id == mentor_id, User.as_mentor.is_(True))
    if mentor is None:
        raise NotFoundError("mentor", mentor_id)
    if store.get(User, mentee_id) is None:
        raise NotFoundError("mentee", mentee_id)
    transition = session_state.create_booking(mentor, start)
    row = store.add(
        MentorSession(
            mentor_id=mentor_id,
            mentee_id=mentee_id,
            request_from_mentee=(request_from_mentee or "").strip() or None,
            **transition.values(),
        )
    )
    logger.info("Session(mentee_id=%s, mentor_id=%s, session_id=%s) created", mentee_id, mentor_id, row.id)
    return to_view(row)


def request_reschedule(store: Store, session_id: int, actor_id: int, new_session_time_start: datetime) -> SessionView:
    new_start = _require_utc(new_session_time_start, "new_session_time_start")
    row = _load_session(store, session_id)
    return _apply(store, row, session_state.request_reschedule(row, actor_id, new_start))


def confirm_reschedule(store: Store, session_id: int) -> SessionView:
    row = _load_session(store, session_id)
    return _apply(store, row, session_state.confirm(row))


def cancel(store: Store, session_id: int, actor_id: int) -> SessionView:
    row = _load_session(store, session_id)
    return _apply(store, row, session_state.cancel(row, actor_id))


def get_session(store: Store, session_id: int) -> SessionView:
    return to_view(_load_session(store, session_id))


def _participant_filter(user_id: int, as_mentor: bool):
    return MentorSession.mentor_id == user_id if as_mentor else MentorSession.mentee_id == user_id


def list_user_sessions(store: Store, user_id: int, as_mentor: bool) -> list[SessionView]:
    rows = store.find(
        MentorSession,
        _participant_filter(user_id, as_mentor),
        order_by=(MentorSession.session_time_start.asc(),),
    )
    return [to_view(r) for r in rows]


def list_user_upcoming_sessions(store: Store, user_id: int, as_mentor: bool) -> list[SessionView]:
    """Sessions still ahead: pending, rescheduling or confirmed."""
    rows = store.find(
        MentorSession,
        _participant_filter(user_id, as_mentor),
        MentorSession.status <= int(SessionStatus.CONFIRMED),
        order_by=(MentorSession.session_time_start.asc(),),
    )
    return [to_view(r) for r in rows]
