"""Notification payloads and the gateway protocol. Delivery channel is the gateway's choice."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from mentorship.core.constants import DATE_FORMAT, TIME_FORMAT
from mentorship.models.projections import SessionNotification


class NotificationKind(str, Enum):
    UPCOMING_SESSION = "upcoming_session"
    REVIEW_REQUEST = "review_request"
    MENTOR_APPROVED = "mentor_approved"


class RecipientRole(str, Enum):
    MENTOR = "mentor"
    MENTEE = "mentee"


@dataclass(frozen=True)
class Recipient:
    name: str
    email: str
    role: RecipientRole


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    key: str  # entity key, e.g. "session:42"; one pending dispatch per key
    recipients: tuple[Recipient, ...]
    data: dict[str, Any] = field(default_factory=dict)


class NotificationGateway(Protocol):
    """Sends one prepared notification. Returns True when the provider accepted it."""

    def send(self, notification: Notification) -> bool:
        ...


def _session_data(session: SessionNotification) -> dict[str, Any]:
    start = session.session_time_start
    return {
        "mentorName": session.mentor_name,
        "menteeName": session.mentee_name,
        "sessionDate": start.strftime(f"{DATE_FORMAT} {TIME_FORMAT}"),
        "sessionTime": start.strftime(TIME_FORMAT),
        "meetingLink": session.meeting_link,
        "paymentDetails": session.payment_details,
    }


def _both_sides(session: SessionNotification) -> tuple[Recipient, ...]:
    return (
        Recipient(session.mentee_name, session.mentee_email, RecipientRole.MENTEE),
        Recipient(session.mentor_name, session.mentor_email, RecipientRole.MENTOR),
    )


def upcoming_session_notification(session: SessionNotification) -> Notification:
    return Notification(
        kind=NotificationKind.UPCOMING_SESSION,
        key=f"session:{session.session_id}",
        recipients=_both_sides(session),
        data=_session_data(session),
    )


def review_request_notification(session: SessionNotification) -> Notification:
    """Review prompt goes to the mentee only."""
    return Notification(
        kind=NotificationKind.REVIEW_REQUEST,
        key=f"review:{session.session_id}",
        recipients=(Recipient(session.mentee_name, session.mentee_email, RecipientRole.MENTEE),),
        data=_session_data(session),
    )


def mentor_approved_notification(user) -> Notification:
    return Notification(
        kind=NotificationKind.MENTOR_APPROVED,
        key=f"approved:{user.id}",
        recipients=(Recipient(user.name, user.email, RecipientRole.MENTOR),),
        data={"name": user.name},
    )
