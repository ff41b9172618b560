from mentorship.services.notifications.base import (
    Notification,
    NotificationGateway,
    NotificationKind,
    Recipient,
    RecipientRole,
    mentor_approved_notification,
    review_request_notification,
    upcoming_session_notification,
)
from mentorship.services.notifications.sendgrid import SendGridGateway

__all__ = [
    "Notification",
    "NotificationGateway",
    "NotificationKind",
    "Recipient",
    "RecipientRole",
    "SendGridGateway",
    "mentor_approved_notification",
    "review_request_notification",
    "upcoming_session_notification",
]
