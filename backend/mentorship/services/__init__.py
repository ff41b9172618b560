from mentorship.services.availability_service import get_available_slots, get_available_weekdays
from mentorship.services.session_service import (
    cancel,
    confirm_reschedule,
    create_booking,
    get_session,
    list_user_sessions,
    list_user_upcoming_sessions,
    request_reschedule,
)

__all__ = [
    "cancel",
    "confirm_reschedule",
    "create_booking",
    "get_available_slots",
    "get_available_weekdays",
    "get_session",
    "list_user_sessions",
    "list_user_upcoming_sessions",
    "request_reschedule",
]
