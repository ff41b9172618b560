from mentorship.models.auth_session import AuthSession
from mentorship.models.availability import Availability
from mentorship.models.session import MentorSession
from mentorship.models.user import User

__all__ = [
    "AuthSession",
    "Availability",
    "MentorSession",
    "User",
]
