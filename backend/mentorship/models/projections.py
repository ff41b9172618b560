"""Read-only projections returned by store joins (not mapped tables)."""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionNotification:
    """One session joined with mentor and mentee contact details."""
    session_id: int
    mentor_id: int
    mentee_id: int
    session_time_start: datetime
    session_time_end: datetime
    meeting_link: str | None
    payment_details: str | None
    mentor_name: str
    mentor_email: str
    mentee_name: str
    mentee_email: str
