"""Booked mentoring session. Never deleted; terminal statuses stay for history."""
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from mentorship.core.status import SessionStatus
from mentorship.db.base import Base


class MentorSession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mentor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    mentee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    session_time_start = Column(DateTime(timezone=True), nullable=False, index=True)
    session_time_end = Column(DateTime(timezone=True), nullable=False, index=True)
    # Proposed reschedule; set only while status is RESCHEDULING_*
    new_session_time_start = Column(DateTime(timezone=True), nullable=True)
    new_session_time_end = Column(DateTime(timezone=True), nullable=True)
    status = Column(Integer, nullable=False, default=int(SessionStatus.PENDING_BY_MENTOR), index=True)
    request_from_mentee = Column(Text, nullable=True)
    payment_details = Column(String(128), nullable=True)
    meeting_link = Column(String(512), nullable=True)
    mentee_review = Column(Text, nullable=True)
    mentee_rating = Column(Integer, nullable=True)
    review_email_sent = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
