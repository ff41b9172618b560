"""Recurring weekly window during which a mentor can be booked. Times are HH:MM in UTC."""
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from mentorship.db.base import Base


class Availability(Base):
    __tablename__ = "availabilities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    weekday = Column(String(3), nullable=False)  # Mon | Tue | ... | Sun
    time_from = Column(String(5), nullable=False)  # HH:MM
    time_to = Column(String(5), nullable=False)

    user = relationship("User", back_populates="availabilities")
