"""Mentor or mentee account. Only the fields the booking core reads."""
from sqlalchemy import JSON, Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from mentorship.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(256), nullable=False)
    email = Column(String(320), nullable=False, index=True)
    as_mentor = Column(Boolean, nullable=False, default=False)  # only mentors can be booked
    is_approved = Column(Boolean, nullable=False, default=False)
    approved_email_sent = Column(Boolean, nullable=False, default=False)
    meeting_link = Column(String(512), nullable=True)
    prices = Column(JSON, nullable=True)  # ordered list of price strings, e.g. ["free", "50 USD"]

    availabilities = relationship(
        "Availability",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def first_price(self) -> str | None:
        return self.prices[0] if self.prices else None
