"""Login session owned by the auth subsystem; the cleanup job deletes rows past expiry."""
from sqlalchemy import BigInteger, Column, Integer

from mentorship.db.base import Base


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    expiry = Column(BigInteger, nullable=False, index=True)  # Unix seconds
