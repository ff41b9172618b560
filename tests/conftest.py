import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SENDGRID_API_KEY", "")

from datetime import datetime, timedelta, timezone

import pytest

from mentorship.core.status import SessionStatus
from mentorship.db import Base, Store, create_db_engine, create_session_factory
from mentorship.models import Availability, MentorSession, User

# A Monday
NOW = datetime(2030, 1, 7, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def store(engine):
    return Store(create_session_factory(engine))


@pytest.fixture
def mentor(store):
    return store.add(
        User(
            name="Mia Mentor",
            email="mia@example.com",
            as_mentor=True,
            meeting_link="https://meet.example.com/mia",
            prices=["50 USD", "free"],
        )
    )


@pytest.fixture
def mentee(store):
    return store.add(User(name="Max Mentee", email="max@example.com"))


def add_session(store, mentor, mentee, start, status=SessionStatus.CONFIRMED, **extra):
    return store.add(
        MentorSession(
            mentor_id=mentor.id,
            mentee_id=mentee.id,
            session_time_start=start,
            session_time_end=start + timedelta(minutes=60),
            status=int(status),
            **extra,
        )
    )


def add_availability(store, user, weekday, time_from, time_to):
    return store.add(Availability(user_id=user.id, weekday=weekday, time_from=time_from, time_to=time_to))


class RecordingDispatcher:
    """Stands in for DelayedDispatcher: records (notification, delay) pairs."""

    def __init__(self):
        self.scheduled = []

    def schedule(self, notification, delay):
        self.scheduled.append((notification, delay))

    def dispatch_now(self, notification):
        self.schedule(notification, timedelta(0))


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()
