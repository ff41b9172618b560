from datetime import timedelta

import pytest
from sqlalchemy import text

from conftest import NOW, add_session
from mentorship.core.errors import StoreError
from mentorship.core.status import SessionStatus
from mentorship.db import UpdateResult
from mentorship.db.store import deadline_statements
from mentorship.models import MentorSession


def test_update_many_counts_matched_and_modified(store, mentor, mentee):
    a = add_session(store, mentor, mentee, NOW, SessionStatus.CONFIRMED)
    add_session(store, mentor, mentee, NOW, SessionStatus.COMPLETED)

    result = store.update_many(
        MentorSession,
        [MentorSession.mentor_id == mentor.id],
        {"status": int(SessionStatus.COMPLETED)},
    )

    assert result == UpdateResult(matched_count=2, modified_count=1)
    assert store.get(MentorSession, a.id).status == SessionStatus.COMPLETED


def test_update_one_returns_none_for_missing_row(store):
    assert store.update_one(MentorSession, 12345, {"status": 1}) is None


def test_update_one_checks_criteria_with_the_write(store, mentor, mentee):
    s = add_session(store, mentor, mentee, NOW, SessionStatus.EXPIRED)
    confirmed = {"status": int(SessionStatus.CONFIRMED)}

    assert store.update_one(MentorSession, s.id, confirmed, MentorSession.status == int(SessionStatus.PENDING_BY_MENTOR)) is None
    assert store.get(MentorSession, s.id).status == SessionStatus.EXPIRED

    row = store.update_one(MentorSession, s.id, confirmed, MentorSession.status == int(SessionStatus.EXPIRED))
    assert row.status == SessionStatus.CONFIRMED


def test_session_notifications_joins_contacts(store, mentor, mentee):
    session = add_session(store, mentor, mentee, NOW + timedelta(hours=1), payment_details="free")
    (row,) = store.session_notifications(MentorSession.id == session.id)
    assert row.mentor_name == "Mia Mentor"
    assert row.mentee_email == "max@example.com"
    assert row.payment_details == "free"
    assert row.session_time_start == NOW + timedelta(hours=1)
    assert row.session_time_start.tzinfo is not None


def test_database_errors_become_store_errors(store):
    with pytest.raises(StoreError):
        with store.session() as db:
            db.execute(text("SELECT * FROM no_such_table"))


def test_deadline_applies_to_postgres_transactions_only():
    assert deadline_statements("postgresql", timedelta(minutes=5)) == [
        "SET LOCAL statement_timeout = 300000",
        "SET LOCAL lock_timeout = 300000",
    ]
    assert deadline_statements("sqlite", timedelta(minutes=5)) == []


def test_store_with_deadline_shares_the_database(store, mentor, mentee):
    bounded = store.with_deadline(timedelta(seconds=2))
    assert bounded.statement_timeout == timedelta(seconds=2)
    assert store.statement_timeout is None

    s = add_session(store, mentor, mentee, NOW)
    assert bounded.get(MentorSession, s.id).id == s.id
