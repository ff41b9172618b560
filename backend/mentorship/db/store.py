"""
Store: the only shared mutable resource of the booking core.

Wraps a SQLAlchemy session factory. Every operation opens its own session scope, commits
on success and closes in finally, so concurrent jobs never share a session. Atomicity is
per statement (one bulk UPDATE/DELETE), not across operations.

A Store built with a statement timeout (see Store.with_deadline) sets it at the start of
every transaction, so job runs cannot hold a connection past their deadline.
"""
import logging
from contextlib import contextmanager
from datetime import timedelta
from typing import Any, Iterator, NamedTuple, Sequence

from sqlalchemy import delete, func, or_, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased, sessionmaker

from mentorship.core.errors import StoreError
from mentorship.core.time import as_utc
from mentorship.models.projections import SessionNotification
from mentorship.models.session import MentorSession
from mentorship.models.user import User

logger = logging.getLogger(__name__)


class UpdateResult(NamedTuple):
    matched_count: int
    modified_count: int


def deadline_statements(dialect_name: str, timeout: timedelta) -> list[str]:
    """Per-transaction timeout statements. Only Postgres supports them; others get none."""
    if dialect_name != "postgresql":
        return []
    ms = max(int(timeout.total_seconds() * 1000), 1)
    return [
        f"SET LOCAL statement_timeout = {ms}",
        f"SET LOCAL lock_timeout = {ms}",
    ]


class Store:
    """Query/update/delete/projection operations over one database."""

    def __init__(self, session_factory: sessionmaker, *, statement_timeout: timedelta | None = None) -> None:
        self._session_factory = session_factory
        self.statement_timeout = statement_timeout

    def with_deadline(self, timeout: timedelta) -> "Store":
        """Same database, every statement bounded by timeout."""
        return Store(self._session_factory, statement_timeout=timeout)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            if self.statement_timeout is not None:
                for stmt in deadline_statements(db.get_bind().dialect.name, self.statement_timeout):
                    db.execute(text(stmt))
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning("Store operation failed: %s", e)
            raise StoreError(str(e)) from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def get(self, model: type, ident: Any) -> Any | None:
        with self.session() as db:
            return db.get(model, ident)

    def find_one(self, model: type, *criteria) -> Any | None:
        with self.session() as db:
            return db.execute(select(model).where(*criteria).limit(1)).scalars().first()

    def find(self, model: type, *criteria, order_by: Sequence = ()) -> list[Any]:
        with self.session() as db:
            stmt = select(model).where(*criteria)
            if order_by:
                stmt = stmt.order_by(*order_by)
            return list(db.execute(stmt).scalars().all())

    def add(self, obj: Any) -> Any:
        with self.session() as db:
            db.add(obj)
            db.flush()
            db.refresh(obj)
            return obj

    def update_one(self, model: type, ident: Any, values: dict[str, Any], *criteria) -> Any | None:
        """
        Find by primary key (plus any extra criteria), apply values, return the updated row.

        One filtered UPDATE, so criteria such as an expected status are checked atomically
        with the write. None when no row matched.
        """
        (pk,) = model.__mapper__.primary_key
        with self.session() as db:
            result = db.execute(
                update(model)
                .where(pk == ident, *criteria)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if not result.rowcount:
                return None
            return db.get(model, ident)

    def update_many(self, model: type, criteria: Sequence, values: dict[str, Any]) -> UpdateResult:
        """Bulk update. modified_count excludes rows that already hold every target value."""
        with self.session() as db:
            matched = db.execute(select(func.count()).select_from(model).where(*criteria)).scalar_one()
            if not matched:
                return UpdateResult(0, 0)
            changed = or_(*(getattr(model, key).is_distinct_from(value) for key, value in values.items()))
            result = db.execute(
                update(model)
                .where(*criteria, changed)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            return UpdateResult(matched, result.rowcount)

    def delete_many(self, model: type, *criteria) -> int:
        with self.session() as db:
            result = db.execute(
                delete(model).where(*criteria).execution_options(synchronize_session=False)
            )
            return result.rowcount

    def session_notifications(self, *criteria) -> list[SessionNotification]:
        """Sessions matching criteria joined with mentor and mentee name/email."""
        mentor = aliased(User)
        mentee = aliased(User)
        stmt = (
            select(MentorSession, mentor.name, mentor.email, mentee.name, mentee.email)
            .join(mentor, mentor.id == MentorSession.mentor_id)
            .join(mentee, mentee.id == MentorSession.mentee_id)
            .where(*criteria)
            .order_by(MentorSession.session_time_start.asc())
        )
        with self.session() as db:
            rows = db.execute(stmt).all()
            return [
                SessionNotification(
                    session_id=s.id,
                    mentor_id=s.mentor_id,
                    mentee_id=s.mentee_id,
                    session_time_start=as_utc(s.session_time_start),
                    session_time_end=as_utc(s.session_time_end),
                    meeting_link=s.meeting_link,
                    payment_details=s.payment_details,
                    mentor_name=mentor_name,
                    mentor_email=mentor_email,
                    mentee_name=mentee_name,
                    mentee_email=mentee_email,
                )
                for s, mentor_name, mentor_email, mentee_name, mentee_email in rows
            ]
