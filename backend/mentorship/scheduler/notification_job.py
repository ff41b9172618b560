"""
Notification scans.

- Upcoming sessions (hourly, aligned to :00/:30): confirmed sessions starting in
  (now+30m, now+60m] get a reminder armed for 30 minutes before their start.
- Review sweep (every 15 min): completed sessions without a review email get one now.
- Approved mentors (hourly): newly approved users get a welcome email now.

Sweeps mark rows as sent before dispatching, so a failed send is never retried.
"""
import logging
from datetime import datetime, timedelta

from mentorship.core.constants import NOTIFICATION_TIME_BEFORE_SESSION
from mentorship.core.errors import StoreError
from mentorship.core.status import SessionStatus
from mentorship.core.time import utc_now
from mentorship.db.store import Store
from mentorship.models.session import MentorSession
from mentorship.models.user import User
from mentorship.scheduler.dispatcher import DelayedDispatcher
from mentorship.services.notifications import (
    mentor_approved_notification,
    review_request_notification,
    upcoming_session_notification,
)

logger = logging.getLogger(__name__)


def notification_job_delay(now: datetime) -> timedelta:
    """Initial delay so the hourly scan lands on the next :00 or :30 minute."""
    return timedelta(minutes=30 - now.minute % 30)


def run_upcoming_session_notifications(
    store: Store,
    dispatcher: DelayedDispatcher,
    now: datetime | None = None,
) -> int:
    """Returns the number of reminders armed."""
    now = now or utc_now()
    window_start = now + NOTIFICATION_TIME_BEFORE_SESSION
    window_end = now + 2 * NOTIFICATION_TIME_BEFORE_SESSION
    try:
        sessions = store.session_notifications(
            MentorSession.status == int(SessionStatus.CONFIRMED),
            MentorSession.session_time_start > window_start,
            MentorSession.session_time_start <= window_end,
        )
    except StoreError as e:
        logger.warning("Upcoming session scan failed: %s", e, exc_info=True)
        return 0
    logger.info("Upcoming session scan: %s sessions in window", len(sessions))
    armed = 0
    for session in sessions:
        delay = (session.session_time_start - now) - NOTIFICATION_TIME_BEFORE_SESSION
        if delay <= timedelta(0):
            logger.debug("Session %s starts too soon for a reminder; skipping", session.session_id)
            continue
        dispatcher.schedule(upcoming_session_notification(session), delay)
        armed += 1
    return armed


def run_review_email_sweep(store: Store, dispatcher: DelayedDispatcher) -> int:
    try:
        sessions = store.session_notifications(
            MentorSession.status == int(SessionStatus.COMPLETED),
            MentorSession.review_email_sent.is_(False),
        )
        if not sessions:
            return 0
        store.update_many(
            MentorSession,
            [MentorSession.id.in_([s.session_id for s in sessions])],
            {"review_email_sent": True},
        )
    except StoreError as e:
        logger.warning("Review email sweep failed: %s", e, exc_info=True)
        return 0
    logger.info("Review email sweep: %s sessions", len(sessions))
    for session in sessions:
        dispatcher.dispatch_now(review_request_notification(session))
    return len(sessions)


def run_approved_mentor_emails(store: Store, dispatcher: DelayedDispatcher) -> int:
    try:
        users = store.find(User, User.is_approved.is_(True), User.approved_email_sent.is_(False))
        if not users:
            return 0
        store.update_many(User, [User.id.in_([u.id for u in users])], {"approved_email_sent": True})
    except StoreError as e:
        logger.warning("Approved mentor email sweep failed: %s", e, exc_info=True)
        return 0
    logger.info("Approved mentor emails: %s users", len(users))
    for user in users:
        dispatcher.dispatch_now(mentor_approved_notification(user))
    return len(users)
