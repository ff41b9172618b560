"""
FastAPI app entrypoint.

Hosts the booking core's background jobs: session status recalculation, expired auth
session cleanup, upcoming-session reminders and email sweeps. HTTP handlers live elsewhere.
"""
import logging
from contextlib import asynccontextmanager
from functools import partial
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from mentorship.config import settings
from mentorship.core.constants import (
    APPROVED_MENTOR_EMAILS_JOB_ID,
    DELETE_EXPIRED_AUTH_SESSIONS_JOB_ID,
    REVIEW_EMAIL_SWEEP_JOB_ID,
    STATUS_CALCULATION_JOB_ID,
    UPCOMING_SESSION_NOTIFICATIONS_JOB_ID,
)
from mentorship.core.job_config import JobConfig, get_job_config
from mentorship.core.time import utc_now
from mentorship.db import Base, Store, create_db_engine, create_session_factory
from mentorship.scheduler.cleanup_job import run_delete_expired_auth_sessions
from mentorship.scheduler.dispatcher import DelayedDispatcher
from mentorship.scheduler.notification_job import (
    notification_job_delay,
    run_approved_mentor_emails,
    run_review_email_sweep,
    run_upcoming_session_notifications,
)
from mentorship.scheduler.runner import RecurringJobScheduler, build_background_scheduler
from mentorship.scheduler.status_job import run_status_calculation
from mentorship.services.notifications import SendGridGateway

logger = logging.getLogger(__name__)


def start_jobs(
    runner: RecurringJobScheduler,
    store: Store,
    dispatcher: DelayedDispatcher,
    config: JobConfig,
) -> None:
    # Job runs get a store whose statements stop at the job timeout
    store = store.with_deadline(config.job_timeout)
    runner.schedule(
        STATUS_CALCULATION_JOB_ID,
        partial(run_status_calculation, store),
        config.status_calculation_interval,
    )
    runner.schedule(
        DELETE_EXPIRED_AUTH_SESSIONS_JOB_ID,
        partial(run_delete_expired_auth_sessions, store),
        config.delete_expired_interval,
    )
    runner.schedule(
        UPCOMING_SESSION_NOTIFICATIONS_JOB_ID,
        partial(run_upcoming_session_notifications, store, dispatcher),
        config.upcoming_session_interval,
        initial_delay=notification_job_delay(utc_now()),
    )
    runner.schedule(
        REVIEW_EMAIL_SWEEP_JOB_ID,
        partial(run_review_email_sweep, store, dispatcher),
        config.review_email_interval,
    )
    runner.schedule(
        APPROVED_MENTOR_EMAILS_JOB_ID,
        partial(run_approved_mentor_emails, store, dispatcher),
        config.approved_user_email_interval,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_job_config()
    engine = create_db_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    store = Store(create_session_factory(engine))

    scheduler = build_background_scheduler(
        job_workers=config.job_workers,
        dispatch_workers=config.dispatch_workers,
    )
    runner = RecurringJobScheduler(scheduler, job_timeout=config.job_timeout, job_workers=config.job_workers)
    dispatcher = DelayedDispatcher(scheduler, SendGridGateway(settings))
    start_jobs(runner, store, dispatcher, config)
    runner.start()

    app.state.store = store
    app.state.scheduler = runner
    app.state.dispatcher = dispatcher
    logger.info("Booking core ready; jobs: %s", ", ".join(runner.job_ids()))
    yield
    runner.shutdown(wait=False)
    engine.dispose()


app = FastAPI(title="Mentorship Booking", version="0.1.0", lifespan=lifespan)


@app.get("/health")
def health() -> dict:
    runner = getattr(app.state, "scheduler", None)
    return {
        "status": "ok",
        "jobs": runner.job_ids() if runner is not None else [],
    }
