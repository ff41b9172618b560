"""
Scheduler config. .env is the source of truth; these defaults apply only when
the env var is unset. All values read at import time.

Env vars: STATUS_CALCULATION_INTERVAL_MINUTES, DELETE_EXPIRED_INTERVAL_HOURS,
UPCOMING_SESSION_INTERVAL_MINUTES, REVIEW_EMAIL_INTERVAL_MINUTES,
APPROVED_USER_EMAIL_INTERVAL_MINUTES, JOB_TIMEOUT_SECONDS, JOB_WORKERS, DISPATCH_WORKERS.
"""
import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

# Load backend/.env so job config sees env vars regardless of entry point
_backend_dir = Path(__file__).resolve().parent.parent.parent
load_dotenv(_backend_dir / ".env", override=False)  # load_dotenv no-ops if file missing

_log = logging.getLogger(__name__)


def _int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    raw = os.environ.get(key)
    if raw is None:
        v = default
    else:
        try:
            v = int(raw.strip())
        except ValueError:
            v = default
    if min_val is not None and v < min_val:
        v = min_val
    if max_val is not None and v > max_val:
        v = max_val
    return v


# -----------------------------------------------------------------------------
# Standing job intervals
# -----------------------------------------------------------------------------
STATUS_CALCULATION_INTERVAL_MINUTES = _int("STATUS_CALCULATION_INTERVAL_MINUTES", 30, min_val=1, max_val=24 * 60)
DELETE_EXPIRED_INTERVAL_HOURS = _int("DELETE_EXPIRED_INTERVAL_HOURS", 24, min_val=1, max_val=7 * 24)
UPCOMING_SESSION_INTERVAL_MINUTES = _int("UPCOMING_SESSION_INTERVAL_MINUTES", 60, min_val=1, max_val=24 * 60)
REVIEW_EMAIL_INTERVAL_MINUTES = _int("REVIEW_EMAIL_INTERVAL_MINUTES", 15, min_val=1, max_val=24 * 60)
APPROVED_USER_EMAIL_INTERVAL_MINUTES = _int("APPROVED_USER_EMAIL_INTERVAL_MINUTES", 60, min_val=1, max_val=24 * 60)

# -----------------------------------------------------------------------------
# Execution: hard timeout per run, worker pool sizes
# -----------------------------------------------------------------------------
JOB_TIMEOUT_SECONDS = _int("JOB_TIMEOUT_SECONDS", 5 * 60, min_val=1, max_val=60 * 60)
JOB_WORKERS = _int("JOB_WORKERS", 8, min_val=1, max_val=64)
DISPATCH_WORKERS = _int("DISPATCH_WORKERS", 20, min_val=1, max_val=200)

_log.info(
    "Job config (from env): status_every=%sm delete_expired_every=%sh upcoming_every=%sm "
    "review_every=%sm approved_every=%sm timeout=%ss",
    STATUS_CALCULATION_INTERVAL_MINUTES,
    DELETE_EXPIRED_INTERVAL_HOURS,
    UPCOMING_SESSION_INTERVAL_MINUTES,
    REVIEW_EMAIL_INTERVAL_MINUTES,
    APPROVED_USER_EMAIL_INTERVAL_MINUTES,
    JOB_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class JobConfig:
    """Snapshot of job config for passing around (e.g. tests)."""
    status_calculation_interval: timedelta
    delete_expired_interval: timedelta
    upcoming_session_interval: timedelta
    review_email_interval: timedelta
    approved_user_email_interval: timedelta
    job_timeout: timedelta
    job_workers: int
    dispatch_workers: int


def get_job_config() -> JobConfig:
    return JobConfig(
        status_calculation_interval=timedelta(minutes=STATUS_CALCULATION_INTERVAL_MINUTES),
        delete_expired_interval=timedelta(hours=DELETE_EXPIRED_INTERVAL_HOURS),
        upcoming_session_interval=timedelta(minutes=UPCOMING_SESSION_INTERVAL_MINUTES),
        review_email_interval=timedelta(minutes=REVIEW_EMAIL_INTERVAL_MINUTES),
        approved_user_email_interval=timedelta(minutes=APPROVED_USER_EMAIL_INTERVAL_MINUTES),
        job_timeout=timedelta(seconds=JOB_TIMEOUT_SECONDS),
        job_workers=JOB_WORKERS,
        dispatch_workers=DISPATCH_WORKERS,
    )
