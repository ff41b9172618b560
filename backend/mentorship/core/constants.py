"""
Centralized constants for the scheduler and the booking core.

Change job IDs or fixed durations here instead of scattering literals across main and services.
Intervals and timeouts come from job_config (env-driven).
"""
from datetime import timedelta

# Scheduler job IDs (must match ids used in main.py when jobs are registered)
STATUS_CALCULATION_JOB_ID = "status_calculation"
DELETE_EXPIRED_AUTH_SESSIONS_JOB_ID = "delete_expired_auth_sessions"
UPCOMING_SESSION_NOTIFICATIONS_JOB_ID = "upcoming_session_notifications"
REVIEW_EMAIL_SWEEP_JOB_ID = "review_email_sweep"
APPROVED_MENTOR_EMAILS_JOB_ID = "approved_mentor_emails"

# Every booked session lasts exactly this long
SESSION_DURATION = timedelta(minutes=60)
# Candidate slots start this far apart inside an availability window
SLOT_STEP = timedelta(minutes=30)
# Reminder goes out this long before the session starts
NOTIFICATION_TIME_BEFORE_SESSION = timedelta(minutes=30)

# Wire formats
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# APScheduler executor alias for one-shot notification dispatches
DISPATCH_EXECUTOR = "dispatch"
