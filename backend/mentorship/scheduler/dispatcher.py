"""
One-shot delayed notifications: fire gateway.send once, at now + delay.

Each dispatch is an APScheduler date job on the dispatch executor, so callbacks never run on
the recurring-job pool. Handles are kept in a registry keyed by notification key; arming the
same key again replaces the earlier handle. Delivery is at-most-once: gateway failures are
logged and dropped.
"""
import logging
import threading
import uuid
from datetime import timedelta, timezone

from apscheduler.job import Job
from apscheduler.schedulers.base import BaseScheduler
from apscheduler.triggers.date import DateTrigger

from mentorship.core.constants import DISPATCH_EXECUTOR
from mentorship.core.time import utc_now
from mentorship.services.notifications.base import Notification, NotificationGateway

logger = logging.getLogger(__name__)


class DelayedDispatcher:
    def __init__(
        self,
        scheduler: BaseScheduler,
        gateway: NotificationGateway,
        *,
        executor: str = DISPATCH_EXECUTOR,
    ) -> None:
        self._scheduler = scheduler
        self._gateway = gateway
        self._executor = executor
        self._registry: dict[str, tuple[str, Job]] = {}
        self._lock = threading.Lock()

    def schedule(self, notification: Notification, delay: timedelta) -> None:
        run_at = utc_now() + max(delay, timedelta(0))
        token = uuid.uuid4().hex
        # registered under the lock before a zero-delay fire can pop it
        with self._lock:
            job = self._scheduler.add_job(
                self._fire,
                DateTrigger(run_date=run_at, timezone=timezone.utc),
                args=(notification, token),
                id=f"dispatch:{notification.key}",
                name=f"{notification.kind.value}:{notification.key}",
                executor=self._executor,
                replace_existing=True,
                misfire_grace_time=None,
            )
            self._registry[notification.key] = (token, job)
        logger.info("Dispatch for %s armed with delay %s", notification.key, delay)

    def dispatch_now(self, notification: Notification) -> None:
        self.schedule(notification, timedelta(0))

    def pending_keys(self) -> list[str]:
        with self._lock:
            return sorted(self._registry)

    def _fire(self, notification: Notification, token: str) -> None:
        with self._lock:
            # a re-armed key belongs to the newer dispatch
            entry = self._registry.get(notification.key)
            if entry is not None and entry[0] == token:
                del self._registry[notification.key]
        try:
            sent = self._gateway.send(notification)
        except Exception as e:
            logger.exception("Notification %s failed; dropped: %s", notification.key, e)
            return
        if not sent:
            logger.warning("Notification %s was not delivered; dropped", notification.key)
