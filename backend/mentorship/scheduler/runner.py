"""
Recurring jobs on fixed intervals, each run bounded by a hard timeout.

APScheduler fires the tick; the job body runs on that job's own single worker and the tick
waits at most job_timeout for it. A run that overruns is abandoned (logged, not awaited) and
its worker is retired, so the next tick of that job gets a fresh worker and other jobs never
queue behind it. Abandoned runs finish on their own; store work inside them is bounded by
the store's statement timeout (Store.with_deadline).
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from datetime import timedelta, timezone
from typing import Callable

from apscheduler.executors.pool import ThreadPoolExecutor as SchedulerThreadPool
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from mentorship.core.constants import DISPATCH_EXECUTOR
from mentorship.core.time import utc_now

logger = logging.getLogger(__name__)

DEFAULT_JOB_TIMEOUT = timedelta(minutes=5)


def build_background_scheduler(job_workers: int = 8, dispatch_workers: int = 20) -> BackgroundScheduler:
    """Scheduler with a "default" pool for recurring ticks and a separate pool for dispatches."""
    return BackgroundScheduler(
        executors={
            "default": SchedulerThreadPool(job_workers),
            DISPATCH_EXECUTOR: SchedulerThreadPool(dispatch_workers),
        },
        job_defaults={"coalesce": True, "max_instances": 3, "misfire_grace_time": 60},
        timezone=timezone.utc,
    )


class RecurringJobScheduler:
    """Named jobs on fixed intervals with an optional initial delay."""

    def __init__(
        self,
        scheduler: BackgroundScheduler | None = None,
        *,
        job_timeout: timedelta = DEFAULT_JOB_TIMEOUT,
        job_workers: int = 8,
    ) -> None:
        self._scheduler = scheduler or build_background_scheduler(job_workers=job_workers)
        self._workers: dict[str, ThreadPoolExecutor] = {}
        self._lock = threading.Lock()
        self.job_timeout = job_timeout

    @property
    def scheduler(self) -> BackgroundScheduler:
        return self._scheduler

    def schedule(
        self,
        name: str,
        job: Callable[[], object],
        interval: timedelta,
        initial_delay: timedelta = timedelta(0),
    ) -> None:
        """First run at now + initial_delay, then every interval until shutdown."""
        first_run = utc_now() + initial_delay
        self._scheduler.add_job(
            self.run_job,
            IntervalTrigger(seconds=interval.total_seconds(), timezone=timezone.utc),
            args=(name, job),
            id=name,
            name=name,
            next_run_time=first_run,
            replace_existing=True,
        )
        logger.info("Scheduled job %s every %s, first run at %s", name, interval, first_run.isoformat())

    def _worker(self, name: str) -> ThreadPoolExecutor:
        with self._lock:
            worker = self._workers.get(name)
            if worker is None:
                worker = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"job_{name}")
                self._workers[name] = worker
            return worker

    def _retire(self, name: str, worker: ThreadPoolExecutor) -> None:
        with self._lock:
            if self._workers.get(name) is worker:
                del self._workers[name]
        worker.shutdown(wait=False, cancel_futures=True)

    def run_job(self, name: str, job: Callable[[], object]) -> bool:
        """One tick. True when the job finished within the timeout without raising."""
        worker = self._worker(name)
        future = worker.submit(job)
        try:
            future.result(timeout=self.job_timeout.total_seconds())
        except FutureTimeout:
            logger.warning("Job %s exceeded %s; abandoned for this tick", name, self.job_timeout)
            self._retire(name, worker)
            return False
        except Exception as e:
            logger.exception("Job %s failed: %s", name, e)
            return False
        logger.debug("Job %s finished", name)
        return True

    def job_ids(self) -> list[str]:
        return [job.id for job in self._scheduler.get_jobs()]

    def start(self) -> None:
        self._scheduler.start()

    def shutdown(self, wait: bool = False) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
        with self._lock:
            workers = list(self._workers.values())
            self._workers.clear()
        for worker in workers:
            worker.shutdown(wait=wait, cancel_futures=True)
