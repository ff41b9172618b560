import threading
import time
from datetime import timedelta

import pytest

from mentorship.scheduler.runner import RecurringJobScheduler


class Counter:
    """Callable job that counts its runs and signals once it reaches target."""

    def __init__(self, target):
        self.count = 0
        self.target = target
        self.reached = threading.Event()
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.count += 1
            if self.count >= self.target:
                self.reached.set()


@pytest.fixture
def runner():
    runner = RecurringJobScheduler(job_timeout=timedelta(seconds=2), job_workers=2)
    yield runner
    runner.shutdown(wait=False)


def test_job_without_delay_runs_right_away(runner):
    ran = threading.Event()
    runner.schedule("ping", ran.set, timedelta(hours=1))
    runner.start()
    assert ran.wait(5)
    assert runner.job_ids() == ["ping"]


def test_job_repeats_every_interval(runner):
    counter = Counter(3)
    runner.schedule("tick", counter, timedelta(milliseconds=200))
    runner.start()
    assert counter.reached.wait(5)


def test_initial_delay_then_repeats(runner):
    counter = Counter(2)
    runner.schedule("tick", counter, timedelta(milliseconds=200), initial_delay=timedelta(milliseconds=800))
    runner.start()
    time.sleep(0.3)
    assert counter.count == 0
    assert counter.reached.wait(5)


def test_initial_delay_postpones_first_run(runner):
    ran = threading.Event()
    runner.schedule("later", ran.set, timedelta(hours=1), initial_delay=timedelta(hours=1))
    runner.start()
    assert not ran.wait(0.5)
    (job,) = runner.scheduler.get_jobs()
    assert job.next_run_time.tzinfo is not None


def test_hung_runs_do_not_starve_later_ticks():
    runner = RecurringJobScheduler(job_timeout=timedelta(milliseconds=200), job_workers=2)
    release = threading.Event()
    try:
        # more hung runs than workers
        for _ in range(3):
            assert runner.run_job("status_calculation", lambda: release.wait(10)) is False

        other = threading.Event()
        assert runner.run_job("delete_expired_auth_sessions", other.set) is True
        assert other.is_set()

        again = threading.Event()
        assert runner.run_job("status_calculation", again.set) is True
        assert again.is_set()
    finally:
        release.set()
        runner.shutdown(wait=False)


def test_failing_job_is_logged_not_raised(runner):
    def boom():
        raise RuntimeError("db down")

    assert runner.run_job("boom", boom) is False
