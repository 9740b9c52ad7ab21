import signal
import threading
from types import FrameType
from typing import Any

from app.config.settings import Settings
from app.database.connection import get_connection
from app.database.models import JobRecord
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.worker.job_runner import JobRunner


class Worker:
    """Poll loop: claim -> dispatch, sleeping while the queue is empty.

    SIGTERM and SIGINT stop the loop after the job in flight has finished.
    """

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._settings = settings
        self._stop = threading.Event()

    def stop(self) -> None:
        """Ask the loop to exit before claiming another job."""
        self._stop.set()

    def run(self, max_jobs: int | None = None) -> int:
        """Poll until stopped or interrupted.

        If max_jobs is set, stop after dispatching that many jobs.
        Returns the number of jobs dispatched.
        """
        previous_handlers = self._install_signal_handlers()
        Log.info("Worker started, polling for analysis jobs")
        jobs_done = 0
        try:
            while not self._stop.is_set():
                if max_jobs is not None and jobs_done >= max_jobs:
                    break
                job = self._try_claim_job()
                if job is None:
                    Log.debug("No jobs available, sleeping")
                    self._stop.wait(self._settings.job_poll_interval_seconds)
                    continue
                self._job_runner.run(job)
                jobs_done += 1
        except KeyboardInterrupt:
            Log.info("Worker interrupted")
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)
        Log.info(f"Worker stopped after {jobs_done} jobs", jobs=jobs_done)
        return jobs_done

    def _install_signal_handlers(self) -> dict[int, Any]:
        # signal.signal only works from the main thread.
        if threading.current_thread() is not threading.main_thread():
            return {}
        return {
            signum: signal.signal(signum, self._handle_signal)
            for signum in (signal.SIGTERM, signal.SIGINT)
        }

    def _handle_signal(self, signum: int, _frame: FrameType | None) -> None:
        Log.info(f"Received {signal.Signals(signum).name}, finishing current job")
        self.stop()

    def _try_claim_job(self) -> JobRecord | None:
        """Claim the next pending job. Database errors count as an empty queue."""
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except Exception as exc:
            Log.warning(f"Database error, will retry: {exc}")
            return None
