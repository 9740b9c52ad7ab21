from typing import ClassVar

from app.analysis.exceptions import AnalysisValidationError
from app.config.settings import Settings
from app.database.exceptions import RecordAlreadyExistsError
from app.database.models import JobRecord
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.processor.exceptions import DocumentNotFoundError
from app.processor.processor import Processor


class JobRunner:
    """Runs one analysis job and decides whether a failure is retried.

    Failures that a retry cannot fix (bad category or options, a deleted
    document, an already stored record) fail the job immediately. Any other
    failure sends the job back to pending until ``max_job_attempts`` is reached.
    """

    NON_RETRYABLE: ClassVar[tuple[type[Exception], ...]] = (
        AnalysisValidationError,
        DocumentNotFoundError,
        RecordAlreadyExistsError,
    )

    def __init__(
        self,
        processor: Processor,
        job_repo: JobRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._settings = settings

    def run(self, job: JobRecord) -> None:
        """Execute a single job. Never raises."""
        Log.info(
            f"Running job {job.id} for document {job.document_id}",
            job_id=job.id,
            attempt=job.attempt,
        )
        try:
            self._processor.process(job.document_id, job.id)
        except Exception as exc:
            self._handle_failure(job, exc)
            return
        self._job_repo.mark_done(job.id)
        Log.info(f"Job {job.id} completed successfully", job_id=job.id)

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        Log.error(f"Job {job.id} failed: {exc}", job_id=job.id, attempt=job.attempt)
        if isinstance(exc, self.NON_RETRYABLE):
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(f"Job {job.id} will not be retried: {type(exc).__name__}", job_id=job.id)
        elif job.is_last_attempt(self._settings.max_job_attempts):
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(
                f"Job {job.id} permanently failed after {job.attempt} attempts", job_id=job.id
            )
        else:
            self._job_repo.increment_attempts(job.id)
            Log.warning(f"Job {job.id} will be retried", job_id=job.id, attempt=job.attempt + 1)
