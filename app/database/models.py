from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class JobStatus(str, Enum):
    """Lifecycle of an analysis job: pending -> processing -> done | failed.

    A failed attempt under the retry limit goes back to pending.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class JobRecord:
    """A row of the analysis_jobs table."""

    id: int
    document_id: int
    status: JobStatus
    attempts: int
    error_message: str | None = None
    locked_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.status = JobStatus(self.status)

    @property
    def attempt(self) -> int:
        """1-based number of the attempt now running."""
        return self.attempts + 1

    def is_last_attempt(self, max_attempts: int) -> bool:
        return self.attempt >= max_attempts
