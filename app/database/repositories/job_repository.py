from typing import Any

import psycopg
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import JobRecord, JobStatus


class JobRepository:
    """Database operations for the analysis_jobs table."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Claim the oldest pending job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, document_id, status, attempts
                FROM analysis_jobs
                WHERE status = %s
                  AND attempts < %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (JobStatus.PENDING.value, self._max_attempts),
            )
            row = cur.fetchone()

        if row is None:
            conn.rollback()
            return None

        conn.execute(
            """
            UPDATE analysis_jobs
            SET status = %s, locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (JobStatus.PROCESSING.value, row["id"]),
        )
        conn.commit()

        return JobRecord(
            id=row["id"],
            document_id=row["document_id"],
            status=JobStatus.PROCESSING,
            attempts=row["attempts"],
        )

    def mark_processing(self, job_id: int) -> None:
        """Refresh the processing lock once the pipeline starts."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE analysis_jobs
                SET status = %s, locked_at = NOW(), updated_at = NOW()
                WHERE id = %s
                """,
                (JobStatus.PROCESSING.value, job_id),
            )
            conn.commit()

    def mark_done(self, job_id: int) -> None:
        """Mark a job as done."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE analysis_jobs
                SET status = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (JobStatus.DONE.value, job_id),
            )
            conn.commit()

    def mark_failed(self, job_id: int, error: str) -> None:
        """Record the failure message on a job."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE analysis_jobs
                SET status = %s, error_message = %s, updated_at = NOW()
                WHERE id = %s
                """,
                (JobStatus.FAILED.value, error, job_id),
            )
            conn.commit()

    def increment_attempts(self, job_id: int) -> None:
        """Increment attempt count and return job to pending."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE analysis_jobs
                SET attempts = attempts + 1, status = %s,
                    locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (JobStatus.PENDING.value, job_id),
            )
            conn.commit()

    def find_by_id(self, job_id: int) -> JobRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, status, attempts,
                           error_message, locked_at, created_at, updated_at
                    FROM analysis_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return JobRecord(**row)
