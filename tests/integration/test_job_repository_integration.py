import pytest

from app.database.connection import get_connection
from app.database.models import JobRecord
from app.database.repositories.job_repository import JobRepository


def _job_row(job_id: int) -> tuple:
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT status, attempts, error_message, locked_at FROM analysis_jobs WHERE id = %s",
                (job_id,),
            )
            row = cur.fetchone()
    assert row is not None
    return row


@pytest.mark.integration
class TestJobRepositoryClaimNextJob:
    def test_claim_next_job_returns_and_locks_job(self, seed_job: JobRecord, db_conn) -> None:
        job = JobRepository(max_attempts=3).claim_next_job(db_conn)

        assert job is not None
        assert job.id == seed_job.id
        assert job.document_id == seed_job.document_id
        assert job.status == "processing"
        status, _attempts, _error, locked_at = _job_row(job.id)
        assert status == "processing"
        assert locked_at is not None

    def test_claim_next_job_skips_job_with_attempts_at_max(
        self, seed_document: tuple[int, str], db_conn
    ) -> None:
        db_conn.execute(
            "INSERT INTO analysis_jobs (document_id, status, attempts) VALUES (%s, 'pending', 3)",
            (seed_document[0],),
        )
        db_conn.commit()

        job = JobRepository(max_attempts=3).claim_next_job(db_conn)

        assert job is None or job.document_id != seed_document[0]


@pytest.mark.integration
class TestJobRepositoryTransitions:
    def test_mark_done_updates_status(self, seed_job: JobRecord) -> None:
        JobRepository(max_attempts=3).mark_done(seed_job.id)
        assert _job_row(seed_job.id)[0] == "done"

    def test_mark_failed_updates_status_and_error_message(self, seed_job: JobRecord) -> None:
        JobRepository(max_attempts=3).mark_failed(seed_job.id, "error text")

        status, _attempts, error, _locked = _job_row(seed_job.id)
        assert status == "failed"
        assert error == "error text"

    def test_increment_attempts_returns_to_pending(self, seed_job: JobRecord, db_conn) -> None:
        db_conn.execute(
            "UPDATE analysis_jobs SET status = 'processing', locked_at = NOW() WHERE id = %s",
            (seed_job.id,),
        )
        db_conn.commit()

        JobRepository(max_attempts=3).increment_attempts(seed_job.id)

        status, attempts, _error, locked_at = _job_row(seed_job.id)
        assert status == "pending"
        assert attempts == 1
        assert locked_at is None


@pytest.mark.integration
class TestJobRepositoryFindById:
    def test_find_by_id_returns_job(self, seed_job: JobRecord) -> None:
        job = JobRepository(max_attempts=3).find_by_id(seed_job.id)

        assert job is not None
        assert job.document_id == seed_job.document_id
        assert job.status == "pending"
        assert job.attempts == 0

    def test_find_by_id_returns_none_when_not_found(self, integration_pool: None) -> None:
        assert JobRepository(max_attempts=3).find_by_id(999_999_999) is None
