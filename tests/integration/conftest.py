import os
import uuid
from collections.abc import Callable, Generator
from functools import partial
from pathlib import Path
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool
from app.database.models import JobRecord

SCHEMA_PATH = Path(__file__).parent / "schema.sql"
OWNER_ID = 4242


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docanalysis_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text())
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[int], None, None]:
    """Document ids to delete after the test. Jobs and analyses cascade."""
    document_ids: list[int] = []
    yield document_ids
    if not document_ids:
        return
    with get_connection() as conn:
        conn.execute("DELETE FROM documents WHERE id = ANY(%s)", (document_ids,))
        conn.commit()


@pytest.fixture
def owner_id() -> int:
    return OWNER_ID


def _insert_document(
    conn: psycopg.Connection[Any],
    cleanup: list[int],
    *,
    mime_type: str = "text/plain",
    file_type: str = "Financial",
    **options: bool,
) -> tuple[int, str]:
    doc_uuid = str(uuid.uuid4())
    with conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO documents
                (uuid, user_id, name, storage_disk, mime_type, file_size_bytes, file_type,
                 extract_info, summarize, anomaly_detection, compliance_check)
            VALUES (%s::uuid, %s, %s, 'local', %s, %s, %s, %s, %s, %s, %s)
            RETURNING id
            """,
            (
                doc_uuid,
                OWNER_ID,
                "statement.txt",
                mime_type,
                128,
                file_type,
                options.get("extract_info", False),
                options.get("summarize", False),
                options.get("anomaly_detection", False),
                options.get("compliance_check", False),
            ),
        )
        row = cur.fetchone()
        assert row is not None
    conn.commit()
    cleanup.append(row[0])
    return row[0], doc_uuid


@pytest.fixture
def document_factory(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[int],
) -> Callable[..., tuple[int, str]]:
    """Insert a documents row; returns (id, uuid)."""
    return partial(_insert_document, db_conn, integration_cleanup)


@pytest.fixture
def seed_document(document_factory: Callable[..., tuple[int, str]]) -> tuple[int, str]:
    return document_factory()


@pytest.fixture
def seed_job(
    db_conn: psycopg.Connection[Any],
    seed_document: tuple[int, str],
) -> JobRecord:
    with db_conn.cursor(row_factory=dict_row) as cur:
        cur.execute(
            """
            INSERT INTO analysis_jobs (document_id, status, attempts)
            VALUES (%s, 'pending', 0)
            RETURNING id, document_id, status, attempts
            """,
            (seed_document[0],),
        )
        row = cur.fetchone()
        assert row is not None
    db_conn.commit()
    return JobRecord(**row)
