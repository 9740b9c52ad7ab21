from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.analysis.base import RecordSink
from app.analysis.models import AnalysisRecord, Category, StoredRecord
from app.database.connection import get_connection
from app.database.exceptions import RecordAlreadyExistsError

_COLUMNS = """
    id, document_id, owner_id, category, summary, extracted_data,
    anomalies, compliance_status, created_at
"""


class AnalysisRepository(RecordSink):
    """Database operations for the document_analyses table.

    One row per document; the table's unique constraint on document_id keeps
    records immutable once written.
    """

    def save(
        self,
        record: AnalysisRecord,
        owner_ref: int,
        *,
        document_id: int,
        category: Category,
    ) -> StoredRecord:
        """Insert *record* for *document_id*.

        Raises:
            RecordAlreadyExistsError: if the document already has a record.
        """
        payload = record.to_payload()
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO document_analyses
                        (document_id, owner_id, category, summary,
                         extracted_data, anomalies, compliance_status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    ON CONFLICT (document_id) DO NOTHING
                    RETURNING id, created_at
                    """,
                    (
                        document_id,
                        owner_ref,
                        category.value,
                        payload["summary"],
                        _jsonb_or_none(payload["extractedData"]),
                        _jsonb_or_none(payload["anomalies"]),
                        payload["complianceStatus"],
                    ),
                )
                row = cur.fetchone()
            if row is None:
                conn.rollback()
                raise RecordAlreadyExistsError(
                    f"Document {document_id} already has an analysis record"
                )
            conn.commit()

        return StoredRecord(
            id=row["id"],
            document_id=document_id,
            owner_id=owner_ref,
            category=category,
            record=record,
            created_at=row["created_at"],
        )

    def find_by_document(self, document_id: int) -> StoredRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM document_analyses WHERE document_id = %s",  # noqa: S608
                    (document_id,),
                )
                row = cur.fetchone()
        return _to_stored_record(row) if row is not None else None

    def list_by_owner(self, owner_id: int) -> list[StoredRecord]:
        """All records of an owner, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM document_analyses "  # noqa: S608
                    "WHERE owner_id = %s ORDER BY created_at DESC",
                    (owner_id,),
                )
                rows = cur.fetchall()
        return [_to_stored_record(row) for row in rows]


def _jsonb_or_none(value: dict[str, Any] | None) -> Jsonb | None:
    return Jsonb(value) if value is not None else None


def _to_stored_record(row: dict[str, Any]) -> StoredRecord:
    record = AnalysisRecord.from_payload(
        {
            "summary": row["summary"],
            "extractedData": row["extracted_data"],
            "anomalies": row["anomalies"],
            "complianceStatus": row["compliance_status"],
        }
    )
    return StoredRecord(
        id=row["id"],
        document_id=row["document_id"],
        owner_id=row["owner_id"],
        category=Category(row["category"]),
        record=record,
        created_at=row["created_at"],
    )
