from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.processor.exceptions import DocumentNotFoundError
from app.processor.models import UploadedDocument


class DocumentsRepository:
    """Read access to the documents table."""

    def find_by_id(self, document_id: int) -> UploadedDocument:
        """Find an uploaded document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, uuid, user_id, name, storage_disk, mime_type,
                           file_size_bytes, file_type, extract_info, summarize,
                           anomaly_detection, compliance_check
                    FROM documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(document_id)

        return UploadedDocument(
            id=row["id"],
            uuid=str(row["uuid"]),
            user_id=row["user_id"],
            name=row["name"],
            storage_disk=row["storage_disk"],
            mime_type=row["mime_type"],
            file_size_bytes=row["file_size_bytes"],
            category=row["file_type"],
            options={
                "extract_info": bool(row["extract_info"]),
                "summarize": bool(row["summarize"]),
                "anomaly_detection": bool(row["anomaly_detection"]),
                "compliance_check": bool(row["compliance_check"]),
            },
        )
