from abc import ABC, abstractmethod

from app.analysis.models import AnalysisRecord, Category, StoredRecord


class TextSource(ABC):
    """Contract for anything that can produce the raw text of a stored document."""

    @abstractmethod
    def get_text(self, document_ref: int) -> str:
        """Return the UTF-8 text of the referenced document.

        Args:
            document_ref: Identifier of a stored document.

        Returns:
            The document text. May be empty if the document holds no text.

        Raises:
            TextUnavailableError: if the document does not exist or its
                content cannot be read.
        """


class RecordSink(ABC):
    """Contract for persisting analysis records."""

    @abstractmethod
    def save(
        self,
        record: AnalysisRecord,
        owner_ref: int,
        *,
        document_id: int,
        category: Category,
    ) -> StoredRecord:
        """Persist *record* for *owner_ref* and return it with id and timestamp.

        Raises:
            RecordAlreadyExistsError: if the document already has a record.
        """
