from app.analysis.base import TextSource
from app.analysis.exceptions import TextUnavailableError
from app.database.repositories.documents_repository import DocumentsRepository
from app.logging.logger import Log
from app.pdf.base import BasePdfExtractor
from app.pdf.exceptions import PdfExtractionError
from app.processor.exceptions import ProcessorError, UnsupportedFileTypeError
from app.processor.file_loader import FileLoader
from app.processor.models import UploadedDocument


class StoredDocumentTextSource(TextSource):
    """Reads a stored document from disk and turns it into text.

    Plain-text uploads are decoded as UTF-8, PDFs go through the configured
    PDF extractor. Other types (e.g. scanned images) are unavailable.
    """

    def __init__(
        self,
        doc_repo: DocumentsRepository,
        file_loader: FileLoader,
        pdf_extractor: BasePdfExtractor,
    ) -> None:
        self._doc_repo = doc_repo
        self._file_loader = file_loader
        self._pdf_extractor = pdf_extractor

    def get_text(self, document_ref: int) -> str:
        try:
            document = self._doc_repo.find_by_id(document_ref)
            raw_bytes = self._file_loader.load(document)
            text = self._decode(document, raw_bytes)
        except (ProcessorError, PdfExtractionError, OSError, UnicodeDecodeError) as exc:
            raise TextUnavailableError(
                f"Text of document {document_ref} unavailable: {exc}"
            ) from exc
        Log.info(
            f"Acquired {len(text)} chars from document {document_ref} "
            f"({len(raw_bytes)} bytes, {document.mime_type})"
        )
        return text

    def _decode(self, document: UploadedDocument, raw_bytes: bytes) -> str:
        if document.mime_type == "text/plain":
            return raw_bytes.decode("utf-8")
        if document.mime_type == "application/pdf":
            return self._pdf_extractor.extract(raw_bytes)
        raise UnsupportedFileTypeError(document.mime_type, ["text/plain", "application/pdf"])
