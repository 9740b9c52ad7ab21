from abc import ABC, abstractmethod
from collections.abc import Iterable

from app.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Subclasses yield the text of each page; joining, stripping and error
    wrapping happen here.
    """

    engine: str = ""

    def extract(self, pdf_bytes: bytes) -> str:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by newlines, stripped. Empty for text-less PDFs.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
        if not pdf_bytes:
            raise PdfExtractionError(f"{self.engine}: empty PDF content")
        try:
            pages = list(self._page_texts(pdf_bytes))
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} extraction failed: {exc}") from exc
        return "\n".join(pages).strip()

    @abstractmethod
    def _page_texts(self, pdf_bytes: bytes) -> Iterable[str]:
        """Yield the text of every page in document order."""
