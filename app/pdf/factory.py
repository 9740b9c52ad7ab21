from app.config.settings import Settings
from app.pdf.base import BasePdfExtractor
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Creates the PDF extractor named by ``Settings.pdf_engine``.

    Adapters register under their ``engine`` name.
    """

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        adapter.engine: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
    }

    @classmethod
    def engines(cls) -> list[str]:
        return sorted(cls.ADAPTERS)

    @classmethod
    def for_engine(cls, name: str) -> BasePdfExtractor:
        """Raises ValueError for an unregistered engine name."""
        engine = name.strip().lower()
        try:
            return cls.ADAPTERS[engine]()
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {cls.engines()}"
            ) from None

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        return cls.for_engine(settings.pdf_engine)
