from unittest.mock import MagicMock

import pytest

from app.pdf.factory import PdfExtractorFactory
from app.pdf.pdfplumber_adapter import PdfPlumberAdapter
from app.pdf.pymupdf_adapter import PyMuPdfAdapter


class TestForEngine:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("pdfplumber", PdfPlumberAdapter),
            ("pymupdf", PyMuPdfAdapter),
            (" PyMuPDF ", PyMuPdfAdapter),
        ],
    )
    def test_resolves_engine_name(self, name: str, expected: type) -> None:
        assert isinstance(PdfExtractorFactory.for_engine(name), expected)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match=r"Unknown PDF engine 'tesseract'.*pdfplumber"):
            PdfExtractorFactory.for_engine("tesseract")

    def test_lists_registered_engines(self) -> None:
        assert PdfExtractorFactory.engines() == ["pdfplumber", "pymupdf"]


class TestCreate:
    def test_uses_configured_engine(self) -> None:
        settings = MagicMock(pdf_engine="pymupdf")
        assert isinstance(PdfExtractorFactory.create(settings), PyMuPdfAdapter)
