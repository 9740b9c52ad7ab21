import io
from collections.abc import Iterator

import pdfplumber

from app.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts text from PDF using pdfplumber."""

    engine = "pdfplumber"

    def _page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                yield page.extract_text() or ""
