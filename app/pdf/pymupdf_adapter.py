from collections.abc import Iterator

import pymupdf

from app.pdf.base import BasePdfExtractor


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts text from PDF using PyMuPDF."""

    engine = "pymupdf"

    def _page_texts(self, pdf_bytes: bytes) -> Iterator[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            for page in doc:
                yield page.get_text()
