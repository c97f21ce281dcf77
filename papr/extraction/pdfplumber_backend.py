"""
pdfplumber-based text extraction backend.

Better handling of complex layouts and multi-column documents.
Slower than pypdf but more accurate for difficult PDFs.
"""

import io
from typing import List

import pdfplumber

from ..core import get_logger, ExtractionError

logger = get_logger(__name__)


class PDFPlumberBackend:
    """
    PDF text extraction using pdfplumber library.

    Used as the fallback when pypdf fails or finds no text.
    """

    name = "pdfplumber"

    def extract_pages(self, data: bytes, source: str = None) -> List[str]:
        """
        Extract the text of every page of a PDF.

        Args:
            data: PDF file content.
            source: Path of the document, for error reporting.

        Returns:
            Page texts in document order, empty strings for pages
            without text.

        Raises:
            ExtractionError: If the document cannot be read at all.
        """
        pages = []

        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                logger.debug(f"Processing {len(pdf.pages)} pages: {source}")

                for index, page in enumerate(pdf.pages):
                    try:
                        pages.append(page.extract_text() or "")
                    except Exception as e:
                        logger.warning(f"Failed to extract page {index + 1} from {source}: {e}")
                        pages.append("")

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber extraction failed: {e}",
                filepath=source,
                details={"backend": self.name}
            )

        return pages
