"""
pypdf-based text extraction backend.

Fast extraction suitable for most standard PDF files.
Handles encryption detection and empty password decryption.
"""

import io
from typing import List

from pypdf import PdfReader

from ..core import get_logger, ExtractionError

logger = get_logger(__name__)


class PyPDFBackend:
    """
    PDF text extraction using the pypdf library.

    Provides fast extraction for standard PDFs with basic
    encryption handling.
    """

    name = "pypdf"

    def extract_pages(self, data: bytes, source: str = None) -> List[str]:
        """
        Extract the text of every page of a PDF.

        Pages that fail individually come back as empty strings, so the
        list position of a page always matches its index in the document.

        Args:
            data: PDF file content.
            source: Path of the document, for error reporting.

        Returns:
            Page texts in document order.

        Raises:
            ExtractionError: If the document cannot be read at all.
        """
        pages = []

        try:
            reader = PdfReader(io.BytesIO(data))

            if reader.is_encrypted:
                try:
                    reader.decrypt("")
                except Exception:
                    raise ExtractionError(
                        "PDF is encrypted and cannot be decrypted",
                        filepath=source
                    )

            logger.debug(f"Processing {len(reader.pages)} pages: {source}")

            for index, page in enumerate(reader.pages):
                try:
                    pages.append(page.extract_text() or "")
                except Exception as e:
                    logger.warning(f"Failed to extract page {index + 1} from {source}: {e}")
                    pages.append("")

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"pypdf extraction failed: {e}",
                filepath=source,
                details={"backend": self.name}
            )

        return pages
