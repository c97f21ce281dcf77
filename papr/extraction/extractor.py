"""
The extraction engine: PDF bytes in, ordered page texts out.

A second backend gets a turn when the first raises or returns only
blank pages.
"""

from pathlib import Path
from typing import List, Union

from ..core import get_config, get_logger, ExtractionError
from ..utils import get_file_size_mb
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend

logger = get_logger(__name__)


BACKENDS = {
    "pypdf": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class PDFExtractor:
    """
    Page text extraction over a primary and an optional fallback backend.

    A document whose pages are all blank under both backends yields
    blank pages, not an error.
    """

    def __init__(
        self,
        primary_backend: str = None,
        fallback_backend: str = None,
        max_file_size_mb: int = None
    ):
        """
        Args:
            primary_backend: Name of primary backend ("pypdf" or "pdfplumber").
            fallback_backend: Name of fallback backend, "" or "none" for none.
            max_file_size_mb: Refuse larger documents. Defaults to config.
        """
        if primary_backend is None or fallback_backend is None or max_file_size_mb is None:
            config = get_config().extraction
            primary_backend = primary_backend or config.primary_backend
            if fallback_backend is None:
                fallback_backend = config.fallback_backend
            if max_file_size_mb is None:
                max_file_size_mb = config.max_file_size_mb

        if primary_backend not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {primary_backend}")

        self.primary = BACKENDS[primary_backend]()
        self.fallback = BACKENDS[fallback_backend]() if fallback_backend in BACKENDS else None
        self.max_file_size_mb = max_file_size_mb

        logger.debug(
            f"Initialized extractor: primary={primary_backend}, fallback={fallback_backend}"
        )

    def extract_pages(self, data: bytes, source: str = None) -> List[str]:
        """
        Convert a PDF byte stream into its ordered page texts.

        Args:
            data: PDF file content.
            source: Path of the document, for logging and errors.

        Returns:
            Page texts in document order. Blank pages are kept.

        Raises:
            ExtractionError: If every backend fails.
        """
        size_mb = len(data) / (1024 * 1024)
        if self.max_file_size_mb and size_mb > self.max_file_size_mb:
            raise ExtractionError(
                f"PDF too large: {size_mb:.1f} MB > {self.max_file_size_mb} MB",
                filepath=source
            )

        primary_error = None

        try:
            pages = self.primary.extract_pages(data, source)

            if any(text.strip() for text in pages):
                return pages

            logger.debug(f"Primary backend found no text: {source}")

        except ExtractionError as e:
            primary_error = e
            logger.debug(f"Primary backend failed: {e.message}")
            pages = []

        if self.fallback:
            try:
                logger.debug(f"Trying fallback backend for: {source}")
                fallback_pages = self.fallback.extract_pages(data, source)

                if primary_error or any(text.strip() for text in fallback_pages):
                    return fallback_pages

            except ExtractionError as e:
                logger.debug(f"Fallback backend also failed: {e.message}")

        if primary_error:
            raise primary_error

        # A readable document without any text is not a failure.
        return pages

    def extract_file(self, filepath: Union[str, Path]) -> List[str]:
        """
        Extract the page texts of a PDF on disk.

        Raises:
            ExtractionError: If the file is missing, too large or unreadable.
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            raise ExtractionError("PDF not found", filepath=str(filepath))

        if self.max_file_size_mb and get_file_size_mb(filepath) > self.max_file_size_mb:
            raise ExtractionError(
                f"PDF too large: {get_file_size_mb(filepath)} MB",
                filepath=str(filepath)
            )

        return self.extract_pages(filepath.read_bytes(), str(filepath))
