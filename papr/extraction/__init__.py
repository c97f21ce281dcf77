"""
PDF extraction module: the text extraction engine.

Converts PDF byte streams into ordered per-page texts with two backends
(pypdf and pdfplumber) and automatic fallback.
"""

from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .extractor import PDFExtractor, BACKENDS

__all__ = [
    "PyPDFBackend",
    "PDFPlumberBackend",
    "PDFExtractor",
    "BACKENDS"
]
