"""
Exceptions raised by the paper library.

All derive from PaprError and carry a message plus a details dict
with whatever context the raiser had at hand.
"""


class PaprError(Exception):
    """Base exception for all paper library errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PaprError):
    """Raised when configuration is invalid or missing."""
    pass


class ExtractionError(PaprError):
    """Raised when PDF text extraction fails for a document."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Args:
            message: Error description.
            filepath: Path to the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class StoreError(PaprError):
    """Raised when the record store cannot be read or written."""
    pass


class SearchError(PaprError):
    """Raised when a search cannot be executed as requested."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query
