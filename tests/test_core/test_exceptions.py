"""
Tests for custom exception classes.

Tests exception creation, message formatting, and details handling.
"""

import pytest

from papr.core.exceptions import (
    PaprError,
    ConfigurationError,
    ExtractionError,
    StoreError,
    SearchError
)


class TestPaprError:
    """Tests for base PaprError."""

    def test_basic_creation(self):
        """Test creating exception with just a message."""
        error = PaprError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.details == {}
        assert str(error) == "Something went wrong"

    def test_creation_with_details(self):
        """Test creating exception with details dict."""
        error = PaprError("Store error", {"path": "/tmp/papr.db"})

        assert error.details["path"] == "/tmp/papr.db"


class TestSubclasses:
    """Tests for the specific error types."""

    @pytest.mark.parametrize("cls", [ConfigurationError, ExtractionError, StoreError, SearchError])
    def test_can_be_caught_as_base(self, cls):
        """Every library error is a PaprError."""
        with pytest.raises(PaprError):
            raise cls("Test error")

    def test_extraction_error_with_filepath(self):
        """Test ExtractionError keeps the offending file."""
        error = ExtractionError(
            "pypdf extraction failed",
            filepath="/library/paper/paper.pdf",
            details={"backend": "pypdf"}
        )

        assert error.filepath == "/library/paper/paper.pdf"
        assert error.details["backend"] == "pypdf"

    def test_search_error_with_query(self):
        """Test SearchError keeps the query."""
        error = SearchError("Unknown search mode: x", query="attn")

        assert error.query == "attn"
        assert error.details == {}
