"""
Tests for the database schema module.

Tests table creation, reset and statistics.
"""

from papr.database.connection import get_connection
from papr.database.repository import PaperRepository
from papr.database.schema import init_schema, reset_schema, get_statistics


def _table_names():
    with get_connection() as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row["name"] for row in rows}


class TestSchema:
    """Tests for schema management."""

    def test_init_creates_tables(self, configured_db):
        """Test that all tables exist after init."""
        init_schema()

        assert {"papers", "tags", "paper_tags"} <= _table_names()

    def test_init_is_idempotent(self, configured_db):
        """Test that init can run several times."""
        init_schema()
        init_schema()

        assert "papers" in _table_names()

    def test_statistics_empty(self, configured_db):
        """Test statistics on an empty library."""
        init_schema()

        stats = get_statistics()

        assert stats == {"total_papers": 0, "total_tags": 0, "total_links": 0}

    def test_statistics_and_reset(self, configured_db):
        """Test statistics count records, and reset clears them."""
        init_schema()
        repo = PaperRepository()
        paper_id = repo.add_paper("/library/attention_is_all_you_need", "https://arxiv.org/abs/1706.03762")
        repo.tag_paper(paper_id, ["transformer", "nlp"])

        assert get_statistics() == {"total_papers": 1, "total_tags": 2, "total_links": 2}

        reset_schema()

        assert get_statistics()["total_papers"] == 0
