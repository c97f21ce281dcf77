"""
Database schema definitions for the paper library.

Defines the papers table, the tags table and the paper_tags link table.
"""

from typing import Optional

from ..core import get_logger
from .connection import DatabaseManager, get_db_manager

logger = get_logger(__name__)


PAPERS_TABLE = """
CREATE TABLE IF NOT EXISTS papers (
    id INTEGER PRIMARY KEY,
    canonical_base_path TEXT NOT NULL UNIQUE,
    url TEXT NOT NULL,
    date_added TEXT NOT NULL,
    citation TEXT NOT NULL DEFAULT ''
)
"""

TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS tags (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL UNIQUE
)
"""

PAPER_TAGS_TABLE = """
CREATE TABLE IF NOT EXISTS paper_tags (
    paper_id INTEGER NOT NULL,
    tag_id INTEGER NOT NULL,
    PRIMARY KEY (paper_id, tag_id),
    FOREIGN KEY (paper_id) REFERENCES papers(id) ON DELETE CASCADE,
    FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
)
"""

INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_paper_tags_tag_id ON paper_tags(tag_id)",
]


def init_schema(manager: Optional[DatabaseManager] = None) -> None:
    """
    Initialize database schema if not exists.

    Args:
        manager: Database to initialize. Defaults to the configured one.
    """
    manager = manager or get_db_manager()
    logger.debug(f"Initializing database schema at {manager.db_path}")

    with manager.cursor() as cur:
        cur.execute(PAPERS_TABLE)
        cur.execute(TAGS_TABLE)
        cur.execute(PAPER_TAGS_TABLE)

        for index_sql in INDEXES:
            cur.execute(index_sql)


def reset_schema(manager: Optional[DatabaseManager] = None) -> None:
    """
    Drop and recreate all tables.

    Warning: This deletes every paper record and tag.
    """
    manager = manager or get_db_manager()
    logger.warning("Resetting database schema - all records will be deleted")

    with manager.cursor() as cur:
        cur.execute("DROP TABLE IF EXISTS paper_tags")
        cur.execute("DROP TABLE IF EXISTS tags")
        cur.execute("DROP TABLE IF EXISTS papers")

    init_schema(manager)


def get_statistics(manager: Optional[DatabaseManager] = None) -> dict:
    """
    Get library statistics.

    Returns:
        Dictionary with paper, tag and link counts.
    """
    manager = manager or get_db_manager()

    with manager.connection() as conn:
        stats = {}
        stats["total_papers"] = conn.execute("SELECT COUNT(*) FROM papers").fetchone()[0]
        stats["total_tags"] = conn.execute("SELECT COUNT(*) FROM tags").fetchone()[0]
        stats["total_links"] = conn.execute("SELECT COUNT(*) FROM paper_tags").fetchone()[0]

    return stats
