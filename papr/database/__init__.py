"""
Database module: the SQLite record store.

Provides connection management, schema definitions, and the paper
repository holding paper records and their tag associations.
"""

from .connection import get_connection, get_cursor, get_db_manager, DatabaseManager
from .schema import init_schema, reset_schema, get_statistics
from .repository import PaperRecord, TagUsage, PaperRepository
from .tag_selection import (
    ExistingTag,
    NewTagEntry,
    TagChoice,
    render_tag_choice,
    build_tag_choices,
    resolve_tag_selection
)

__all__ = [
    "get_connection",
    "get_cursor",
    "get_db_manager",
    "DatabaseManager",
    "init_schema",
    "reset_schema",
    "get_statistics",
    "PaperRecord",
    "TagUsage",
    "PaperRepository",
    "ExistingTag",
    "NewTagEntry",
    "TagChoice",
    "render_tag_choice",
    "build_tag_choices",
    "resolve_tag_selection"
]
