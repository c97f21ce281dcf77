"""
SQLite connection management for the paper library.

Each operation opens its own short-lived connection, so searches never
share state. Any sqlite3 failure is logged and re-raised as StoreError.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..core import get_config, get_logger, StoreError

logger = get_logger(__name__)

PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA synchronous=NORMAL",
    "PRAGMA foreign_keys=ON",
)


class DatabaseManager:
    """
    Opens connections to the library database.

    WAL journaling lets searches read while papers are being edited;
    foreign keys make tag links follow their paper on delete.
    """

    def __init__(self, db_path: Path = None):
        """
        Args:
            db_path: SQLite file. Defaults to paths.database_path from config.
        """
        self.db_path = Path(db_path if db_path is not None else get_config().paths.database_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _store_error(self, action: str, error: Exception) -> StoreError:
        logger.error(f"Database {action} failed ({self.db_path}): {error}")
        return StoreError(f"Database {action} failed: {error}", {"path": str(self.db_path)})

    @contextmanager
    def _session(self, action: str) -> Iterator[sqlite3.Connection]:
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            for pragma in PRAGMAS:
                conn.execute(pragma)
        except sqlite3.Error as e:
            raise self._store_error("connection", e)

        try:
            yield conn
        except sqlite3.Error as e:
            conn.rollback()
            raise self._store_error(action, e)
        finally:
            conn.close()

    def connection(self):
        """
        Context manager yielding a connection for reads.

        Rows support access by column name.
        """
        return self._session("read")

    @contextmanager
    def cursor(self, commit: bool = True) -> Iterator[sqlite3.Cursor]:
        """
        Context manager yielding a cursor for writes.

        Args:
            commit: Commit when the block exits normally.

        The transaction is rolled back if the block raises.
        """
        with self._session("write") as conn:
            cur = conn.cursor()
            try:
                yield cur
                if commit:
                    conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cur.close()


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Shared DatabaseManager for the configured database."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


@contextmanager
def get_connection() -> Iterator[sqlite3.Connection]:
    """Read connection to the configured database."""
    with get_db_manager().connection() as conn:
        yield conn


@contextmanager
def get_cursor(commit: bool = True) -> Iterator[sqlite3.Cursor]:
    """Write cursor on the configured database."""
    with get_db_manager().cursor(commit=commit) as cur:
        yield cur
