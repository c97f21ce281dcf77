"""
Paper repository: the record store of the library.

Provides a clean interface for registering papers, managing their tags
and citations, and listing records for search. Tag names are folded to
lowercase at write time, so every lookup by name is case-insensitive.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from ..core import get_logger
from ..utils import normalize_tag_names
from .connection import DatabaseManager, get_db_manager

logger = get_logger(__name__)


@dataclass(frozen=True)
class PaperRecord:
    """A stored paper. Immutable for the duration of a search."""
    id: int
    canonical_base_path: str
    url: str
    citation: str = ""
    date_added: str = ""
    tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TagUsage:
    """A tag with the number of distinct papers referencing it."""
    id: int
    name: str
    usage_count: int


class PaperRepository:
    """
    Repository for paper records and their tag associations.

    All reads go through short-lived connections, so concurrent searches
    never coordinate with each other.
    """

    def __init__(self, manager: Optional[DatabaseManager] = None):
        """
        Initialize the repository.

        Args:
            manager: Database to use. Defaults to the configured singleton.
        """
        self.manager = manager or get_db_manager()

    def list_papers(self, tag_filter: Optional[Iterable[str]] = None) -> List[PaperRecord]:
        """
        List paper records ordered by id, optionally narrowed by tags.

        Args:
            tag_filter: Tag names every returned paper must carry. None
                        or an empty collection returns every paper.

        Returns:
            List of PaperRecord objects.
        """
        requested = normalize_tag_names(tag_filter or ())

        with self.manager.connection() as conn:
            if requested:
                placeholders = ", ".join("?" for _ in requested)
                rows = conn.execute(f"""
                    SELECT p.id, p.canonical_base_path, p.url, p.citation, p.date_added
                    FROM papers p
                    JOIN paper_tags pt ON pt.paper_id = p.id
                    JOIN tags t ON t.id = pt.tag_id
                    WHERE t.name IN ({placeholders})
                    GROUP BY p.id
                    HAVING COUNT(DISTINCT t.name) = ?
                    ORDER BY p.id
                """, (*requested, len(requested))).fetchall()
            else:
                rows = conn.execute("""
                    SELECT id, canonical_base_path, url, citation, date_added
                    FROM papers
                    ORDER BY id
                """).fetchall()

            tags_by_paper = self._load_tag_names(conn)

        return [
            self._row_to_record(row, tags_by_paper.get(row["id"], ()))
            for row in rows
        ]

    def list_tags(self) -> List[TagUsage]:
        """
        List every tag with its usage count.

        Returns:
            TagUsage objects, most used first, then by name.
        """
        with self.manager.connection() as conn:
            rows = conn.execute("""
                SELECT t.id, t.name, COUNT(DISTINCT pt.paper_id) AS usage_count
                FROM tags t
                LEFT JOIN paper_tags pt ON pt.tag_id = t.id
                GROUP BY t.id, t.name
                ORDER BY usage_count DESC, t.name
            """).fetchall()

        return [
            TagUsage(id=row["id"], name=row["name"], usage_count=row["usage_count"])
            for row in rows
        ]

    def add_paper(
        self,
        canonical_base_path: str,
        url: str,
        citation: str = "",
        date_added: str = None
    ) -> int:
        """
        Register a paper, replacing any record stored at the same path.

        A replaced record loses its tag links; tags left without papers
        are removed.

        Args:
            canonical_base_path: Absolute path of the paper directory.
            url: Where the PDF was retrieved from.
            citation: Free-form citation text.
            date_added: ISO date, defaults to today.

        Returns:
            The paper id.
        """
        date_added = date_added or date.today().isoformat()

        with self.manager.cursor() as cur:
            cur.execute("""
                INSERT INTO papers (canonical_base_path, url, date_added, citation)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(canonical_base_path) DO UPDATE SET
                    url = excluded.url,
                    date_added = excluded.date_added,
                    citation = excluded.citation
            """, (str(canonical_base_path), url, date_added, citation or ""))

            row = cur.execute(
                "SELECT id FROM papers WHERE canonical_base_path = ?",
                (str(canonical_base_path),)
            ).fetchone()
            cur.execute("DELETE FROM paper_tags WHERE paper_id = ?", (row["id"],))
            self._prune_orphans(cur)

        logger.info(f"Registered paper {row['id']}: {canonical_base_path}")
        return row["id"]

    def get_by_id(self, paper_id: int) -> Optional[PaperRecord]:
        """Fetch a paper by id, or None."""
        return self._get_one("id = ?", (paper_id,))

    def get_by_path(self, canonical_base_path: str) -> Optional[PaperRecord]:
        """Fetch a paper by its canonical base path, or None."""
        return self._get_one("canonical_base_path = ?", (str(canonical_base_path),))

    def tag_paper(self, paper_id: int, tag_names: Iterable[str]) -> List[str]:
        """
        Link a paper to tags, creating the tags that do not exist yet.

        Args:
            paper_id: Paper to tag.
            tag_names: Tag names, normalized before storage.

        Returns:
            The normalized names that were linked.
        """
        names = normalize_tag_names(tag_names)

        with self.manager.cursor() as cur:
            self._link_tags(cur, paper_id, names)

        return names

    def retag_paper(self, paper_id: int, tag_names: Iterable[str]) -> List[str]:
        """
        Replace every tag of a paper.

        Tags left without any paper are removed.

        Returns:
            The normalized names now linked to the paper.
        """
        names = normalize_tag_names(tag_names)

        with self.manager.cursor() as cur:
            cur.execute("DELETE FROM paper_tags WHERE paper_id = ?", (paper_id,))
            self._prune_orphans(cur)
            self._link_tags(cur, paper_id, names)

        logger.info(f"Retagged paper {paper_id}: {', '.join(names) or '(no tags)'}")
        return names

    def remove_paper(self, paper_id: int) -> bool:
        """
        Delete a paper record and its tag links.

        Returns:
            True if a record was deleted.
        """
        with self.manager.cursor() as cur:
            cur.execute("DELETE FROM paper_tags WHERE paper_id = ?", (paper_id,))
            cur.execute("DELETE FROM papers WHERE id = ?", (paper_id,))
            deleted = cur.rowcount > 0
            self._prune_orphans(cur)

        if deleted:
            logger.info(f"Removed paper {paper_id}")
        return deleted

    def prune_orphan_tags(self) -> int:
        """
        Delete tags that no longer belong to any paper.

        Returns:
            Number of tags deleted.
        """
        with self.manager.cursor() as cur:
            return self._prune_orphans(cur)

    def get_citation(self, paper_id: int) -> Optional[str]:
        """Return the citation of a paper, or None if it does not exist."""
        record = self.get_by_id(paper_id)
        return record.citation if record else None

    def update_citation(self, paper_id: int, citation: str) -> bool:
        """
        Store a new citation.

        Returns:
            True if the stored citation changed.
        """
        with self.manager.cursor() as cur:
            cur.execute(
                "UPDATE papers SET citation = ? WHERE id = ? AND citation != ?",
                (citation, paper_id, citation)
            )
            return cur.rowcount > 0

    def _get_one(self, where: str, params: tuple) -> Optional[PaperRecord]:
        with self.manager.connection() as conn:
            row = conn.execute(f"""
                SELECT id, canonical_base_path, url, citation, date_added
                FROM papers WHERE {where}
            """, params).fetchone()

            if row is None:
                return None

            tag_rows = conn.execute("""
                SELECT t.name FROM paper_tags pt
                JOIN tags t ON t.id = pt.tag_id
                WHERE pt.paper_id = ?
                ORDER BY t.name
            """, (row["id"],)).fetchall()

        return self._row_to_record(row, tuple(r["name"] for r in tag_rows))

    @staticmethod
    def _link_tags(cur, paper_id: int, names: List[str]) -> None:
        for name in names:
            cur.execute("INSERT OR IGNORE INTO tags (name) VALUES (?)", (name,))
            tag_id = cur.execute(
                "SELECT id FROM tags WHERE name = ?", (name,)
            ).fetchone()["id"]
            cur.execute(
                "INSERT OR IGNORE INTO paper_tags (paper_id, tag_id) VALUES (?, ?)",
                (paper_id, tag_id)
            )

    @staticmethod
    def _prune_orphans(cur) -> int:
        cur.execute("""
            DELETE FROM tags
            WHERE id NOT IN (SELECT DISTINCT tag_id FROM paper_tags)
        """)
        pruned = cur.rowcount
        if pruned > 0:
            logger.debug(f"Pruned {pruned} orphan tags")
        return pruned

    @staticmethod
    def _load_tag_names(conn) -> Dict[int, Tuple[str, ...]]:
        rows = conn.execute("""
            SELECT pt.paper_id, t.name FROM paper_tags pt
            JOIN tags t ON t.id = pt.tag_id
            ORDER BY pt.paper_id, t.name
        """).fetchall()

        tags: Dict[int, List[str]] = {}
        for row in rows:
            tags.setdefault(row["paper_id"], []).append(row["name"])
        return {paper_id: tuple(names) for paper_id, names in tags.items()}

    @staticmethod
    def _row_to_record(row, tags: Tuple[str, ...]) -> PaperRecord:
        """Convert a database row to a PaperRecord."""
        return PaperRecord(
            id=row["id"],
            canonical_base_path=row["canonical_base_path"],
            url=row["url"],
            citation=row["citation"] or "",
            date_added=row["date_added"] or "",
            tags=tags
        )
