"""
Library search facade.

Wires the record store, the tag filter, the matchers and the ranker
into one call per search mode. The module-level functions offer the
same searches over an explicit candidate set.
"""

import time
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from ..core import get_logger, SearchError
from ..utils import read_asset
from .fulltext_matcher import FullTextMatcher
from .models import (
    MatcherConfig,
    MatchOutcome,
    PageMatch,
    SearchMode,
    SearchReport,
    TitleMatch,
    NoteMatch
)
from .notes_matcher import NotesMatcher
from .ranking import rank_matches
from .tag_filter import filter_by_tags
from .title_matcher import TitleMatcher

logger = get_logger(__name__)


def _default_extractor():
    from ..extraction import PDFExtractor
    return PDFExtractor()


def search_titles(
    query: str,
    candidates: Iterable,
    config: MatcherConfig = None
) -> List[TitleMatch]:
    """
    Rank candidates by fuzzy title match.

    Args:
        query: Query text.
        candidates: Candidates or PaperRecords.
        config: Matcher settings.

    Returns:
        Ranked TitleMatch list.
    """
    return rank_matches(TitleMatcher(config).match(query, candidates))


def search_fulltext(
    query: str,
    candidates: Iterable,
    extractor=None,
    config: MatcherConfig = None,
    reader: Callable[[Path], Optional[bytes]] = read_asset
) -> List[PageMatch]:
    """
    Rank the PDF pages of candidates by fuzzy match.

    Args:
        query: Query text.
        candidates: Candidates or PaperRecords.
        extractor: Text extraction engine, defaults to a configured PDFExtractor.
        config: Matcher settings.
        reader: PDF byte accessor.

    Returns:
        Ranked PageMatch list.
    """
    matcher = FullTextMatcher(extractor or _default_extractor(), config, reader)
    return rank_matches(matcher.match(query, candidates).matches)


def search_notes(
    query: str,
    candidates: Iterable,
    config: MatcherConfig = None
) -> List[NoteMatch]:
    """Rank the notes lines of candidates by fuzzy match."""
    return rank_matches(NotesMatcher(config).match(query, candidates).matches)


class LibrarySearch:
    """
    Search entry point bound to a record store.

    Reads records once per search and never writes to the store, so
    several searches may run at the same time.
    """

    def __init__(self, repository=None, extractor=None, config: MatcherConfig = None):
        """
        Initialize the search facade.

        Args:
            repository: Object with list_papers(); defaults to PaperRepository().
            extractor: Text extraction engine; created on first full-text search.
            config: Matcher settings; defaults to the configuration file.
        """
        if repository is None:
            from ..database import PaperRepository
            repository = PaperRepository()
        if config is None:
            from ..core import get_config
            config = MatcherConfig.from_config(get_config())

        self.repository = repository
        self.config = config
        self._extractor = extractor

    @property
    def extractor(self):
        if self._extractor is None:
            self._extractor = _default_extractor()
        return self._extractor

    def candidates(self, tags: Optional[Iterable[str]] = None) -> list:
        """Records carrying every requested tag."""
        return filter_by_tags(self.repository.list_papers(), tags)

    def search(
        self,
        query: str,
        mode: Union[SearchMode, str] = SearchMode.TITLE,
        tags: Optional[Iterable[str]] = None,
        limit: int = None,
        strict: bool = None
    ) -> SearchReport:
        """
        Execute a search.

        Args:
            query: Query text. An empty query matches everything with score 0.
            mode: SearchMode or its value ("title", "fulltext", "notes").
            tags: Restrict to papers carrying all of these tags.
            limit: Maximum number of results, None or 0 for all.
            strict: Abort on the first unreadable PDF (full-text only).

        Returns:
            SearchReport with ranked results and warnings.

        Raises:
            SearchError: If mode is unknown or limit is negative.
            StoreError: If the record store cannot be read.
            ExtractionError: In strict mode, for an unreadable PDF.
        """
        start_time = time.time()

        try:
            mode = SearchMode(mode)
        except ValueError:
            raise SearchError(f"Unknown search mode: {mode}", query=query)

        if limit is not None and limit < 0:
            raise SearchError(f"Result limit must not be negative, got {limit}", query=query)

        candidates = self.candidates(tags)

        if mode == SearchMode.TITLE:
            outcome = MatchOutcome(matches=TitleMatcher(self.config).match(query, candidates))
        elif mode == SearchMode.FULLTEXT:
            outcome = FullTextMatcher(self.extractor, self.config).match(query, candidates, strict=strict)
        else:
            outcome = NotesMatcher(self.config).match(query, candidates)

        execution_time = (time.time() - start_time) * 1000

        report = SearchReport(
            query=query,
            mode=mode,
            results=rank_matches(outcome.matches, limit),
            warnings=outcome.warnings,
            candidates=len(candidates),
            execution_time_ms=round(execution_time, 2)
        )

        logger.debug(
            f"Search '{query}' ({mode.value}): {len(report.results)} results "
            f"from {report.candidates} papers in {execution_time:.1f}ms"
        )

        return report

    def search_titles(self, query: str, tags: Optional[Iterable[str]] = None) -> List[TitleMatch]:
        return self.search(query, SearchMode.TITLE, tags).results

    def search_fulltext(self, query: str, tags: Optional[Iterable[str]] = None) -> List[PageMatch]:
        return self.search(query, SearchMode.FULLTEXT, tags).results

    def search_notes(self, query: str, tags: Optional[Iterable[str]] = None) -> List[NoteMatch]:
        return self.search(query, SearchMode.NOTES, tags).results
