"""
Full-text matcher over the PDF bodies of the candidate papers.

Every non-blank page of every candidate is pushed into one matching
engine, so page scores are comparable across documents.
"""

from pathlib import Path
from typing import Callable, Iterable, Optional

from ..core import get_logger, ExtractionError
from ..utils import read_asset
from .engine import MatchEngine
from .excerpt import build_excerpt
from .models import MatcherConfig, MatchOutcome, PageMatch, PageUnit, SearchWarning
from .title_matcher import as_candidates

logger = get_logger(__name__)


class FullTextMatcher:
    """
    Matches a query against per-page PDF text.

    A candidate without a PDF asset is skipped silently. A document that
    cannot be extracted is skipped with a warning, or aborts the search
    when strict extraction is configured.
    """

    def __init__(
        self,
        extractor,
        config: MatcherConfig = None,
        reader: Callable[[Path], Optional[bytes]] = read_asset
    ):
        """
        Initialize the matcher.

        Args:
            extractor: Object with extract_pages(data, source) -> List[str].
            config: Matcher settings.
            reader: PDF byte accessor returning None for missing files.
        """
        self.extractor = extractor
        self.config = config or MatcherConfig()
        self.reader = reader

    def match(self, query: str, candidates: Iterable, strict: bool = None) -> MatchOutcome:
        """
        Find the pages matching query.

        Args:
            query: Query text; whitespace separates atoms that must all match.
            candidates: Candidates or PaperRecords, already tag-filtered.
            strict: Overrides config.strict_extraction.

        Returns:
            MatchOutcome with one PageMatch per matching page, unranked.

        Raises:
            ExtractionError: In strict mode, for the first unreadable document.
        """
        strict = self.config.strict_extraction if strict is None else strict
        outcome = MatchOutcome()

        with MatchEngine(self.config) as engine:
            engine.reparse(query or "")
            injector = engine.injector()

            for candidate in as_candidates(candidates):
                pdf_path = candidate.base_dir / self.config.pdf_filename

                try:
                    pages = self._extract(pdf_path)
                except ExtractionError as e:
                    if strict:
                        raise
                    logger.warning(f"Skipping {pdf_path}: {e.message}")
                    outcome.warnings.append(SearchWarning(path=str(pdf_path), message=e.message))
                    continue

                if pages is None:
                    logger.debug(f"No PDF for record {candidate.record_id} at {pdf_path}")
                    continue

                for page_index, text in enumerate(pages):
                    if not text.strip():
                        continue
                    injector.push(
                        PageUnit(candidate.record_id, candidate.path, page_index, text),
                        lambda unit: unit.text
                    )
                    outcome.items_indexed += 1

            outcome.converged = engine.run(self.config.max_ticks)
            snapshot = engine.snapshot()

        if not outcome.converged:
            outcome.warnings.append(SearchWarning(
                path="",
                message=f"matching stopped after {self.config.max_ticks} ticks, results are partial"
            ))

        for item in snapshot.matched_items(0, snapshot.matched_item_count):
            unit = item.data
            outcome.matches.append(PageMatch(
                record_id=unit.record_id,
                path=unit.owning_path,
                page_number=unit.page_index + 1,
                excerpt=build_excerpt(
                    unit.text,
                    self.config.excerpt_length,
                    self.config.excerpt_suffix,
                    self.config.newline_marker
                ),
                score=item.score
            ))

        logger.debug(
            f"Full-text '{query}': {len(outcome.matches)} of {outcome.items_indexed} pages matched"
        )
        return outcome

    def _extract(self, pdf_path: Path):
        """Page texts of the PDF, or None when it does not exist."""
        try:
            data = self.reader(pdf_path)
        except OSError as e:
            raise ExtractionError(f"Cannot read PDF: {e}", filepath=str(pdf_path))

        if data is None:
            return None

        return self.extractor.extract_pages(data, str(pdf_path))
