"""
Data models for search functionality.

Defines the matcher configuration, the candidate and page views fed to
the matchers, and the immutable match results they produce.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union

from ..core import ConfigurationError
from ..utils import path_basename
from .excerpt import LINE_BREAK


class SearchMode(Enum):
    """Available search modes."""
    TITLE = "title"
    FULLTEXT = "fulltext"
    NOTES = "notes"


class CaseMatching(Enum):
    """How letter case is compared."""
    SMART = "smart"
    IGNORE = "ignore"
    RESPECT = "respect"


@dataclass(frozen=True)
class MatcherConfig:
    """
    Settings for one matcher construction.

    Built per search and passed explicitly to each matcher; matchers never
    read process-wide state.

    Attributes:
        title_case: Case matching for title queries.
        fulltext_case: Case matching for page and notes queries.
        normalize: Fold Unicode so visually identical text compares equal.
        excerpt_length: Maximum excerpt length, in characters.
        excerpt_suffix: Appended to every excerpt.
        newline_marker: Replaces each line break inside an excerpt.
        max_ticks: Iteration ceiling of the matching engine's convergence loop.
        tick_batch_size: Items each worker scores per tick.
        worker_threads: Size of the engine's scoring pool.
        strict_extraction: Abort on the first unreadable document.
        pdf_filename: PDF location relative to a paper directory.
        notes_directory: Notes location relative to a paper directory.
        notes_extension: Suffix of notes files.
    """
    title_case: CaseMatching = CaseMatching.SMART
    fulltext_case: CaseMatching = CaseMatching.IGNORE
    normalize: bool = True
    excerpt_length: int = 120
    excerpt_suffix: str = "..."
    newline_marker: str = "↵"
    max_ticks: int = 10000
    tick_batch_size: int = 256
    worker_threads: int = 4
    strict_extraction: bool = False
    pdf_filename: str = "paper.pdf"
    notes_directory: str = "summary"
    notes_extension: str = ".typ"

    def __post_init__(self):
        if self.excerpt_length < 1:
            raise ConfigurationError("excerpt_length must be positive")
        if self.max_ticks < 1 or self.tick_batch_size < 1 or self.worker_threads < 1:
            raise ConfigurationError(
                "max_ticks, tick_batch_size and worker_threads must be positive"
            )
        if LINE_BREAK.search(self.newline_marker):
            raise ConfigurationError("newline_marker must not contain a line break")

    @classmethod
    def from_config(cls, config, strict: bool = None) -> "MatcherConfig":
        """
        Build matcher settings from a loaded Config.

        Args:
            config: papr.core.Config instance.
            strict: Override config.extraction.strict.
        """
        search = config.search
        return cls(
            excerpt_length=search.excerpt_length,
            excerpt_suffix=search.excerpt_suffix,
            newline_marker=search.newline_marker,
            max_ticks=search.max_ticks,
            tick_batch_size=search.tick_batch_size,
            worker_threads=search.worker_threads,
            strict_extraction=config.extraction.strict if strict is None else strict,
            pdf_filename=config.library.pdf_filename,
            notes_directory=config.library.notes_directory,
            notes_extension=config.library.notes_extension
        )


@dataclass(frozen=True)
class Candidate:
    """
    A paper record restricted to what matching needs.

    Attributes:
        record_id: Paper id.
        path: Canonical base path of the paper directory.
        url: Paper URL.
        title: Final path segment, empty when the path has none.
    """
    record_id: int
    path: str
    url: str = ""
    title: str = ""

    @classmethod
    def from_record(cls, record) -> "Candidate":
        """Build a candidate from a PaperRecord (or any compatible object)."""
        path = str(record.canonical_base_path)
        return cls(
            record_id=record.id,
            path=path,
            url=record.url,
            title=path_basename(path)
        )

    @property
    def base_dir(self) -> Path:
        return Path(self.path)


@dataclass(frozen=True)
class PageUnit:
    """One extracted page; lives only while a full-text search runs."""
    record_id: int
    owning_path: str
    page_index: int
    text: str


@dataclass(frozen=True)
class NoteLine:
    """One line of a notes file; lives only while a notes search runs."""
    record_id: int
    owning_path: str
    note_file: str
    line_index: int
    text: str


@dataclass(frozen=True)
class TitleMatch:
    """A paper whose title matched the query."""
    record_id: int
    path: str
    url: str
    score: int


@dataclass(frozen=True)
class PageMatch:
    """
    A PDF page that matched the query.

    Attributes:
        record_id: Paper id.
        path: Canonical base path of the paper.
        page_number: 1-indexed page number.
        excerpt: Single-line preview of the page.
        score: Matching score, higher is better.
    """
    record_id: int
    path: str
    page_number: int
    excerpt: str
    score: int


@dataclass(frozen=True)
class NoteMatch:
    """A notes line that matched the query. line_number is 1-indexed."""
    record_id: int
    path: str
    note_file: str
    line_number: int
    excerpt: str
    score: int


MatchResult = Union[TitleMatch, PageMatch, NoteMatch]


@dataclass(frozen=True)
class SearchWarning:
    """A document that was skipped, with the reason."""
    path: str
    message: str


@dataclass
class MatchOutcome:
    """Unranked matches plus the problems met while producing them."""
    matches: List[MatchResult] = field(default_factory=list)
    warnings: List[SearchWarning] = field(default_factory=list)
    items_indexed: int = 0
    converged: bool = True


@dataclass
class SearchReport:
    """
    Result of a library search.

    Attributes:
        query: The original query text.
        mode: Search mode used.
        results: Ranked matches.
        warnings: Documents skipped during the search.
        candidates: Number of papers left after tag filtering.
        execution_time_ms: Wall time of the search.
    """
    query: str
    mode: SearchMode
    results: List[MatchResult] = field(default_factory=list)
    warnings: List[SearchWarning] = field(default_factory=list)
    candidates: int = 0
    execution_time_ms: float = 0.0
