"""
Search module: fuzzy title, full-text and notes search.

Provides the fuzzy scorer, the incremental matching engine, the
matchers, excerpt building, ranking and rendering of results.
"""

from .models import (
    SearchMode,
    CaseMatching,
    MatcherConfig,
    Candidate,
    PageUnit,
    NoteLine,
    TitleMatch,
    PageMatch,
    NoteMatch,
    MatchResult,
    SearchWarning,
    MatchOutcome,
    SearchReport
)
from .fuzzy import FuzzyAtom, FuzzyPattern
from .engine import MatchEngine, Snapshot, TickStatus
from .excerpt import build_excerpt
from .tag_filter import filter_by_tags
from .title_matcher import TitleMatcher
from .fulltext_matcher import FullTextMatcher
from .notes_matcher import NotesMatcher
from .ranking import rank_matches
from .display import render_match, render_title_match, render_page_match, render_note_match
from .service import LibrarySearch, search_titles, search_fulltext, search_notes

__all__ = [
    "SearchMode",
    "CaseMatching",
    "MatcherConfig",
    "Candidate",
    "PageUnit",
    "NoteLine",
    "TitleMatch",
    "PageMatch",
    "NoteMatch",
    "MatchResult",
    "SearchWarning",
    "MatchOutcome",
    "SearchReport",
    "FuzzyAtom",
    "FuzzyPattern",
    "MatchEngine",
    "Snapshot",
    "TickStatus",
    "build_excerpt",
    "filter_by_tags",
    "TitleMatcher",
    "FullTextMatcher",
    "NotesMatcher",
    "rank_matches",
    "render_match",
    "render_title_match",
    "render_page_match",
    "render_note_match",
    "LibrarySearch",
    "search_titles",
    "search_fulltext",
    "search_notes"
]
