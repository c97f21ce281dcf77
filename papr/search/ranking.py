"""
Result ranking.

Orders matches by descending score; ties fall back to record id, then to
the position of the match inside the paper, so repeated searches over an
unchanged library return the same order.
"""

from typing import Iterable, List, Tuple

from ..core import SearchError
from .models import MatchResult, NoteMatch, PageMatch, TitleMatch


def rank_key(match: MatchResult) -> Tuple[int, int, str, int]:
    if isinstance(match, TitleMatch):
        return (-match.score, match.record_id, "", 0)
    if isinstance(match, PageMatch):
        return (-match.score, match.record_id, "", match.page_number)
    if isinstance(match, NoteMatch):
        return (-match.score, match.record_id, match.note_file, match.line_number)
    raise TypeError(f"Not a match result: {match!r}")


def rank_matches(matches: Iterable[MatchResult], limit: int = None) -> List[MatchResult]:
    """
    Stable-sort matches, best first.

    Args:
        matches: Match results of any kind.
        limit: Keep at most this many; None or 0 keeps all.

    Raises:
        SearchError: If limit is negative.
    """
    if limit is not None and limit < 0:
        raise SearchError(f"Result limit must not be negative, got {limit}")

    ranked = sorted(matches, key=rank_key)
    return ranked[:limit] if limit else ranked
