"""
Plain-text rendering of match results for terminal output.
"""

from ..utils import path_basename
from .models import MatchResult, NoteMatch, PageMatch, TitleMatch


def _heading(path: str) -> str:
    return f"{path_basename(path) or 'Unknown'} ({path})"


def render_title_match(match: TitleMatch) -> str:
    return f"{_heading(match.path)}\nID: {match.record_id}\nScore: {match.score}"


def render_page_match(match: PageMatch) -> str:
    return f"{_heading(match.path)}\nPage: {match.page_number}\nExcerpt: {match.excerpt}"


def render_note_match(match: NoteMatch) -> str:
    return (
        f"{_heading(match.path)}\nFile: {match.note_file}\n"
        f"Line: {match.line_number}\nExcerpt: {match.excerpt}"
    )


def render_match(match: MatchResult) -> str:
    """Render any match result with the renderer of its kind."""
    if isinstance(match, TitleMatch):
        return render_title_match(match)
    if isinstance(match, PageMatch):
        return render_page_match(match)
    if isinstance(match, NoteMatch):
        return render_note_match(match)
    raise TypeError(f"Not a match result: {match!r}")
