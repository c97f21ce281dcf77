"""
Notes matcher over the Typst notes kept next to each paper.
"""

from pathlib import Path
from typing import Iterable, List

from ..core import get_logger
from .engine import MatchEngine
from .excerpt import build_excerpt
from .models import MatcherConfig, MatchOutcome, NoteLine, NoteMatch, SearchWarning
from .title_matcher import as_candidates

logger = get_logger(__name__)


class NotesMatcher:
    """
    Matches a query against every non-blank line of every notes file.

    Papers without a notes directory are skipped silently; unreadable
    files are skipped with a warning.
    """

    def __init__(self, config: MatcherConfig = None):
        self.config = config or MatcherConfig()

    def match(self, query: str, candidates: Iterable) -> MatchOutcome:
        outcome = MatchOutcome()

        with MatchEngine(self.config) as engine:
            engine.reparse(query or "")

            for candidate in as_candidates(candidates):
                for note_file in self._note_files(candidate.base_dir):
                    try:
                        text = note_file.read_text(encoding="utf-8", errors="replace")
                    except OSError as e:
                        logger.warning(f"Skipping {note_file}: {e}")
                        outcome.warnings.append(SearchWarning(path=str(note_file), message=str(e)))
                        continue

                    for line_index, line in enumerate(text.splitlines()):
                        if not line.strip():
                            continue
                        engine.push(
                            NoteLine(candidate.record_id, candidate.path, note_file.name, line_index, line),
                            lambda note: note.text
                        )
                        outcome.items_indexed += 1

            outcome.converged = engine.run(self.config.max_ticks)
            snapshot = engine.snapshot()

        if not outcome.converged:
            outcome.warnings.append(SearchWarning(
                path="",
                message=f"matching stopped after {self.config.max_ticks} ticks, results are partial"
            ))

        for item in snapshot.matched_items():
            note = item.data
            outcome.matches.append(NoteMatch(
                record_id=note.record_id,
                path=note.owning_path,
                note_file=note.note_file,
                line_number=note.line_index + 1,
                excerpt=build_excerpt(
                    note.text,
                    self.config.excerpt_length,
                    self.config.excerpt_suffix,
                    self.config.newline_marker
                ),
                score=item.score
            ))

        return outcome

    def _note_files(self, base_dir: Path) -> List[Path]:
        notes_dir = base_dir / self.config.notes_directory
        if not notes_dir.is_dir():
            return []
        return sorted(
            path for path in notes_dir.iterdir()
            if path.is_file() and path.suffix == self.config.notes_extension
        )
