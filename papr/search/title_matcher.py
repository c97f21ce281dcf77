"""
Title matcher.

Scores a query against paper titles, the title being the final segment
of each paper's canonical base path.
"""

from typing import Iterable, List

from ..core import get_logger
from .fuzzy import FuzzyAtom
from .models import Candidate, MatcherConfig, TitleMatch

logger = get_logger(__name__)


def as_candidates(items: Iterable) -> List[Candidate]:
    """Accept Candidates or PaperRecords; return Candidates."""
    return [
        item if isinstance(item, Candidate) else Candidate.from_record(item)
        for item in items
    ]


class TitleMatcher:
    """
    Fuzzy title matching with smart case.

    The whole query is one needle, so "attn" matches
    "attention_is_all_you_need" while "gnn_survey_2021" is left out.
    """

    def __init__(self, config: MatcherConfig = None):
        self.config = config or MatcherConfig()

    def match(self, query: str, candidates: Iterable) -> List[TitleMatch]:
        """
        Score every candidate title.

        Candidates with an empty title and candidates the query does not
        match are omitted. Results are not ranked.

        Args:
            query: Query text; surrounding whitespace is ignored.
            candidates: Candidates or PaperRecords.

        Returns:
            At most one TitleMatch per candidate.
        """
        atom = FuzzyAtom(
            (query or "").strip(),
            self.config.title_case,
            self.config.normalize
        )

        matches = []
        for candidate in as_candidates(candidates):
            if not candidate.title:
                logger.debug(f"Skipping record {candidate.record_id}: no title in {candidate.path!r}")
                continue

            score = atom.score(candidate.title)
            if score is None:
                continue

            matches.append(TitleMatch(
                record_id=candidate.record_id,
                path=candidate.path,
                url=candidate.url,
                score=score
            ))

        return matches
