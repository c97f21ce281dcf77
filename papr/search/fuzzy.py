"""
Approximate subsequence scoring.

A needle matches a haystack when every needle character occurs in the
haystack in order. The score rewards matches on word boundaries,
consecutive runs and an aligned first character, and penalizes gaps.
Any contiguous occurrence of the needle scores above every scattered
alignment, and a contiguous occurrence at the start of a word scores
above one in the middle of a word.
"""

from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from ..utils import fold_for_matching
from .models import CaseMatching

SCORE_MATCH = 16
SCORE_GAP_START = -3
SCORE_GAP_EXTENSION = -1

BONUS_BOUNDARY = SCORE_MATCH // 2
BONUS_NON_WORD = SCORE_MATCH // 2
BONUS_CAMEL123 = BONUS_BOUNDARY + SCORE_GAP_EXTENSION
BONUS_CONSECUTIVE = -(SCORE_GAP_START + SCORE_GAP_EXTENSION)
BONUS_BOUNDARY_WHITE = BONUS_BOUNDARY + 2
BONUS_BOUNDARY_DELIMITER = BONUS_BOUNDARY + 1
BONUS_FIRST_CHAR_MULTIPLIER = 2

DELIMITER_CHARS = "/,:;|"


class CharClass(IntEnum):
    WHITE = 0
    NON_WORD = 1
    DELIMITER = 2
    LOWER = 3
    UPPER = 4
    LETTER = 5
    NUMBER = 6


_WORD_CLASSES = (CharClass.LOWER, CharClass.UPPER, CharClass.LETTER, CharClass.NUMBER)


def char_class(ch: str) -> CharClass:
    if ch.isspace():
        return CharClass.WHITE
    if ch in DELIMITER_CHARS:
        return CharClass.DELIMITER
    if ch.isdecimal():
        return CharClass.NUMBER
    if ch.islower():
        return CharClass.LOWER
    if ch.isupper():
        return CharClass.UPPER
    if ch.isalpha():
        return CharClass.LETTER
    return CharClass.NON_WORD


def position_bonus(prev: CharClass, cur: CharClass) -> int:
    """Bonus for matching a character of class cur that follows prev."""
    if cur in _WORD_CLASSES:
        if prev == CharClass.WHITE:
            return BONUS_BOUNDARY_WHITE
        if prev == CharClass.DELIMITER:
            return BONUS_BOUNDARY_DELIMITER
        if prev == CharClass.NON_WORD:
            return BONUS_BOUNDARY
    if prev == CharClass.LOWER and cur == CharClass.UPPER:
        return BONUS_CAMEL123
    if prev != CharClass.NUMBER and cur == CharClass.NUMBER:
        return BONUS_CAMEL123
    if cur in (CharClass.NON_WORD, CharClass.DELIMITER):
        return BONUS_NON_WORD
    if cur == CharClass.WHITE:
        return BONUS_BOUNDARY_WHITE
    return 0


def contiguous_bonus(needle_length: int) -> int:
    """
    Extra score granted to contiguous occurrences.

    Larger than the widest possible gap between a scattered alignment
    and a contiguous one of the same needle.
    """
    return (
        needle_length * (BONUS_BOUNDARY_WHITE - BONUS_CONSECUTIVE)
        + BONUS_BOUNDARY_WHITE * BONUS_FIRST_CHAR_MULTIPLIER
    )


def prepare_haystack(text: str, case_sensitive: bool, normalize: bool) -> Tuple[str, str]:
    """
    Fold a haystack for comparison.

    Returns:
        (folded, origin) where origin[i] is the original character that
        produced folded[i]; character classes are read from origin so
        case folding does not erase camel-case boundaries.
    """
    if text.isascii():
        return (text if case_sensitive else text.lower()), text

    folded: List[str] = []
    origin: List[str] = []
    for ch in text:
        if normalize:
            out = fold_for_matching(ch, case_sensitive)
        else:
            out = ch if case_sensitive else ch.lower()
        folded.append(out)
        origin.append(ch * len(out))

    return "".join(folded), "".join(origin)


def _alignment_window(text: str, needle: str) -> Optional[Tuple[int, int]]:
    """Shortest window ending at the earliest complete match, or None."""
    pos = -1
    start = -1
    for ch in needle:
        pos = text.find(ch, pos + 1)
        if pos < 0:
            return None
        if start < 0:
            start = pos
    end = pos + 1

    pos = end
    for ch in reversed(needle):
        pos = text.rfind(ch, start, pos)
    return pos, end


def _score_window(text: str, origin: str, needle: str, start: int, end: int) -> int:
    score = 0
    consecutive = 0
    first_bonus = 0
    in_gap = False
    pidx = 0
    prev_class = char_class(origin[start - 1]) if start > 0 else CharClass.WHITE

    for idx in range(start, end):
        cls = char_class(origin[idx])

        if pidx < len(needle) and text[idx] == needle[pidx]:
            score += SCORE_MATCH
            bonus = position_bonus(prev_class, cls)

            if consecutive == 0:
                first_bonus = bonus
            else:
                if bonus >= BONUS_BOUNDARY and bonus > first_bonus:
                    first_bonus = bonus
                bonus = max(bonus, first_bonus, BONUS_CONSECUTIVE)

            if pidx == 0:
                score += bonus * BONUS_FIRST_CHAR_MULTIPLIER
            else:
                score += bonus

            in_gap = False
            consecutive += 1
            pidx += 1
        else:
            score += SCORE_GAP_EXTENSION if in_gap else SCORE_GAP_START
            in_gap = True
            consecutive = 0
            first_bonus = 0

        prev_class = cls

    return score


def score_folded(text: str, origin: str, needle: str) -> Optional[int]:
    """
    Score an already folded needle against an already folded haystack.

    Returns:
        The score, or None when needle is not a subsequence of text.
    """
    if not needle:
        return 0

    occurrence = text.find(needle)
    if occurrence >= 0:
        best = None
        while occurrence >= 0:
            score = _score_window(text, origin, needle, occurrence, occurrence + len(needle))
            if best is None or score > best:
                best = score
            occurrence = text.find(needle, occurrence + 1)
        return best + contiguous_bonus(len(needle))

    window = _alignment_window(text, needle)
    if window is None:
        return None

    return _score_window(text, origin, needle, *window)


class FuzzyAtom:
    """
    A single needle scored as one approximate subsequence.

    With smart case matching, a needle containing an uppercase letter is
    compared case-sensitively; otherwise both sides are lowercased.
    """

    def __init__(
        self,
        needle: str,
        case_matching: CaseMatching = CaseMatching.SMART,
        normalize: bool = True
    ):
        if case_matching == CaseMatching.RESPECT:
            self.case_sensitive = True
        elif case_matching == CaseMatching.SMART:
            self.case_sensitive = any(ch.isupper() for ch in needle)
        else:
            self.case_sensitive = False

        self.normalize = normalize
        self.raw = needle
        if normalize:
            self.needle = fold_for_matching(needle, self.case_sensitive)
        else:
            self.needle = needle if self.case_sensitive else needle.lower()

    def score(self, haystack: str) -> Optional[int]:
        """Score haystack; None when it does not match."""
        if not self.needle:
            return 0
        text, origin = prepare_haystack(haystack, self.case_sensitive, self.normalize)
        return score_folded(text, origin, self.needle)

    def __repr__(self) -> str:
        return f"FuzzyAtom({self.raw!r}, case_sensitive={self.case_sensitive})"


class FuzzyPattern:
    """
    Whitespace-separated atoms that must all match.

    The score of a haystack is the sum of its atom scores. A pattern with
    no atoms matches everything with a score of 0.
    """

    def __init__(self, atoms: List[FuzzyAtom], normalize: bool = True):
        self.atoms = atoms
        self.normalize = normalize

    @classmethod
    def parse(
        cls,
        text: str,
        case_matching: CaseMatching = CaseMatching.IGNORE,
        normalize: bool = True
    ) -> "FuzzyPattern":
        atoms = [FuzzyAtom(word, case_matching, normalize) for word in (text or "").split()]
        return cls(atoms, normalize)

    @property
    def is_empty(self) -> bool:
        return not self.atoms

    def score(self, haystack: str) -> Optional[int]:
        """Score haystack; None unless every atom matches."""
        if not self.atoms:
            return 0

        prepared: Dict[bool, Tuple[str, str]] = {}
        total = 0

        for atom in self.atoms:
            if atom.case_sensitive not in prepared:
                prepared[atom.case_sensitive] = prepare_haystack(
                    haystack, atom.case_sensitive, self.normalize
                )
            text, origin = prepared[atom.case_sensitive]

            score = score_folded(text, origin, atom.needle)
            if score is None:
                return None
            total += score

        return total
