"""
Text utility functions for the paper library.

Provides tag name normalization, comma-separated list parsing and
Unicode folding for matching.
"""

import unicodedata
from typing import Iterable, List


def normalize_tag_name(name: str) -> str:
    """
    Normalize a tag name for storage and lookup.

    Tags are trimmed, NFKC-normalized and folded to lowercase, so "GNN"
    and " gnn " name the same tag.

    Args:
        name: Raw tag name.

    Returns:
        Normalized name, empty if nothing is left.
    """
    if not name:
        return ""
    return unicodedata.normalize("NFKC", name).strip().lower()


def normalize_tag_names(names: Iterable[str]) -> List[str]:
    """
    Normalize, de-duplicate and sort tag names, dropping empty ones.

    Args:
        names: Raw tag names.

    Returns:
        Sorted list of unique normalized names.
    """
    return sorted({n for n in (normalize_tag_name(name) for name in names) if n})


def split_comma_list(text: str) -> List[str]:
    """
    Split a comma-separated string into trimmed, non-empty items.

    Args:
        text: Input such as "gnn, transformer, mamba".

    Returns:
        Items in input order.
    """
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def fold_for_matching(text: str, case_sensitive: bool = False) -> str:
    """
    Normalize text so visually identical strings compare equal.

    Applies compatibility decomposition, drops combining marks so that
    "café" and "cafe" compare equal, then recomposes. Lowercases unless
    case_sensitive is set.

    Args:
        text: Text to fold.
        case_sensitive: Keep the original case.

    Returns:
        Folded text.
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    folded = unicodedata.normalize("NFC", stripped)

    return folded if case_sensitive else folded.lower()
