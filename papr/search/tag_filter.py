"""
Tag filter applied before both matchers.

A record qualifies only if it carries every requested tag. Names are
compared after the same normalization used when tags are stored.
"""

from typing import Iterable, List, Optional, TypeVar

from ..utils import normalize_tag_name, normalize_tag_names

R = TypeVar("R")


def filter_by_tags(records: Iterable[R], requested: Optional[Iterable[str]] = None) -> List[R]:
    """
    Keep the records linked to every requested tag.

    Args:
        records: Objects with a `tags` attribute holding tag names.
        requested: Tag names. None or empty keeps every record.

    Returns:
        Qualifying records in input order.
    """
    wanted = set(normalize_tag_names(requested or ()))

    if not wanted:
        return list(records)

    return [
        record for record in records
        if wanted.issubset(normalize_tag_name(tag) for tag in record.tags)
    ]
