"""
Excerpt builder shared by the matchers.

Produces a bounded, single-line preview of matched text.
"""

import re

DEFAULT_EXCERPT_LENGTH = 120
DEFAULT_SUFFIX = "..."
DEFAULT_NEWLINE_MARKER = "↵"

# Every character str.splitlines() treats as a line boundary; CRLF counts once.
LINE_BREAK = re.compile("\r\n|[\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029]")


def build_excerpt(
    text: str,
    length: int = DEFAULT_EXCERPT_LENGTH,
    suffix: str = DEFAULT_SUFFIX,
    newline_marker: str = DEFAULT_NEWLINE_MARKER
) -> str:
    """
    Build a single-line preview of text.

    Takes the first `length` characters, trims surrounding whitespace,
    replaces each line break with newline_marker and appends suffix. The
    part before the suffix never exceeds `length` characters.

    Args:
        text: Matched text.
        length: Maximum number of characters kept.
        suffix: Truncation marker appended to every excerpt.
        newline_marker: Visible replacement for line breaks.

    Returns:
        The excerpt.
    """
    head = (text or "")[:length].strip()
    single_line = LINE_BREAK.sub(newline_marker, head)

    if len(single_line) > length:
        single_line = single_line[:length].rstrip()

    return single_line + suffix
