"""Display titles for memos."""

import re


UNTITLED = "Untitled"

_HEADING_MARKER_PATTERN = re.compile(r'^#+\s*')


def extract_title(text: str) -> str:
    """
    Derive a memo's display title from its first line.

    Args:
        text: The memo body

    Returns:
        The first line with any heading marker removed, or "Untitled" if that
        leaves nothing
    """
    if not text.strip():
        return UNTITLED

    first_line = text.split('\n', 1)[0].strip()
    return _HEADING_MARKER_PATTERN.sub('', first_line) or UNTITLED
