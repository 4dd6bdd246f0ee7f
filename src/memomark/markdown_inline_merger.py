"""
Merging of inline scanner output and reassembly of text units.

The scanners each resolve overlaps within their own category.  Overlaps between
categories are resolved here by one rule:

1. inline code wins inside its own span, so any image or link overlapping a
   code span is dropped;
2. the remaining matches are taken in start order and a match that overlaps one
   already taken is dropped.  When two matches start at the same index the
   longer one is taken first, then images before links before styles.
"""

from typing import List, Sequence

from memomark.markdown_inline_match import InlineKind, InlineMatch


InlineSegment = str | InlineMatch


_CATEGORY_ORDER = {
    InlineKind.IMAGE: 0,
    InlineKind.LINK: 1,
    InlineKind.BOLD: 2,
    InlineKind.ITALIC: 2,
    InlineKind.STRIKETHROUGH: 2,
    InlineKind.CODE: 2,
}


def merge_inline_matches(
    images: Sequence[InlineMatch],
    links: Sequence[InlineMatch],
    styles: Sequence[InlineMatch]
) -> List[InlineMatch]:
    """
    Combine the matches of all inline categories into one ordered sequence.

    Args:
        images: Matches from the image scanner
        links: Matches from the link scanner
        styles: Matches from the style scanner

    Returns:
        Non-overlapping matches sorted by start index
    """
    code_spans = [match for match in styles if match.kind == InlineKind.CODE]

    candidates = [
        match for match in list(images) + list(links)
        if not any(match.overlaps(code) for code in code_spans)
    ]
    candidates.extend(styles)
    candidates.sort(key=lambda m: (m.start_index, -m.length, _CATEGORY_ORDER[m.kind]))

    merged: List[InlineMatch] = []
    last_end = -1
    for match in candidates:
        if match.start_index <= last_end:
            continue

        merged.append(match)
        last_end = match.end_index

    return merged


def reassemble_inline(text: str, matches: Sequence[InlineMatch]) -> List[InlineSegment]:
    """
    Interleave literal text with inline matches.

    Literal segments are sliced straight from the original text by offset.

    Args:
        text: The original text unit
        matches: Non-overlapping matches sorted by start index

    Returns:
        Literal strings and matches in source order; empty strings are omitted
    """
    segments: List[InlineSegment] = []
    cursor = 0
    for match in matches:
        if match.start_index > cursor:
            segments.append(text[cursor:match.start_index])

        segments.append(match)
        cursor = match.end_index + 1

    if cursor < len(text):
        segments.append(text[cursor:])

    return segments
