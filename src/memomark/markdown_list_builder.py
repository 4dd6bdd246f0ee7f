"""Nesting of flat list items into a tree."""

from typing import List, Sequence, Tuple

from memomark.markdown_block_node import MarkdownListItem


def build_list_tree(flat_items: Sequence[Tuple[str, int]]) -> List[MarkdownListItem]:
    """
    Nest flat (text, indent_level) pairs by indent level.

    An item becomes a child of the closest preceding item with a strictly
    smaller indent level.  Items that skip levels (0 straight to 3) are nested
    under that ancestor rather than rejected.

    Args:
        flat_items: List items in source order

    Returns:
        The root items, each carrying its nested children
    """
    roots: List[MarkdownListItem] = []

    # Explicit stack of (item, level) so deep nesting never recurses
    stack: List[Tuple[MarkdownListItem, int]] = []

    for text, level in flat_items:
        item = MarkdownListItem(text=text, indent_level=level)

        while stack and stack[-1][1] >= level:
            stack.pop()

        if stack:
            stack[-1][0].children.append(item)

        else:
            roots.append(item)

        stack.append((item, level))

    return roots
