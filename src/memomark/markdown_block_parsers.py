"""
Block parsers for the markdown document scanner.

Every parser has the same shape: given all source lines and a cursor, it either
returns a block node whose `end_line` tells the scanner where to resume, or
returns None to let the next parser try.  Parsers never raise.
"""

from functools import partial
import re
from typing import Callable, List, Sequence, Tuple

from memomark.markdown_block_node import (
    ListKind, MarkdownBlockNode, MarkdownBlockquoteNode, MarkdownChecklistItem, MarkdownChecklistNode,
    MarkdownCodeBlockNode, MarkdownHeadingNode, MarkdownHorizontalRuleNode, MarkdownListNode, MarkdownTableNode
)
from memomark.markdown_list_builder import build_list_tree
from memomark.markdown_settings import MemomarkSettings


BlockParser = Callable[[Sequence[str], int], MarkdownBlockNode | None]


_CODE_FENCE = '```'
_HEADING_PREFIX_PATTERN = re.compile(r'^(#+)\s*')
_UNORDERED_ITEM_PATTERN = re.compile(r'^([ \t]*)-[ \t]+(.*)$')
_ORDERED_ITEM_PATTERN = re.compile(r'^([ \t]*)\d+\.[ \t]+(.*)$')
_CHECKLIST_ITEM_PATTERN = re.compile(r'^[ \t]*-[ \t]+\[([ x])\][ \t]+(.*)$')
_TABLE_SEPARATOR_PATTERN = re.compile(r'^\|?\s*:?-+:?\s*(\|\s*:?-+:?\s*)*\|?\s*$')
_HORIZONTAL_RULE_PATTERN = re.compile(r'^(?:-{3,}|\*{3,}|_{3,})$')
_BLOCKQUOTE_PREFIX = '> '


def _is_blank(line: str) -> bool:
    return not line.strip()


def indent_level(whitespace: str, spaces_per_indent: int = 2) -> int:
    """
    Compute the list indent level of a run of leading whitespace.

    A tab counts as one level and each space as 1/spaces_per_indent of a level;
    the total is floored, so with the default three spaces land on level 1.

    Args:
        whitespace: The leading whitespace of a line
        spaces_per_indent: Number of spaces that make up one level

    Returns:
        The indent level
    """
    tabs = whitespace.count('\t')
    spaces = whitespace.count(' ')
    return (tabs * spaces_per_indent + spaces) // spaces_per_indent


def parse_code_block(lines: Sequence[str], index: int) -> MarkdownCodeBlockNode | None:
    """Parse a fenced code block; declines when the fence is never closed."""
    line = lines[index]
    if not line.startswith(_CODE_FENCE):
        return None

    language = line[len(_CODE_FENCE):].strip() or None

    end = index + 1
    while end < len(lines) and not lines[end].startswith(_CODE_FENCE):
        end += 1

    if end >= len(lines):
        return None

    return MarkdownCodeBlockNode(
        start_line=index,
        end_line=end,
        content='\n'.join(lines[index + 1:end]),
        language=language
    )


def _is_table_row(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith('|') and stripped.endswith('|')


def _split_table_row(line: str) -> List[str]:
    return [cell.strip() for cell in line.strip()[1:-1].split('|')]


def parse_table(lines: Sequence[str], index: int) -> MarkdownTableNode | None:
    """
    Parse a pipe table.

    The header line is only accepted when the following line is a separator
    row, so a stray line with pipes stays paragraph text.
    """
    line = lines[index]
    if not _is_table_row(line):
        return None

    if index + 1 >= len(lines) or not _TABLE_SEPARATOR_PATTERN.match(lines[index + 1]):
        return None

    rows: List[List[str]] = []
    end = index + 2
    while end < len(lines) and _is_table_row(lines[end]):
        rows.append(_split_table_row(lines[end]))
        end += 1

    return MarkdownTableNode(
        start_line=index,
        end_line=end - 1,
        headers=_split_table_row(line),
        rows=rows
    )


def parse_heading(lines: Sequence[str], index: int) -> MarkdownHeadingNode | None:
    """Parse a heading line; any line starting with '#' is a heading."""
    line = lines[index]
    match = _HEADING_PREFIX_PATTERN.match(line)
    if not match:
        return None

    return MarkdownHeadingNode(
        start_line=index,
        end_line=index,
        level=len(match.group(1)),
        text=line[match.end():].strip()
    )


def _match_checklist_item(line: str) -> MarkdownChecklistItem | None:
    match = _CHECKLIST_ITEM_PATTERN.match(line)
    if not match:
        return None

    return MarkdownChecklistItem(text=match.group(2), checked=match.group(1) == 'x')


def parse_checklist(lines: Sequence[str], index: int) -> MarkdownChecklistNode | None:
    """Parse a run of `- [ ]` / `- [x]` items."""
    items: List[MarkdownChecklistItem] = []
    end = index
    while end < len(lines):
        item = _match_checklist_item(lines[end])
        if item is None:
            break

        items.append(item)
        end += 1

    if not items:
        return None

    return MarkdownChecklistNode(start_line=index, end_line=end - 1, items=items)


def _match_list_item(line: str, spaces_per_indent: int) -> Tuple[ListKind, str, int] | None:
    """
    Match a single list item line.

    Returns:
        A (kind, text, indent_level) tuple, or None if the line is not an item
    """
    if _CHECKLIST_ITEM_PATTERN.match(line):
        return None

    for kind, pattern in ((ListKind.UNORDERED, _UNORDERED_ITEM_PATTERN), (ListKind.ORDERED, _ORDERED_ITEM_PATTERN)):
        match = pattern.match(line)
        if match and match.group(2):
            return kind, match.group(2), indent_level(match.group(1), spaces_per_indent)

    return None


def parse_list(lines: Sequence[str], index: int, spaces_per_indent: int = 2) -> MarkdownListNode | None:
    """
    Parse a run of list items of one kind and nest them by indent level.

    A single blank line between two items of the same kind is absorbed; any
    other blank line ends the list without being consumed.
    """
    first = _match_list_item(lines[index], spaces_per_indent)
    if first is None:
        return None

    list_kind, text, level = first
    flat_items = [(text, level)]
    end = index + 1

    while end < len(lines):
        line = lines[end]
        if _is_blank(line):
            if end + 1 >= len(lines):
                break

            following = _match_list_item(lines[end + 1], spaces_per_indent)
            if following is None or following[0] != list_kind:
                break

            flat_items.append((following[1], following[2]))
            end += 2
            continue

        item = _match_list_item(line, spaces_per_indent)
        if item is None or item[0] != list_kind:
            break

        flat_items.append((item[1], item[2]))
        end += 1

    return MarkdownListNode(
        start_line=index,
        end_line=end - 1,
        list_kind=list_kind,
        items=build_list_tree(flat_items)
    )


def parse_blockquote(lines: Sequence[str], index: int) -> MarkdownBlockquoteNode | None:
    """Parse consecutive `> ` lines into a single text unit."""
    quoted: List[str] = []
    end = index
    while end < len(lines) and lines[end].startswith(_BLOCKQUOTE_PREFIX):
        quoted.append(lines[end][len(_BLOCKQUOTE_PREFIX):])
        end += 1

    if not quoted:
        return None

    return MarkdownBlockquoteNode(start_line=index, end_line=end - 1, text='\n'.join(quoted))


def parse_horizontal_rule(lines: Sequence[str], index: int) -> MarkdownHorizontalRuleNode | None:
    """Parse a line made only of three or more '-', '*' or '_'."""
    if not _HORIZONTAL_RULE_PATTERN.match(lines[index]):
        return None

    return MarkdownHorizontalRuleNode(start_line=index, end_line=index)


def create_block_parsers(settings: MemomarkSettings | None = None) -> Tuple[BlockParser, ...]:
    """
    Create the block parsers in the order the document scanner must try them.

    Code blocks come first so fenced content is never reinterpreted, tables
    come before headings because they look ahead one line, and checklists come
    before lists so bracketed items are not read as plain list text.

    Args:
        settings: Engine settings; defaults are used when None

    Returns:
        The ordered parsers
    """
    settings = settings or MemomarkSettings()
    return (
        parse_code_block,
        parse_table,
        parse_heading,
        parse_checklist,
        partial(parse_list, spaces_per_indent=settings.spaces_per_indent),
        parse_blockquote,
        parse_horizontal_rule,
    )
