"""
Tests for the document scanner and the top-level parse operation
"""
import pytest

from memomark import (
    ListKind, MarkdownBlockquoteNode, MarkdownChecklistNode, MarkdownCodeBlockNode, MarkdownHeadingNode,
    MarkdownHorizontalRuleNode, MarkdownListNode, MarkdownParagraphNode, MarkdownTableNode, parse
)
from memomark.markdown_document_scanner import MarkdownDocumentScanner


def assert_spans_cover(document):
    """Check that block spans are ordered, contiguous and cover every line."""
    expected_start = 0
    for start, end in document.spans():
        assert start == expected_start
        assert end >= start
        expected_start = end + 1

    assert expected_start == document.line_count


@pytest.fixture
def scanner():
    """Fixture providing a document scanner instance."""
    return MarkdownDocumentScanner()


def test_empty_document():
    """Test that an empty memo has no blocks."""
    doc = parse("")
    assert doc.blocks == []
    assert doc.line_count == 1


def test_blank_only_document():
    """Test that a memo of blank lines has no blocks."""
    assert parse("\n  \n\t\n").blocks == []


def test_heading():
    """Test a single heading."""
    doc = parse("### Hello")
    assert len(doc.blocks) == 1
    heading = doc.blocks[0]
    assert isinstance(heading, MarkdownHeadingNode)
    assert heading.level == 3
    assert heading.text == "Hello"


def test_bare_hash_heading():
    """Test that a lone hash is an empty level 1 heading."""
    heading = parse("#").blocks[0]
    assert isinstance(heading, MarkdownHeadingNode)
    assert heading.level == 1
    assert heading.text == ""


def test_single_plain_line():
    """Test that an unrecognized line is one paragraph."""
    doc = parse("Just some text")
    assert len(doc.blocks) == 1
    assert isinstance(doc.blocks[0], MarkdownParagraphNode)
    assert doc.blocks[0].text == "Just some text"


def test_paragraph_preserves_blank_lines():
    """Test that paragraph text keeps the blank lines between its lines."""
    doc = parse("first\n\nsecond")
    assert len(doc.blocks) == 1
    paragraph = doc.blocks[0]
    assert isinstance(paragraph, MarkdownParagraphNode)
    assert paragraph.text == "first\n\nsecond"
    assert (paragraph.start_line, paragraph.end_line) == (0, 2)


def test_paragraph_whitespace_lines_become_empty():
    """Test that whitespace-only lines are kept as empty lines."""
    paragraph = parse("a\n   \nb").blocks[0]
    assert paragraph.text == "a\n\nb"


def test_nested_list():
    """Test that indented list items nest under their parent."""
    doc = parse("- A\n  - B\n  - C\n- D")
    assert len(doc.blocks) == 1
    node = doc.blocks[0]
    assert isinstance(node, MarkdownListNode)
    assert node.list_kind == ListKind.UNORDERED
    assert [item.text for item in node.items] == ["A", "D"]
    assert [child.text for child in node.items[0].children] == ["B", "C"]
    assert node.items[1].children == []


def test_pipes_without_separator_are_paragraph():
    """Test that a pipe line without a separator row stays text."""
    doc = parse("| a | b |\n| 1 | 2 |")
    assert len(doc.blocks) == 1
    assert isinstance(doc.blocks[0], MarkdownParagraphNode)
    assert doc.blocks[0].text == "| a | b |\n| 1 | 2 |"


def test_table():
    """Test a table followed by text."""
    doc = parse("| a | b |\n|---|---|\n| 1 | 2 |\nafter")
    assert isinstance(doc.blocks[0], MarkdownTableNode)
    assert doc.blocks[0].rows == [["1", "2"]]
    assert isinstance(doc.blocks[1], MarkdownParagraphNode)
    assert doc.blocks[1].text == "after"


def test_checked_item_is_checklist():
    """Test that a checked item becomes a checklist, not a list item."""
    doc = parse("- [x] done")
    assert len(doc.blocks) == 1
    node = doc.blocks[0]
    assert isinstance(node, MarkdownChecklistNode)
    assert len(node.items) == 1
    assert node.items[0].text == "done"
    assert node.items[0].checked is True


def test_list_then_checklist():
    """Test that a checklist directly after a list starts its own block."""
    doc = parse("- a\n- [ ] b")
    assert isinstance(doc.blocks[0], MarkdownListNode)
    assert isinstance(doc.blocks[1], MarkdownChecklistNode)
    assert doc.blocks[1].items[0].checked is False


def test_unclosed_fence_is_paragraph():
    """Test that an unterminated fence falls back to paragraph text."""
    doc = parse("```python\nprint(1)")
    assert len(doc.blocks) == 1
    paragraph = doc.blocks[0]
    assert isinstance(paragraph, MarkdownParagraphNode)
    assert paragraph.text.split("\n")[0] == "```python"
    assert paragraph.text == "```python\nprint(1)"


def test_code_block_content_not_reinterpreted():
    """Test that lines inside a fence are never parsed as blocks."""
    doc = parse("```\n# not heading\n- not list\n```")
    assert len(doc.blocks) == 1
    node = doc.blocks[0]
    assert isinstance(node, MarkdownCodeBlockNode)
    assert node.content == "# not heading\n- not list"


def test_mixed_document():
    """Test a memo that uses every block kind."""
    text = "\n".join([
        "# Title",
        "Some text",
        "- a",
        "- b",
        "> quote",
        "---",
        "- [ ] todo",
        "```",
        "code",
        "```",
        "| h |",
        "| - |",
        "1. one",
    ])
    doc = parse(text)
    assert [block.kind for block in doc.blocks] == [
        "heading", "paragraph", "list", "blockquote", "horizontalrule", "checklist", "codeblock", "table", "list"
    ]
    assert isinstance(doc.blocks[3], MarkdownBlockquoteNode)
    assert isinstance(doc.blocks[4], MarkdownHorizontalRuleNode)
    assert doc.blocks[8].list_kind == ListKind.ORDERED
    assert_spans_cover(doc)


def test_blank_lines_between_blocks_are_attributed():
    """Test that blank separator lines join the span of the following block."""
    doc = parse("# A\n\n# B")
    assert doc.spans() == [(0, 0), (1, 2)]
    assert_spans_cover(doc)


def test_trailing_blank_lines_join_last_block():
    """Test that trailing blank lines extend the last block."""
    doc = parse("# A\n\n")
    assert doc.spans() == [(0, 2)]


def test_paragraph_flushed_before_block():
    """Test that text before a block becomes its own paragraph."""
    doc = parse("intro\n\n# Heading")
    assert isinstance(doc.blocks[0], MarkdownParagraphNode)
    assert doc.blocks[0].text == "intro\n"
    assert doc.spans() == [(0, 1), (2, 2)]


def test_carriage_return_is_not_a_separator():
    """Test that only newlines split lines."""
    doc = parse("one\rtwo")
    assert doc.line_count == 1
    assert doc.blocks[0].text == "one\rtwo"


@pytest.mark.parametrize("text", [
    "",
    "\n\n",
    "plain",
    "# h\ntext\n\n- a\n\n- b\n\n> q\n",
    "```\nunclosed\n# heading",
    "| a |\n|---|\n| b |\n\n\n---\n***\n___",
    "- a\n\t- b\n   - c\n1. x\n\n\n- [x] y\ntext",
    "#\n#\n\n\n#",
    "\r\n\r\n- a\r\n",
])
def test_spans_cover_every_line(text):
    """Test that block spans cover the document whenever it has blocks."""
    doc = parse(text)
    if doc.blocks:
        assert_spans_cover(doc)

    else:
        assert all(not line.strip() for line in text.split("\n"))


def test_parse_is_idempotent():
    """Test that parsing the same text twice gives equal documents."""
    text = "# T\n- a\n  - b\n| x |\n|---|\n> q\n**b**"
    assert parse(text) == parse(text)


def test_scan_lines(scanner):
    """Test scanning pre-split lines directly."""
    blocks = scanner.scan(["# a", "b"])
    assert [block.kind for block in blocks] == ["heading", "paragraph"]
    assert (blocks[1].start_line, blocks[1].end_line) == (1, 1)
