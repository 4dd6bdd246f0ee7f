"""
Renderer-agnostic intermediate form of a parsed memo.

The emitter walks the block nodes and replaces every free-text payload with its
sequence of literal strings and inline matches.  Concrete renderers consume the
result and map it onto their own presentation primitives.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Tuple

from memomark.markdown_block_node import (
    ListKind, MarkdownBlockquoteNode, MarkdownChecklistNode, MarkdownCodeBlockNode, MarkdownDocument,
    MarkdownHeadingNode, MarkdownHorizontalRuleNode, MarkdownListItem, MarkdownListNode, MarkdownNodeVisitor,
    MarkdownParagraphNode, MarkdownTableNode
)
from memomark.markdown_inline_merger import InlineSegment
from memomark.markdown_inline_scanner import MarkdownInlineScanner
from memomark.markdown_settings import MemomarkSettings


@dataclass
class RenderBlock:
    """Base class for render blocks."""
    kind: ClassVar[str] = "block"

    start_line: int
    end_line: int


@dataclass
class RenderCodeBlock(RenderBlock):
    """A code block; content is never inline-parsed."""
    kind: ClassVar[str] = "codeblock"

    content: str = ""
    language: str | None = None


@dataclass
class RenderTable(RenderBlock):
    """A table whose header and body cells are inline segment sequences."""
    kind: ClassVar[str] = "table"

    headers: List[List[InlineSegment]] = field(default_factory=list)
    rows: List[List[List[InlineSegment]]] = field(default_factory=list)


@dataclass
class RenderHeading(RenderBlock):
    """A heading with its level clamped to the renderable range."""
    kind: ClassVar[str] = "heading"

    level: int = 1
    segments: List[InlineSegment] = field(default_factory=list)


@dataclass
class RenderListItem:
    """A list item and its nested items."""
    indent_level: int
    segments: List[InlineSegment] = field(default_factory=list)
    children: List["RenderListItem"] = field(default_factory=list)


@dataclass
class RenderList(RenderBlock):
    """An ordered or unordered list."""
    kind: ClassVar[str] = "list"

    list_kind: ListKind = ListKind.UNORDERED
    items: List[RenderListItem] = field(default_factory=list)

    @property
    def children(self) -> List[RenderListItem]:
        return self.items


@dataclass
class RenderBlockquote(RenderBlock):
    """A quote; line breaks in the quoted text are kept in the literals."""
    kind: ClassVar[str] = "blockquote"

    segments: List[InlineSegment] = field(default_factory=list)


@dataclass
class RenderHorizontalRule(RenderBlock):
    """A horizontal rule."""
    kind: ClassVar[str] = "horizontalrule"


@dataclass
class RenderChecklistItem:
    """A checklist entry."""
    checked: bool
    segments: List[InlineSegment] = field(default_factory=list)


@dataclass
class RenderChecklist(RenderBlock):
    """A checklist."""
    kind: ClassVar[str] = "checklist"

    items: List[RenderChecklistItem] = field(default_factory=list)

    @property
    def children(self) -> List[RenderChecklistItem]:
        return self.items


@dataclass
class RenderParagraph(RenderBlock):
    """A paragraph."""
    kind: ClassVar[str] = "paragraph"

    segments: List[InlineSegment] = field(default_factory=list)


@dataclass
class RenderDocument:
    """The render blocks of one parsed memo."""
    blocks: List[RenderBlock] = field(default_factory=list)
    line_count: int = 0

    @property
    def children(self) -> List[RenderBlock]:
        return self.blocks


class MarkdownRenderIREmitter(MarkdownNodeVisitor):
    """Visitor that maps block nodes to render blocks."""

    def __init__(
        self,
        inline_scanner: MarkdownInlineScanner | None = None,
        settings: MemomarkSettings | None = None
    ) -> None:
        """
        Initialize the emitter.

        Args:
            inline_scanner: Scanner used for free-text payloads
            settings: Engine settings; defaults are used when None
        """
        settings = settings or MemomarkSettings()
        self._inline_scanner = inline_scanner or MarkdownInlineScanner(settings)
        self._max_heading_level = settings.max_heading_level

    def emit(self, document: MarkdownDocument) -> RenderDocument:
        """
        Build the render form of a document.

        Args:
            document: The parsed document

        Returns:
            The render document
        """
        return self.visit(document)

    def visit_MarkdownDocument(self, node: MarkdownDocument) -> RenderDocument:  # pylint: disable=invalid-name
        return RenderDocument(blocks=[self.visit(block) for block in node.blocks], line_count=node.line_count)

    def visit_MarkdownCodeBlockNode(self, node: MarkdownCodeBlockNode) -> RenderCodeBlock:  # pylint: disable=invalid-name
        return RenderCodeBlock(
            start_line=node.start_line,
            end_line=node.end_line,
            content=node.content,
            language=node.language
        )

    def visit_MarkdownTableNode(self, node: MarkdownTableNode) -> RenderTable:  # pylint: disable=invalid-name
        return RenderTable(
            start_line=node.start_line,
            end_line=node.end_line,
            headers=[self._inline_scanner.segments(header) for header in node.headers],
            rows=[[self._inline_scanner.segments(cell) for cell in row] for row in node.rows]
        )

    def visit_MarkdownHeadingNode(self, node: MarkdownHeadingNode) -> RenderHeading:  # pylint: disable=invalid-name
        return RenderHeading(
            start_line=node.start_line,
            end_line=node.end_line,
            level=max(1, min(self._max_heading_level, node.level)),
            segments=self._inline_scanner.segments(node.text)
        )

    def visit_MarkdownListNode(self, node: MarkdownListNode) -> RenderList:  # pylint: disable=invalid-name
        return RenderList(
            start_line=node.start_line,
            end_line=node.end_line,
            list_kind=node.list_kind,
            items=self._emit_list_items(node.items)
        )

    def visit_MarkdownListItem(self, node: MarkdownListItem) -> RenderListItem:  # pylint: disable=invalid-name
        return self._emit_list_items([node])[0]

    def _emit_list_items(self, items: List[MarkdownListItem]) -> List[RenderListItem]:
        """
        Build render items for a list item tree.

        Walks the tree with an explicit stack of (source item, destination
        list) pairs, so nesting depth is not limited by the recursion limit.

        Args:
            items: The root items

        Returns:
            The render items, in the same order and nesting
        """
        roots: List[RenderListItem] = []
        stack: List[Tuple[MarkdownListItem, List[RenderListItem]]] = [(item, roots) for item in reversed(items)]

        while stack:
            item, siblings = stack.pop()
            rendered = RenderListItem(indent_level=item.indent_level, segments=self._inline_scanner.segments(item.text))
            siblings.append(rendered)
            stack.extend((child, rendered.children) for child in reversed(item.children))

        return roots

    def visit_MarkdownBlockquoteNode(self, node: MarkdownBlockquoteNode) -> RenderBlockquote:  # pylint: disable=invalid-name
        return RenderBlockquote(
            start_line=node.start_line,
            end_line=node.end_line,
            segments=self._inline_scanner.segments(node.text)
        )

    def visit_MarkdownHorizontalRuleNode(  # pylint: disable=invalid-name
        self,
        node: MarkdownHorizontalRuleNode
    ) -> RenderHorizontalRule:
        return RenderHorizontalRule(start_line=node.start_line, end_line=node.end_line)

    def visit_MarkdownChecklistNode(self, node: MarkdownChecklistNode) -> RenderChecklist:  # pylint: disable=invalid-name
        return RenderChecklist(
            start_line=node.start_line,
            end_line=node.end_line,
            items=[
                RenderChecklistItem(checked=item.checked, segments=self._inline_scanner.segments(item.text))
                for item in node.items
            ]
        )

    def visit_MarkdownParagraphNode(self, node: MarkdownParagraphNode) -> RenderParagraph:  # pylint: disable=invalid-name
        return RenderParagraph(
            start_line=node.start_line,
            end_line=node.end_line,
            segments=self._inline_scanner.segments(node.text)
        )
