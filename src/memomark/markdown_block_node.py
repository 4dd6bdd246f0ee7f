"""
Block-level nodes produced by the markdown document scanner.

Each block node records the inclusive, zero-based range of source lines it was
built from.  Free-text payloads are kept as raw strings; inline structure is
recovered separately by the inline scanners.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, List, Tuple


class MarkdownNodeVisitor:
    """
    Base visitor class for markdown node traversal.

    Dispatches to a `visit_<ClassName>` method when one exists, falling back to
    `generic_visit`, which visits the node's children.
    """

    def visit(self, node: Any) -> Any:
        """
        Visit a node and dispatch to the appropriate visit method.

        Args:
            node: The node to visit

        Returns:
            The result of visiting the node
        """
        method_name = f'visit_{node.__class__.__name__}'
        visitor = getattr(self, method_name, self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Any) -> List[Any]:
        """
        Default visit method for nodes without specific handlers.

        Args:
            node: The node to visit

        Returns:
            A list of results from visiting each child
        """
        results = []
        for child in getattr(node, 'children', []):
            results.append(self.visit(child))

        return results


class ListKind(Enum):
    """Kind of list, fixed by the first item of a list run."""
    ORDERED = "ordered"
    UNORDERED = "unordered"


@dataclass
class MarkdownBlockNode:
    """Base class for all block nodes."""
    kind: ClassVar[str] = "block"

    start_line: int
    end_line: int


@dataclass
class MarkdownCodeBlockNode(MarkdownBlockNode):
    """A fenced code block; content is kept verbatim."""
    kind: ClassVar[str] = "codeblock"

    content: str = ""
    language: str | None = None


@dataclass
class MarkdownTableNode(MarkdownBlockNode):
    """A pipe table with a header row and zero or more body rows."""
    kind: ClassVar[str] = "table"

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)


@dataclass
class MarkdownHeadingNode(MarkdownBlockNode):
    """
    A heading.

    The level is the raw count of leading '#' characters; consumers that need a
    bounded level clamp it when rendering.
    """
    kind: ClassVar[str] = "heading"

    level: int = 1
    text: str = ""


@dataclass
class MarkdownListItem:
    """A list item and the items nested beneath it."""
    text: str
    indent_level: int
    children: List["MarkdownListItem"] = field(default_factory=list)


@dataclass
class MarkdownListNode(MarkdownBlockNode):
    """An ordered or unordered list, with items nested by indent level."""
    kind: ClassVar[str] = "list"

    list_kind: ListKind = ListKind.UNORDERED
    items: List[MarkdownListItem] = field(default_factory=list)

    @property
    def children(self) -> List[MarkdownListItem]:
        return self.items


@dataclass
class MarkdownBlockquoteNode(MarkdownBlockNode):
    """A run of quoted lines, joined into one text unit."""
    kind: ClassVar[str] = "blockquote"

    text: str = ""


@dataclass
class MarkdownHorizontalRuleNode(MarkdownBlockNode):
    """A horizontal rule."""
    kind: ClassVar[str] = "horizontalrule"


@dataclass
class MarkdownChecklistItem:
    """A single checklist entry."""
    text: str
    checked: bool


@dataclass
class MarkdownChecklistNode(MarkdownBlockNode):
    """A run of checklist items."""
    kind: ClassVar[str] = "checklist"

    items: List[MarkdownChecklistItem] = field(default_factory=list)


@dataclass
class MarkdownParagraphNode(MarkdownBlockNode):
    """Fallback text that no block parser recognized."""
    kind: ClassVar[str] = "paragraph"

    text: str = ""


@dataclass
class MarkdownDocument:
    """The ordered block sequence for one parse of a memo body."""
    blocks: List[MarkdownBlockNode] = field(default_factory=list)
    line_count: int = 0

    @property
    def children(self) -> List[MarkdownBlockNode]:
        return self.blocks

    def spans(self) -> List[Tuple[int, int]]:
        """
        Get the line span of every block.

        Returns:
            A list of (start_line, end_line) tuples in document order
        """
        return [(block.start_line, block.end_line) for block in self.blocks]
