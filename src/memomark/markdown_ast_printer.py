"""
Visitor class to print render IR structures for debugging
"""
import sys
from typing import Any, List, Sequence, TextIO, Tuple

from memomark.markdown_block_node import MarkdownNodeVisitor
from memomark.markdown_inline_match import InlineKind, InlineMatch
from memomark.markdown_inline_merger import InlineSegment
from memomark.markdown_render_ir import (
    RenderBlock, RenderChecklist, RenderCodeBlock, RenderDocument, RenderHeading, RenderList, RenderListItem,
    RenderTable
)


class MarkdownASTPrinter(MarkdownNodeVisitor):
    """Visitor that prints the render IR structure for debugging."""
    def __init__(self, stream: TextIO | None = None) -> None:
        """
        Initialize the printer with zero indentation.

        Args:
            stream: Where to write; defaults to stdout
        """
        super().__init__()
        self.indent_level = 0
        self._stream = stream or sys.stdout

    def _indent(self) -> str:
        """
        Get the current indentation string.

        Returns:
            A string of spaces for the current indentation level
        """
        return "  " * self.indent_level

    def _write(self, text: str) -> None:
        self._stream.write(f"{self._indent()}{text}\n")

    def _line_range(self, node: RenderBlock) -> str:
        if node.start_line == node.end_line:
            return f" (line {node.start_line})"

        return f" (lines {node.start_line}-{node.end_line})"

    def _write_segments(self, segments: Sequence[InlineSegment]) -> None:
        self.indent_level += 1
        for segment in segments:
            if isinstance(segment, InlineMatch):
                self._write_match(segment)

            else:
                self._write(f"Text: {segment!r}")

        self.indent_level -= 1

    def _write_match(self, match: InlineMatch) -> None:
        span = f"[{match.start_index}-{match.end_index}]"
        if match.kind == InlineKind.IMAGE:
            self._write(f"Image {span}: url='{match.url}', alt='{match.text}'")
            return

        if match.kind == InlineKind.LINK:
            self._write(f"Link {span}: url='{match.url}', text='{match.text}'")
            return

        self._write(f"{match.kind.name.capitalize()} {span}: '{match.text}'")

    def generic_visit(self, node: Any) -> List[Any]:
        """
        Default visit method that prints the node type and its segments.

        Args:
            node: The node to visit

        Returns:
            The results of visiting the children
        """
        line_range = self._line_range(node) if isinstance(node, RenderBlock) else ""
        self._write(f"{node.__class__.__name__.removeprefix('Render')}{line_range}")

        segments = getattr(node, 'segments', None)
        if segments is not None:
            self._write_segments(segments)

        self.indent_level += 1
        results = super().generic_visit(node)
        self.indent_level -= 1
        return results

    def visit_RenderDocument(self, node: RenderDocument) -> List[Any]:  # pylint: disable=invalid-name
        """
        Visit the document node.

        Args:
            node: The document to visit

        Returns:
            The results of visiting the blocks
        """
        self._write(f"Document ({node.line_count} lines)")
        self.indent_level += 1
        results = super().generic_visit(node)
        self.indent_level -= 1
        return results

    def visit_RenderHeading(self, node: RenderHeading) -> None:  # pylint: disable=invalid-name
        """
        Visit a heading node and print its level.

        Args:
            node: The heading node to visit
        """
        self._write(f"Heading (level {node.level}){self._line_range(node)}")
        self._write_segments(node.segments)

    def visit_RenderCodeBlock(self, node: RenderCodeBlock) -> str:  # pylint: disable=invalid-name
        """
        Visit a code block node and print its language and content.

        Args:
            node: The code block node to visit

        Returns:
            The code block content
        """
        self._write(f"CodeBlock{self._line_range(node)}: language='{node.language or ''}'")
        self.indent_level += 1
        self._write(f"Content: '{node.content[:30]}...' ({len(node.content)} chars)")
        self.indent_level -= 1
        return node.content

    def visit_RenderTable(self, node: RenderTable) -> None:  # pylint: disable=invalid-name
        """
        Visit a table node and print its header and rows.

        Args:
            node: The table node to visit
        """
        self._write(f"Table{self._line_range(node)}")
        self.indent_level += 1
        self._write("TableHeader")
        for cell in node.headers:
            self._write_segments(cell)

        for row in node.rows:
            self._write("TableRow")
            for cell in row:
                self._write_segments(cell)

        self.indent_level -= 1

    def visit_RenderList(self, node: RenderList) -> None:  # pylint: disable=invalid-name
        """
        Visit a list node and print its kind and items.

        Args:
            node: The list node to visit
        """
        self._write(f"List ({node.list_kind.value}){self._line_range(node)}")
        self.indent_level += 1
        self._write_list_items(node.items)
        self.indent_level -= 1

    def visit_RenderListItem(self, node: RenderListItem) -> None:  # pylint: disable=invalid-name
        self._write_list_items([node])

    def _write_list_items(self, items: Sequence[RenderListItem]) -> None:
        # Explicit stack of (item, depth) so deep lists never recurse
        base_level = self.indent_level
        stack: List[Tuple[RenderListItem, int]] = [(item, 0) for item in reversed(items)]
        while stack:
            item, depth = stack.pop()
            self.indent_level = base_level + depth
            self._write(f"ListItem (indent {item.indent_level})")
            self._write_segments(item.segments)
            stack.extend((child, depth + 1) for child in reversed(item.children))

        self.indent_level = base_level

    def visit_RenderChecklist(self, node: RenderChecklist) -> None:  # pylint: disable=invalid-name
        self._write(f"Checklist{self._line_range(node)}")
        self.indent_level += 1
        for item in node.items:
            self._write(f"[{'x' if item.checked else ' '}]")
            self._write_segments(item.segments)

        self.indent_level -= 1
