"""
Entry points of the markdown engine.

`parse` builds the block structure of a memo body, `parse_inline` finds the
inline spans of a single text unit, and `emit` turns a parsed document into the
render IR.  All three are total: no input makes them raise.
"""

from typing import List

from memomark.markdown_block_node import MarkdownDocument
from memomark.markdown_document_scanner import MarkdownDocumentScanner
from memomark.markdown_inline_match import InlineMatch
from memomark.markdown_inline_merger import InlineSegment
from memomark.markdown_inline_scanner import MarkdownInlineScanner
from memomark.markdown_render_ir import MarkdownRenderIREmitter, RenderDocument
from memomark.markdown_settings import MemomarkSettings


class MarkdownEngine:
    """Parser and render IR emitter sharing one set of settings."""

    def __init__(self, settings: MemomarkSettings | None = None) -> None:
        """
        Initialize the engine.

        Args:
            settings: Engine settings; defaults are used when None
        """
        self._settings = settings or MemomarkSettings()
        self._document_scanner = MarkdownDocumentScanner(self._settings)
        self._inline_scanner = MarkdownInlineScanner(self._settings)
        self._emitter = MarkdownRenderIREmitter(self._inline_scanner, self._settings)

    @property
    def settings(self) -> MemomarkSettings:
        return self._settings

    def parse(self, text: str) -> MarkdownDocument:
        return self._document_scanner.parse(text)

    def parse_inline(self, text: str) -> List[InlineMatch]:
        return self._inline_scanner.parse_inline(text)

    def inline_segments(self, text: str) -> List[InlineSegment]:
        return self._inline_scanner.segments(text)

    def emit(self, document: MarkdownDocument) -> RenderDocument:
        return self._emitter.emit(document)

    def render_ir(self, text: str) -> RenderDocument:
        """Parse a memo body and emit its render IR in one step."""
        return self.emit(self.parse(text))


_default_engine = MarkdownEngine()


def parse(text: str) -> MarkdownDocument:
    """Parse a memo body into its block structure."""
    return _default_engine.parse(text)


def parse_inline(text: str) -> List[InlineMatch]:
    """Find the inline matches of one text unit, in start order."""
    return _default_engine.parse_inline(text)


def inline_segments(text: str) -> List[InlineSegment]:
    """Split one text unit into literal strings and inline matches."""
    return _default_engine.inline_segments(text)


def emit(document: MarkdownDocument) -> RenderDocument:
    """Emit the render IR of a parsed document."""
    return _default_engine.emit(document)
