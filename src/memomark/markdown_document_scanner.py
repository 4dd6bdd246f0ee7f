"""
Scanner that turns a memo body into an ordered sequence of block nodes.
"""

import logging
from typing import List, Sequence

from memomark.markdown_block_node import MarkdownBlockNode, MarkdownDocument, MarkdownParagraphNode
from memomark.markdown_block_parsers import BlockParser, create_block_parsers
from memomark.markdown_settings import MemomarkSettings


class MarkdownDocumentScanner:
    """
    Drives the block parsers over every line of a document.

    Lines that no parser claims are collected into a paragraph buffer, which is
    flushed whenever a parser succeeds and at the end of the input.
    """

    def __init__(self, settings: MemomarkSettings | None = None) -> None:
        """
        Initialize the scanner.

        Args:
            settings: Engine settings; defaults are used when None
        """
        self._parsers: Sequence[BlockParser] = create_block_parsers(settings)
        self._logger = logging.getLogger("MarkdownDocumentScanner")

    def scan(self, lines: Sequence[str]) -> List[MarkdownBlockNode]:
        """
        Scan source lines into block nodes.

        A buffer holding only blank lines produces no node; those lines are
        attributed to the next block (or to the last block at the end of the
        input) so block spans stay contiguous.

        Args:
            lines: The source lines

        Returns:
            Block nodes in document order
        """
        blocks: List[MarkdownBlockNode] = []
        paragraph: List[str] = []
        paragraph_start = 0
        i = 0

        while i < len(lines):
            node = None
            for parser in self._parsers:
                node = parser(lines, i)
                if node is not None:
                    break

            if node is None:
                if not paragraph:
                    paragraph_start = i

                line = lines[i]
                paragraph.append(line if line.strip() else '')
                i += 1
                continue

            if paragraph:
                if not self._flush_paragraph(blocks, paragraph, paragraph_start):
                    node.start_line = paragraph_start

                paragraph = []

            blocks.append(node)
            i = node.end_line + 1

        if paragraph and not self._flush_paragraph(blocks, paragraph, paragraph_start) and blocks:
            blocks[-1].end_line = len(lines) - 1

        self._logger.debug("scanned %d lines into %d blocks", len(lines), len(blocks))
        return blocks

    def _flush_paragraph(self, blocks: List[MarkdownBlockNode], paragraph: List[str], start: int) -> bool:
        """
        Emit the paragraph buffer as a node if it holds any text.

        Returns:
            True if a paragraph node was emitted
        """
        text = '\n'.join(paragraph)
        if not text.strip():
            return False

        blocks.append(MarkdownParagraphNode(start_line=start, end_line=start + len(paragraph) - 1, text=text))
        return True

    def parse(self, text: str) -> MarkdownDocument:
        """
        Parse a memo body.

        Args:
            text: The raw text; lines are split on '\\n' only

        Returns:
            The parsed document
        """
        lines = text.split('\n')
        return MarkdownDocument(blocks=self.scan(lines), line_count=len(lines))
