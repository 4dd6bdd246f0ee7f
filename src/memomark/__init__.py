"""A markdown engine for memos."""

from memomark.image_resolver import ImageCache, ImageResolver, ImageState, ImageStatus
from memomark.image_store import FileImageStore, ImageStorage
from memomark.markdown_ast_printer import MarkdownASTPrinter
from memomark.markdown_block_node import (
    ListKind,
    MarkdownBlockNode,
    MarkdownBlockquoteNode,
    MarkdownChecklistItem,
    MarkdownChecklistNode,
    MarkdownCodeBlockNode,
    MarkdownDocument,
    MarkdownHeadingNode,
    MarkdownHorizontalRuleNode,
    MarkdownListItem,
    MarkdownListNode,
    MarkdownNodeVisitor,
    MarkdownParagraphNode,
    MarkdownTableNode
)
from memomark.markdown_engine import MarkdownEngine, emit, inline_segments, parse, parse_inline
from memomark.markdown_error import ImageResolutionError, MemomarkError, MemomarkSettingsError
from memomark.markdown_inline_match import InlineKind, InlineMatch
from memomark.markdown_render_ir import (
    RenderBlock,
    RenderBlockquote,
    RenderChecklist,
    RenderChecklistItem,
    RenderCodeBlock,
    RenderDocument,
    RenderHeading,
    RenderHorizontalRule,
    RenderList,
    RenderListItem,
    RenderParagraph,
    RenderTable
)
from memomark.markdown_settings import MemomarkSettings
from memomark.memo_title import extract_title


__all__ = [
    # Engine
    "MarkdownEngine",
    "emit",
    "inline_segments",
    "parse",
    "parse_inline",
    "extract_title",
    "MemomarkSettings",
    # Exceptions
    "MemomarkError",
    "ImageResolutionError",
    "MemomarkSettingsError",
    # Block nodes
    "ListKind",
    "MarkdownBlockNode",
    "MarkdownBlockquoteNode",
    "MarkdownChecklistItem",
    "MarkdownChecklistNode",
    "MarkdownCodeBlockNode",
    "MarkdownDocument",
    "MarkdownHeadingNode",
    "MarkdownHorizontalRuleNode",
    "MarkdownListItem",
    "MarkdownListNode",
    "MarkdownNodeVisitor",
    "MarkdownParagraphNode",
    "MarkdownTableNode",
    # Inline matches
    "InlineKind",
    "InlineMatch",
    # Render IR
    "RenderBlock",
    "RenderBlockquote",
    "RenderChecklist",
    "RenderChecklistItem",
    "RenderCodeBlock",
    "RenderDocument",
    "RenderHeading",
    "RenderHorizontalRule",
    "RenderList",
    "RenderListItem",
    "RenderParagraph",
    "RenderTable",
    "MarkdownASTPrinter",
    # Images
    "FileImageStore",
    "ImageCache",
    "ImageResolver",
    "ImageState",
    "ImageStatus",
    "ImageStorage",
]
