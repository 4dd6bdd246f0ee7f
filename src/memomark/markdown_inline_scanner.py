"""
Scanners for inline markdown spans.

Each scanner looks at a whole text unit on its own and returns matches of its
own category that never overlap each other.  Combining the categories is the
job of the inline merger.
"""

import re
from typing import List, Sequence

from memomark.markdown_inline_match import InlineKind, InlineMatch
from memomark.markdown_inline_merger import merge_inline_matches, reassemble_inline, InlineSegment
from memomark.markdown_settings import MemomarkSettings


# Characters that terminate a bare URL
_URL_BODY = r'[^\s<>"{}|\\^`\[\]]+'

# Trailing punctuation that belongs to the surrounding sentence, not the URL
_URL_TRAILING_PUNCTUATION = '.,;:!?'

# Alternation used when a configured list is empty
_NEVER_MATCHES = '(?!)'


class MarkdownInlineScanner:
    """
    Scanner for inline spans (images, links and text styles) in a text unit.

    The scanner holds no state between calls beyond its compiled patterns, so
    one instance can be shared by every parse.
    """

    def __init__(self, settings: MemomarkSettings | None = None) -> None:
        """
        Initialize the scanner with patterns built from the given settings.

        Args:
            settings: Engine settings; defaults are used when None
        """
        settings = settings or MemomarkSettings()

        schemes = '|'.join(re.escape(scheme) for scheme in settings.image_schemes if scheme) or _NEVER_MATCHES
        self._image_pattern = re.compile(r'!\[([^\]]*)\]\(((?:' + schemes + r')://[^)]+)\)')

        self._markdown_link_pattern = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')

        prefixes = '|'.join(re.escape(prefix) for prefix in settings.autolink_prefixes if prefix) or _NEVER_MATCHES
        self._autolink_pattern = re.compile(r'(?<![\w.])(?P<prefix>' + prefixes + r')' + _URL_BODY)

        self._bold_pattern = re.compile(r'\*\*(.+?)\*\*', re.DOTALL)
        # Single stars only, so the halves of a `**` pair are never consumed as italics
        self._italic_pattern = re.compile(r'(?<!\*)\*(?!\*)([^*]+)\*(?!\*)')
        self._strikethrough_pattern = re.compile(r'~~([^~]+)~~')
        self._code_pattern = re.compile(r'`([^`]+)`')

    def scan_images(self, text: str) -> List[InlineMatch]:
        """
        Find image references that use one of the allowed schemes.

        Args:
            text: The text unit to scan

        Returns:
            Image matches in start order
        """
        return [
            InlineMatch(
                kind=InlineKind.IMAGE,
                text=match.group(1),
                url=match.group(2),
                start_index=match.start(),
                end_index=match.end() - 1
            )
            for match in self._image_pattern.finditer(text)
        ]

    def scan_links(self, text: str, image_matches: Sequence[InlineMatch] = ()) -> List[InlineMatch]:
        """
        Find markdown links and bare autolinks.

        A bare autolink is dropped when it starts inside a markdown link or
        inside one of the given image spans.

        Args:
            text: The text unit to scan
            image_matches: Image spans already found in the same text unit

        Returns:
            Link matches in start order
        """
        matches: List[InlineMatch] = []
        for match in self._markdown_link_pattern.finditer(text):
            matches.append(InlineMatch(
                kind=InlineKind.LINK,
                text=match.group(1),
                url=match.group(2),
                start_index=match.start(),
                end_index=match.end() - 1
            ))

        covered = list(matches) + list(image_matches)
        autolinks: List[InlineMatch] = []
        for match in self._autolink_pattern.finditer(text):
            start = match.start()
            if any(span.start_index <= start <= span.end_index for span in covered):
                continue

            url = match.group(0).rstrip(_URL_TRAILING_PUNCTUATION)
            prefix = match.group('prefix')
            if len(url) <= len(prefix):
                continue

            href = url
            if '://' not in prefix:
                href = 'http://' + url

            autolinks.append(InlineMatch(
                kind=InlineKind.LINK,
                text=url,
                url=href,
                start_index=start,
                end_index=start + len(url) - 1
            ))

        matches.extend(autolinks)
        matches.sort(key=lambda m: m.start_index)
        return matches

    def _style_matches(self, pattern: re.Pattern, kind: InlineKind, text: str) -> List[InlineMatch]:
        return [
            InlineMatch(kind=kind, text=match.group(1), start_index=match.start(), end_index=match.end() - 1)
            for match in pattern.finditer(text)
        ]

    def scan_styles(self, text: str) -> List[InlineMatch]:
        """
        Find bold, italic, strikethrough and inline code spans.

        Inline code is accepted first and shields its content; bold is next,
        and an italic span lying inside a bold span is not reported.  Any other
        style span that overlaps an accepted one is dropped.

        Args:
            text: The text unit to scan

        Returns:
            Style matches in start order
        """
        accepted: List[InlineMatch] = []
        candidates = [
            self._style_matches(self._code_pattern, InlineKind.CODE, text),
            self._style_matches(self._bold_pattern, InlineKind.BOLD, text),
            self._style_matches(self._strikethrough_pattern, InlineKind.STRIKETHROUGH, text),
            self._style_matches(self._italic_pattern, InlineKind.ITALIC, text),
        ]

        for group in candidates:
            for candidate in group:
                if any(candidate.overlaps(existing) for existing in accepted):
                    continue

                accepted.append(candidate)

        accepted.sort(key=lambda m: m.start_index)
        return accepted

    def parse_inline(self, text: str) -> List[InlineMatch]:
        """
        Find all inline spans in a text unit.

        Args:
            text: The text unit to scan

        Returns:
            Non-overlapping matches of every category, in start order
        """
        images = self.scan_images(text)
        links = self.scan_links(text, images)
        styles = self.scan_styles(text)
        return merge_inline_matches(images, links, styles)

    def segments(self, text: str) -> List[InlineSegment]:
        """
        Split a text unit into literal text and inline matches.

        Args:
            text: The text unit to split

        Returns:
            Literal strings interleaved with matches, in source order
        """
        return reassemble_inline(text, self.parse_inline(text))
