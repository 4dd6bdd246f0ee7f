"""Inline matches recognized within a single text unit."""

from dataclasses import dataclass
from enum import Enum


class InlineKind(Enum):
    """Category of an inline match."""
    IMAGE = "image"
    LINK = "link"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"


@dataclass(frozen=True)
class InlineMatch:
    """
    A recognized span of a text unit.

    Indices are inclusive offsets into the original text unit.  For images,
    `text` is the alt text and `url` is the full `scheme://target` reference.
    """
    kind: InlineKind
    text: str
    start_index: int
    end_index: int
    url: str | None = None

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1

    @property
    def scheme(self) -> str | None:
        """The scheme part of an image or link URL, if it has one."""
        if self.url is None or '://' not in self.url:
            return None

        return self.url.split('://', 1)[0]

    @property
    def target(self) -> str | None:
        """The part of the URL after `scheme://`, e.g. an image filename."""
        if self.url is None or '://' not in self.url:
            return None

        return self.url.split('://', 1)[1]

    def overlaps(self, other: "InlineMatch") -> bool:
        return self.start_index <= other.end_index and other.start_index <= self.end_index
