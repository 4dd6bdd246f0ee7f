"""
Tests for merging inline matches across categories and reassembling text
"""
from memomark.markdown_inline_match import InlineKind, InlineMatch
from memomark.markdown_inline_merger import merge_inline_matches, reassemble_inline


def _match(kind, start, end, text="x", url=None):
    return InlineMatch(kind=kind, text=text, start_index=start, end_index=end, url=url)


def test_merge_empty():
    """Test that no input gives no output."""
    assert merge_inline_matches([], [], []) == []


def test_merge_sorts_by_start():
    """Test that disjoint matches of all categories are kept in start order."""
    bold = _match(InlineKind.BOLD, 20, 25)
    link = _match(InlineKind.LINK, 10, 15, url="http://a")
    image = _match(InlineKind.IMAGE, 0, 5, url="image://a.png")
    assert merge_inline_matches([image], [link], [bold]) == [image, link, bold]


def test_merge_earlier_match_wins():
    """Test that a match starting later is dropped when it overlaps."""
    link = _match(InlineKind.LINK, 0, 9, url="http://a")
    bold = _match(InlineKind.BOLD, 5, 12)
    assert merge_inline_matches([], [link], [bold]) == [link]


def test_merge_same_start_prefers_longer():
    """Test that the longer of two matches at the same start wins."""
    link = _match(InlineKind.LINK, 0, 9, url="http://a")
    bold = _match(InlineKind.BOLD, 0, 4)
    assert merge_inline_matches([], [link], [bold]) == [link]

    long_bold = _match(InlineKind.BOLD, 0, 12)
    assert merge_inline_matches([], [link], [long_bold]) == [long_bold]


def test_merge_full_tie_prefers_image_then_link():
    """Test category order when start and length are equal."""
    image = _match(InlineKind.IMAGE, 0, 5, url="image://a.png")
    link = _match(InlineKind.LINK, 0, 5, url="http://a")
    bold = _match(InlineKind.BOLD, 0, 5)
    assert merge_inline_matches([image], [link], [bold]) == [image]
    assert merge_inline_matches([], [link], [bold]) == [link]


def test_merge_code_beats_overlapping_link():
    """Test that inline code removes links and images it overlaps."""
    code = _match(InlineKind.CODE, 3, 6)
    link = _match(InlineKind.LINK, 0, 9, url="http://a")
    image = _match(InlineKind.IMAGE, 5, 8, url="image://a.png")
    assert merge_inline_matches([image], [link], [code]) == [code]


def test_reassemble_interleaves_literals():
    """Test that literal text is sliced around the matches."""
    text = "ab **c** d"
    bold = _match(InlineKind.BOLD, 3, 7, text="c")
    assert reassemble_inline(text, [bold]) == ["ab ", bold, " d"]


def test_reassemble_omits_empty_literals():
    """Test that adjacent and edge matches produce no empty strings."""
    text = "**a****b**"
    first = _match(InlineKind.BOLD, 0, 4, text="a")
    second = _match(InlineKind.BOLD, 5, 9, text="b")
    assert reassemble_inline(text, [first, second]) == [first, second]


def test_reassemble_without_matches():
    """Test plain and empty text."""
    assert reassemble_inline("plain", []) == ["plain"]
    assert reassemble_inline("", []) == []


def test_reassemble_preserves_text():
    """Test that literals plus the source of each match rebuild the text."""
    text = "x `y` z ~~w~~"
    code = _match(InlineKind.CODE, 2, 4, text="y")
    strike = _match(InlineKind.STRIKETHROUGH, 8, 12, text="w")
    rebuilt = "".join(
        segment if isinstance(segment, str) else text[segment.start_index:segment.end_index + 1]
        for segment in reassemble_inline(text, [code, strike])
    )
    assert rebuilt == text
