"""
Tests for memo titles
"""
import pytest

from memomark import extract_title


@pytest.mark.parametrize("text,expected", [
    ("# Shopping list\n- milk", "Shopping list"),
    ("### Deep", "Deep"),
    ("Plain first line\nmore", "Plain first line"),
    ("  #  Padded  ", "Padded"),
    ("#tag line", "tag line"),
    ("", "Untitled"),
    ("   \n\n", "Untitled"),
    ("#\nbody", "Untitled"),
    ("\nSecond line", "Untitled"),
])
def test_extract_title(text, expected):
    """Test titles derived from the first line."""
    assert extract_title(text) == expected
