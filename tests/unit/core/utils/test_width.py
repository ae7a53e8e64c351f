"""Unit tests for core/utils/width.py"""

import pytest

from lantern.core.utils.width import char_width, display_width, split_at_width


@pytest.mark.parametrize("ch,width", [
    ("a", 1),
    ("─", 1),
    ("漢", 2),
    ("Ａ", 2),
    ("\u0301", 0),   # combining acute accent
    ("\u200b", 0),   # zero width space
])
def test_char_width(ch, width):
    assert char_width(ch) == width


def test_display_width_mixed():
    assert display_width("ab漢字") == 6
    assert display_width("é") == 1
    assert display_width("") == 0


def test_split_at_width():
    assert split_at_width("abcdef", 4) == ("abcd", "ef")
    assert split_at_width("abc", 10) == ("abc", "")
    assert split_at_width("漢字", 3) == ("漢", "字")
    # a wide char never gets dropped, even when it cannot fit
    assert split_at_width("漢", 1) == ("漢", "")
