"""Terminal display width of text"""

import unicodedata
from functools import lru_cache


ZERO_WIDTH_CATEGORIES = {'Mn', 'Me', 'Cf'}


@lru_cache(maxsize=4096)
def char_width(ch: str) -> int:
    """Columns occupied by one character: 0 for combining/format, 2 for wide/fullwidth, else 1."""
    if unicodedata.combining(ch) or unicodedata.category(ch) in ZERO_WIDTH_CATEGORIES:
        return 0
    if unicodedata.east_asian_width(ch) in ('W', 'F'):
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def split_at_width(text: str, width: int) -> tuple[str, str]:
    """Split text so the head fits in `width` columns; the head always takes at least one character."""
    used = 0
    for i, ch in enumerate(text):
        w = char_width(ch)
        if used + w > width and i > 0:
            return text[:i], text[i:]
        used += w
    return text, ''
