"""Pygments-backed syntax highlighting with a per-(language, theme) cache"""

import logging
from typing import Optional

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, Keyword, Name, Number, Operator, String, _TokenType
from pygments.util import ClassNotFound

from lantern.core.layout.canvas import Segment, Style
from lantern.core.theme.registry import Theme


logger = logging.getLogger(__name__)

TAB_SIZE = 4

# Most specific token types first; the first ancestor match wins.
TOKEN_SLOTS: list[tuple[_TokenType, str]] = [
    (Comment,       "base03"),
    (Keyword,       "base0E"),
    (String,        "base0B"),
    (Number,        "base09"),
    (Name.Function, "base0D"),
    (Name.Class,    "base0A"),
    (Name.Builtin,  "base0C"),
    (Name.Decorator, "base0C"),
    (Operator,      "base05"),
]


class Highlighter:
    """A lexer bound to one theme's colours; lexer None means plain body-coloured text."""

    def __init__(self, lexer: Optional[Lexer], theme: Theme):
        self.lexer = lexer
        self.plain = Style(fg=theme.role("body"))
        self._styles: dict[_TokenType, Style] = {}
        self._slots = [(ttype, Style(fg=theme.slot(slot), italic=ttype is Comment))
                       for ttype, slot in TOKEN_SLOTS]

    def _style(self, ttype: _TokenType) -> Style:
        style = self._styles.get(ttype)
        if style is None:
            style = next((s for t, s in self._slots if ttype in t), self.plain)
            self._styles[ttype] = style
        return style

    def lines(self, source_lines: list[str]) -> list[list[Segment]]:
        """Highlight source lines; returns one segment list per input line."""
        expanded = [ln.expandtabs(TAB_SIZE) for ln in source_lines]
        if self.lexer is None:
            return [[Segment(ln, self.plain)] if ln else [] for ln in expanded]

        out: list[list[Segment]] = [[]]
        for ttype, value in self.lexer.get_tokens('\n'.join(expanded)):
            style = self._style(ttype)
            parts = value.split('\n')
            for n, part in enumerate(parts):
                if n:
                    out.append([])
                if part:
                    out[-1].append(Segment(part, style))
        # the lexer must not change the number of source lines
        out = out[:len(expanded)]
        out.extend([] for _ in range(len(expanded) - len(out)))
        return out


class HighlightCache:
    """Append-only map of (language, theme name, variant) to a ready Highlighter."""

    def __init__(self):
        self._entries: dict[tuple[Optional[str], str, str], Highlighter] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, language: Optional[str], theme: Theme) -> Highlighter:
        lang = language.strip().lower() if language and language.strip() else None
        key = (lang, theme.name, theme.variant)
        highlighter = self._entries.get(key)
        if highlighter is None:
            logger.debug("highlight cache miss for %s", key)
            highlighter = Highlighter(self._lexer(lang), theme)
            self._entries[key] = highlighter
        return highlighter

    def highlight(self, lines: list[str], language: Optional[str], theme: Theme) -> list[list[Segment]]:
        """Colour code lines; unknown languages come back unstyled in the body colour."""
        return self.get(language, theme).lines(lines)

    @staticmethod
    def _lexer(language: Optional[str]) -> Optional[Lexer]:
        if language is None:
            return None
        try:
            return get_lexer_by_name(language, stripnl=False, stripall=False, ensurenl=False)
        except ClassNotFound:
            logger.debug("no lexer for language '%s'; using plain text", language)
            return None
