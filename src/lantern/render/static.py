"""Static renderer: styled canvas rows written straight to a text stream"""

import logging
from typing import TextIO

import typer

from lantern.core.layout.canvas import Canvas, Row, Segment, Style
from lantern.core.layout.engine import LayoutEngine
from lantern.core.models import Deck
from lantern.core.theme.registry import Theme
from lantern.render.base import Renderer, hex_to_rgb


logger = logging.getLogger(__name__)

SLIDE_SEPARATOR = '═'


def style_segment(segment: Segment) -> str:
    """Wrap one segment's text in ANSI escapes via typer.style."""
    style = segment.style
    return typer.style(
        segment.text,
        fg=hex_to_rgb(style.fg) if style.fg else None,
        bg=hex_to_rgb(style.bg) if style.bg else None,
        bold=style.bold or None,
        italic=style.italic or None,
        strikethrough=style.strikethrough or None,
        underline=style.underline or None,
        dim=style.dim or None,
    )


class StaticRenderer:
    """Write rows to a stream, one line per row; color=False drops all escapes."""

    def __init__(self, stream: TextIO, color: bool = True):
        self.stream = stream
        self.color = color

    def format_row(self, row: Row) -> str:
        if not self.color:
            return row.text.rstrip()
        return ''.join(style_segment(s) for s in row.segments)

    def draw(self, rows: Canvas) -> None:
        for row in rows:
            self.stream.write(self.format_row(row) + '\n')


def print_deck(deck: Deck, theme: Theme, width: int, renderer: Renderer,
               engine: LayoutEngine | None = None) -> None:
    """Lay out every slide at width and draw them in order, split by a full-width rule."""
    engine = engine or LayoutEngine()
    rule = Row((Segment(SLIDE_SEPARATOR * width, Style(fg=theme.role("dimmed"))),))
    for slide in deck.slides:
        if slide.index:
            renderer.draw([Row(), rule, Row()])
        renderer.draw(engine.layout(slide, theme, width))
    logger.debug("printed %d slide(s) at width %d", len(deck.slides), width)
