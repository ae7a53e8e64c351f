"""Slide layout: blocks + theme + width -> canvas rows"""

import logging
from typing import Optional

from lantern.core.highlight import HighlightCache
from lantern.core.layout.canvas import BLANK, Canvas, Row, Segment, Style
from lantern.core.layout.tables import column_widths, rule_row, table_row
from lantern.core.layout.wrap import clip, merge, wrap
from lantern.core.models import (
    Admonition,
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    HorizontalRule,
    ListBlock,
    Paragraph,
    Slide,
    Table,
    TextSpan,
)
from lantern.core.theme.registry import Theme
from lantern.core.utils.width import display_width


logger = logging.getLogger(__name__)

LIST_INDENT = 2
BULLETS = ('•', '◦', '▪')
HEADING_GLYPHS = {1: '▉ ', 2: '▓ ', 3: '▒ ', 4: '░ ', 5: '▌ ', 6: '▌ '}
CODE_GUTTER = '▎ '
QUOTE_BAR = '│ '
RULE = '─'
MIN_WIDTH = 8


def span_style(span: TextSpan, theme: Theme, base: Style, recolor: bool = True) -> Style:
    """Style for one span on top of the block's base style.

    With recolor False (headings) only code and links change the foreground.
    """
    style = base
    if span.bold:
        style = style.merge(bold=True, fg=theme.role("strong") if recolor else style.fg)
    if span.italic:
        style = style.merge(italic=True, fg=theme.role("emphasis") if recolor else style.fg)
    if span.strikethrough:
        style = style.merge(strikethrough=True)
    if span.link is not None:
        style = style.merge(fg=theme.role("link"), underline=True)
    if span.code:
        style = style.merge(fg=theme.role("code"), bg=theme.role("inline_code_bg"))
    return style


def _fit(row: Row, width: int) -> Row:
    return Row(tuple(clip(list(row.segments), width))) if row.width > width else row


class LayoutEngine:
    """Deterministic layout shared by the static and interactive renderers."""

    def __init__(self, cache: Optional[HighlightCache] = None):
        self.cache = cache if cache is not None else HighlightCache()

    def layout(self, slide: Slide, theme: Theme, width: int) -> Canvas:
        """Lay out a slide's visible blocks at `width` columns."""
        return self.blocks(slide.blocks, theme, max(width, MIN_WIDTH))

    def notes(self, slide: Slide, theme: Theme, width: int) -> Canvas:
        return self.blocks(slide.notes, theme, max(width, MIN_WIDTH))

    def blocks(self, blocks: list[Block], theme: Theme, width: int) -> Canvas:
        """Lay out blocks with one blank row between consecutive blocks.

        Rows never exceed `width`; deep nesting that leaves no room is clipped.
        """
        rows: Canvas = []
        for i, block in enumerate(blocks):
            if i:
                rows.append(BLANK)
            rows.extend(self.block(block, theme, max(width, 1)))
        return [_fit(r, width) for r in rows]

    def block(self, block: Block, theme: Theme, width: int, depth: int = 0) -> Canvas:
        if isinstance(block, Heading):
            return self._heading(block, theme, width)
        if isinstance(block, Paragraph):
            return self._text(block.spans, theme, width)
        if isinstance(block, ListBlock):
            return self._list(block, theme, width, depth)
        if isinstance(block, CodeBlock):
            return self._code(block, theme, width)
        if isinstance(block, Table):
            return self._table(block, theme, width)
        if isinstance(block, Blockquote):
            return self._quote(block, theme, width)
        if isinstance(block, Admonition):
            return self._admonition(block, theme, width)
        if isinstance(block, HorizontalRule):
            return [Row((Segment(RULE * width, Style(fg=theme.role("dimmed"))),))]
        logger.debug("no layout for block %r", block)
        return []

    def _segments(self, spans: list[TextSpan], theme: Theme, base: Style, recolor: bool = True) -> list[Segment]:
        return [Segment(s.text, span_style(s, theme, base, recolor)) for s in spans]

    def _text(self, spans: list[TextSpan], theme: Theme, width: int) -> Canvas:
        segments = self._segments(spans, theme, Style(fg=theme.role("body")))
        return [Row(tuple(line)) for line in wrap(segments, width)]

    def _heading(self, block: Heading, theme: Theme, width: int) -> Canvas:
        base = Style(fg=theme.heading(block.level), bold=True)
        glyph = HEADING_GLYPHS.get(block.level, HEADING_GLYPHS[6])
        indent = display_width(glyph)
        lines = wrap(self._segments(block.spans, theme, base, recolor=False), width - indent) or [[]]
        rows = [Row(tuple(merge([Segment(glyph, base)] + lines[0])))]
        rows.extend(Row((Segment(' ' * indent),) + tuple(line)) for line in lines[1:])
        return rows

    def _list(self, block: ListBlock, theme: Theme, width: int, depth: int) -> Canvas:
        marker_style = Style(fg=theme.role("list_marker"))
        if block.ordered:
            markers = [f"{block.start + i}." for i in range(len(block.items))]
        else:
            markers = [BULLETS[depth % len(BULLETS)]] * len(block.items)
        marker_w = max((display_width(m) for m in markers), default=1)
        hang = marker_w + 1

        rows: Canvas = []
        for marker, item in zip(markers, block.items):
            label = marker.rjust(marker_w) if block.ordered else marker.ljust(marker_w)
            lines = self._text(item.spans, theme, width - hang) or [BLANK]
            rows.append(lines[0].prefixed(Segment(label + ' ', marker_style)))
            rows.extend(line.prefixed(Segment(' ' * hang)) for line in lines[1:])
            for nested in item.blocks:
                nested_depth = depth + 1 if isinstance(nested, ListBlock) else depth
                for line in self.block(nested, theme, width - LIST_INDENT, nested_depth):
                    rows.append(line.prefixed(Segment(' ' * LIST_INDENT)) if line.segments else BLANK)
        return rows

    def _code(self, block: CodeBlock, theme: Theme, width: int) -> Canvas:
        gutter = Segment(CODE_GUTTER, Style(fg=theme.role("dimmed"), dim=True))
        room = width - display_width(CODE_GUTTER)
        lines = self.cache.highlight(block.lines, block.language, theme)
        return [Row((gutter,) + tuple(clip(line, room))) for line in lines]

    def _table(self, block: Table, theme: Theme, width: int) -> Canvas:
        body = Style(fg=theme.role("body"))
        header_style = Style(fg=theme.role("accent"), bold=True)
        border = Style(fg=theme.role("dimmed"))
        header = [self._segments(cell, theme, header_style, recolor=False) for cell in block.header]
        rows = [[self._segments(cell, theme, body) for cell in row] for row in block.rows]

        natural = [sum(s.width for s in cell) for cell in header]
        for row in rows:
            for i, cell in enumerate(row[:len(natural)]):
                natural[i] = max(natural[i], sum(s.width for s in cell))
        separators = display_width(' │ ') * max(len(natural) - 1, 0)
        widths = column_widths(natural, width - separators)

        canvas = [table_row(header, widths, block.alignments, border), rule_row(widths, border)]
        canvas.extend(table_row(row, widths, block.alignments, border) for row in rows)
        return [Row(tuple(clip(list(r.segments), width))) for r in canvas]

    def _quote(self, block: Blockquote, theme: Theme, width: int) -> Canvas:
        bar = Segment(QUOTE_BAR, Style(fg=theme.role("dimmed")))
        inner = self.blocks(block.blocks, theme, width - display_width(QUOTE_BAR))
        return [line.prefixed(bar) for line in inner] or [Row((bar,))]

    def _admonition(self, block: Admonition, theme: Theme, width: int) -> Canvas:
        color = theme.admonition(block.kind)
        border = Style(fg=color)
        title_style = Style(fg=color, bold=True)
        title = block.title or block.kind.display_name

        head = [Segment('╭─ ', border), Segment(f"{block.kind.icon} ", title_style)]
        head += clip([Segment(title, title_style)], width - 8)
        used = sum(s.width for s in head)
        head.append(Segment(' ' + '─' * max(width - used - 2, 0) + '╮', border))
        rows = [Row(tuple(merge(head)))]

        inner_width = width - 4
        for line in self.blocks(block.blocks, theme, inner_width):
            fill = max(inner_width - line.width, 0)
            rows.append(Row((Segment('│ ', border),) + line.segments + (Segment(' ' * fill + ' │', border),)))
        rows.append(Row((Segment('╰' + '─' * (width - 2) + '╯', border),)))
        return rows


def layout(slide: Slide, theme: Theme, width: int, cache: Optional[HighlightCache] = None) -> Canvas:
    """Lay out one slide; identical arguments always produce identical rows."""
    return LayoutEngine(cache).layout(slide, theme, width)
