"""Full-screen frame composition for the interactive view"""

from typing import Optional

from lantern.core.layout.canvas import Canvas, Row, Segment, Style
from lantern.core.layout.engine import LayoutEngine
from lantern.core.layout.wrap import clip
from lantern.core.models import Deck
from lantern.core.navigation import Session
from lantern.core.theme.registry import Theme


NOTES_SHARE = 0.4
HELP_TEXT = "→ j l space next · ← k h p prev · g/G first/last · 1-9 ⏎ jump · N notes · ? help · q quit"


def format_elapsed(seconds: float) -> str:
    total = max(int(seconds), 0)
    return f"{total // 3600:02d}:{total % 3600 // 60:02d}:{total % 60:02d}"


def _fill(row: Row, width: int, base: Style) -> Row:
    """Clip or pad a row to exactly width columns and give unset backgrounds the UI colour."""
    segments = [s if s.style.bg else Segment(s.text, s.style.merge(bg=base.bg)) for s in clip(list(row.segments), width)]
    return Row(tuple(segments)).padded(width, base)


class FrameComposer:
    """Compose screen rows for a Session; slide layouts are cached per size and epoch."""

    def __init__(self, deck: Deck, theme: Theme, filename: str, engine: Optional[LayoutEngine] = None):
        self.deck = deck
        self.theme = theme
        self.filename = filename
        self.engine = engine or LayoutEngine()
        self._epoch = 0
        self._layouts: dict[tuple[str, int, int], Canvas] = {}

    def _cached(self, part: str, index: int, width: int, epoch: int) -> Canvas:
        if epoch != self._epoch:
            self._layouts.clear()
            self._epoch = epoch
        key = (part, index, width)
        if key not in self._layouts:
            slide = self.deck.slides[index]
            if part == 'notes':
                self._layouts[key] = self.engine.notes(slide, self.theme, width)
            else:
                self._layouts[key] = self.engine.layout(slide, self.theme, width)
        return self._layouts[key]

    def _panel(self, title: str, content: Canvas, width: int, height: int) -> Canvas:
        """Draw a bordered box of width x height with content inside a one-column margin."""
        border = Style(fg=self.theme.role("ui_border"))
        title_style = Style(fg=self.theme.role("ui_title"), bold=True)
        inner_w = max(width - 4, 1)
        inner_h = max(height - 2, 0)

        head = [Segment('╭─', border)]
        if title:
            head += clip([Segment(f" {title} ", title_style)], max(width - 4, 0))
        used = sum(s.width for s in head)
        head.append(Segment('─' * max(width - used - 1, 0) + '╮', border))
        rows = [Row(tuple(head))]

        body = list(content[:inner_h])
        if len(content) > inner_h and inner_h:
            body[-1] = Row((Segment('…', Style(fg=self.theme.role("dimmed"))),))
        body.extend(Row() for _ in range(inner_h - len(body)))
        for line in body:
            inner = Row(tuple(clip(list(line.segments), inner_w))).padded(inner_w)
            rows.append(Row((Segment('│ ', border),) + inner.segments + (Segment(' │', border),)))
        rows.append(Row((Segment('╰' + '─' * max(width - 2, 0) + '╯', border),)))
        return rows[:height]

    def status(self, state: Session, now: Optional[float] = None) -> Row:
        text_style = Style(fg=self.theme.role("ui_text"), bg=self.theme.role("ui_border"))
        accent = text_style.merge(fg=self.theme.role("accent"), bold=True)
        notes_mark = "✓" if state.notes_visible else "✗"
        parts = [
            Segment(f" {self.filename} ", accent),
            Segment(f"| {self.deck.page_label(state.current_index)} ", text_style),
            Segment(f"| Theme: {self.theme.label} ", text_style),
            Segment(f"| [N] Notes {notes_mark} ", text_style),
            Segment(f"| {format_elapsed(state.elapsed(now))} ", text_style),
            Segment("| [?] Help ", text_style),
        ]
        return Row(tuple(clip(parts, state.width))).padded(state.width, text_style)

    def compose(self, state: Session, now: Optional[float] = None) -> Canvas:
        """Return exactly state.height rows, each exactly state.width columns wide."""
        width, height = state.width, state.height
        base = Style(fg=self.theme.role("ui_text"), bg=self.theme.role("ui_background"))
        footer: Canvas = [self.status(state, now)]
        if state.help_visible:
            help_style = Style(fg=self.theme.role("dimmed"), bg=self.theme.role("ui_background"))
            footer.insert(0, Row((Segment(' ' + HELP_TEXT, help_style),)))
        panel_h = max(height - len(footer), 0)

        slide = self.deck.slides[state.current_index]
        show_notes = state.notes_visible and width >= 40
        notes_w = int(width * NOTES_SHARE) if show_notes else 0
        slide_w = width - notes_w

        content = self._cached('slide', state.current_index, max(slide_w - 4, 1), state.layout_epoch)
        rows = self._panel(slide.title or "", content, slide_w, panel_h)
        if show_notes:
            notes = self._cached('notes', state.current_index, max(notes_w - 4, 1), state.layout_epoch)
            side = self._panel("Notes", notes or [Row((Segment("No notes for this slide",
                                                                  Style(fg=self.theme.role("dimmed"))),))],
                               notes_w, panel_h)
            rows = [Row(a.segments + b.segments) for a, b in zip(rows, side)]

        frame = [_fill(r, width, base) for r in rows + footer]
        return frame[-height:] if height else []
