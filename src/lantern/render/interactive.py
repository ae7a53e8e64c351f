"""Curses renderer and the interactive presentation loop"""

import curses
import logging
from typing import Optional

from lantern.core.layout.canvas import Canvas, Row, Style
from lantern.core.layout.engine import LayoutEngine
from lantern.core.models import Deck
from lantern.core.navigation import (
    Event,
    Jump,
    Next,
    Previous,
    Quit,
    Resize,
    Session,
    ToggleHelp,
    ToggleNotes,
    apply,
    render_request,
)
from lantern.core.theme.registry import Theme
from lantern.core.utils.width import split_at_width
from lantern.render.base import hex_to_rgb, rgb_to_ansi256
from lantern.render.frame import FrameComposer


logger = logging.getLogger(__name__)

ESC = 27
ENTER_KEYS = {10, 13, curses.KEY_ENTER}
TICK_MS = 1000      # redraw at least once a second for the clock

KEYMAP: dict[int, Event] = {
    curses.KEY_RIGHT: Next(), ord('j'): Next(), ord('l'): Next(), ord(' '): Next(), ord('n'): Next(),
    curses.KEY_LEFT: Previous(), ord('k'): Previous(), ord('h'): Previous(), ord('p'): Previous(),
    ord('N'): ToggleNotes(),
    ord('?'): ToggleHelp(),
    ord('q'): Quit(), ESC: Quit(),
    curses.KEY_HOME: Jump(0), ord('g'): Jump(0),
}
LAST_SLIDE_KEYS = {curses.KEY_END, ord('G')}


def key_event(key: int, pending: str, total: int) -> tuple[Optional[Event], str]:
    """Translate a key code into (event, new pending digits).

    Digits accumulate until Enter, which jumps to that 1-based slide number;
    any other key discards the pending digits.
    """
    if ord('0') <= key <= ord('9'):
        return None, pending + chr(key)
    if key in ENTER_KEYS:
        return (Jump(int(pending) - 1) if pending else None), ''
    if key in LAST_SLIDE_KEYS:
        return Jump(total - 1), ''
    return KEYMAP.get(key), ''


class InteractiveRenderer:
    """Draw canvas rows to a curses window, repainting only rows that changed."""

    def __init__(self, screen):
        self.screen = screen
        self._previous: list[Row] = []
        self._pairs: dict[tuple[int, int], int] = {}
        self._color = curses.has_colors()

    def invalidate(self) -> None:
        self._previous = []
        self.screen.clear()

    def _attr(self, style: Style) -> int:
        attr = curses.A_NORMAL
        if style.bold:
            attr |= curses.A_BOLD
        if style.italic and hasattr(curses, 'A_ITALIC'):
            attr |= curses.A_ITALIC
        if style.underline:
            attr |= curses.A_UNDERLINE
        if style.dim:
            attr |= curses.A_DIM
        if self._color:
            attr |= curses.color_pair(self._pair(style.fg, style.bg))
        return attr

    def _pair(self, fg: Optional[str], bg: Optional[str]) -> int:
        fg_idx = rgb_to_ansi256(*hex_to_rgb(fg)) if fg and curses.COLORS >= 256 else -1
        bg_idx = rgb_to_ansi256(*hex_to_rgb(bg)) if bg and curses.COLORS >= 256 else -1
        key = (fg_idx, bg_idx)
        if key not in self._pairs:
            pair = len(self._pairs) + 1
            if pair >= curses.COLOR_PAIRS:
                return 0
            curses.init_pair(pair, fg_idx, bg_idx)
            self._pairs[key] = pair
        return self._pairs[key]

    def draw(self, rows: Canvas) -> None:
        height, width = self.screen.getmaxyx()
        for y, row in enumerate(rows[:height]):
            if y < len(self._previous) and self._previous[y] == row:
                continue
            self.screen.move(y, 0)
            self.screen.clrtoeol()
            x = 0
            for seg in row.segments:
                # the bottom-right cell cannot be written without scrolling
                limit = width - x - (1 if y == height - 1 else 0)
                if limit <= 0:
                    break
                text = seg.text if seg.width <= limit else split_at_width(seg.text, limit)[0]
                try:
                    self.screen.addstr(y, x, text, self._attr(seg.style))
                except curses.error:
                    logger.debug("addstr failed at row %d col %d", y, x)
                    break
                x += seg.width
        self._previous = list(rows[:height])
        self.screen.refresh()


class Presenter:
    """Event loop binding a Session to a FrameComposer and an InteractiveRenderer."""

    def __init__(self, deck: Deck, theme: Theme, filename: str, engine: Optional[LayoutEngine] = None):
        self.deck = deck
        self.composer = FrameComposer(deck, theme, filename, engine)

    def run(self, screen) -> Session:
        curses.curs_set(0)
        if curses.has_colors():
            curses.start_color()
            curses.use_default_colors()
        screen.timeout(TICK_MS)
        screen.keypad(True)

        height, width = screen.getmaxyx()
        renderer = InteractiveRenderer(screen)
        state = Session(total=len(self.deck.slides), width=width, height=height)
        last_request = None
        pending = ''
        while not state.quit:
            request = render_request(state)
            if last_request is not None and request.layout_epoch != last_request.layout_epoch:
                renderer.invalidate()
            renderer.draw(self.composer.compose(state))
            last_request = request

            key = screen.getch()
            if key == -1:
                continue
            if key == curses.KEY_RESIZE:
                height, width = screen.getmaxyx()
                event: Optional[Event] = Resize(width, height)
            else:
                event, pending = key_event(key, pending, state.total)
            if event is not None:
                logger.debug("event %s", event)
                state = apply(state, event)
        return state


def present(deck: Deck, theme: Theme, filename: str, engine: Optional[LayoutEngine] = None) -> Session:
    """Run the interactive view; curses.wrapper restores the terminal on exit or error."""
    return curses.wrapper(Presenter(deck, theme, filename, engine).run)
