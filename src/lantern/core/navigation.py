"""Navigation state machine: session state, input events and the pure transition function"""

import time
from dataclasses import dataclass, field, replace
from typing import NamedTuple, Union


@dataclass(frozen=True)
class Next:
    pass


@dataclass(frozen=True)
class Previous:
    pass


@dataclass(frozen=True)
class Jump:
    index: int      # 0-based target slide


@dataclass(frozen=True)
class ToggleNotes:
    pass


@dataclass(frozen=True)
class ToggleHelp:
    pass


@dataclass(frozen=True)
class Resize:
    width:  int
    height: int


@dataclass(frozen=True)
class Quit:
    pass


Event = Union[Next, Previous, Jump, ToggleNotes, ToggleHelp, Resize, Quit]


@dataclass(frozen=True)
class Session:
    """Immutable navigation state; every event produces a new Session."""
    total:         int
    current_index: int = 0
    notes_visible: bool = False
    help_visible:  bool = False
    started_at:    float = field(default_factory=time.monotonic)
    quit:          bool = False
    width:         int = 80
    height:        int = 24
    layout_epoch:  int = 0      # bumped on resize; part of the layout cache key

    def __post_init__(self):
        if self.total < 1:
            raise ValueError("a session needs at least one slide")
        if not 0 <= self.current_index < self.total:
            raise ValueError(f"current_index {self.current_index} outside 0..{self.total - 1}")

    def elapsed(self, now: float | None = None) -> float:
        """Seconds since the session started."""
        return (time.monotonic() if now is None else now) - self.started_at


class RenderRequest(NamedTuple):
    """What the renderer must draw; equal requests can reuse a cached layout."""
    index:         int
    notes_visible: bool
    help_visible:  bool
    width:         int
    height:        int
    layout_epoch:  int


def apply(state: Session, event: Event) -> Session:
    """Return the state after event; out-of-range moves are no-ops and Quit is terminal."""
    if state.quit:
        return state
    if isinstance(event, Next):
        return replace(state, current_index=min(state.current_index + 1, state.total - 1))
    if isinstance(event, Previous):
        return replace(state, current_index=max(state.current_index - 1, 0))
    if isinstance(event, Jump):
        if 0 <= event.index < state.total:
            return replace(state, current_index=event.index)
        return state
    if isinstance(event, ToggleNotes):
        return replace(state, notes_visible=not state.notes_visible)
    if isinstance(event, ToggleHelp):
        return replace(state, help_visible=not state.help_visible)
    if isinstance(event, Resize):
        return replace(state, width=event.width, height=event.height, layout_epoch=state.layout_epoch + 1)
    if isinstance(event, Quit):
        return replace(state, quit=True)
    return state


def render_request(state: Session) -> RenderRequest:
    return RenderRequest(
        state.current_index, state.notes_visible, state.help_visible,
        state.width, state.height, state.layout_epoch,
    )
