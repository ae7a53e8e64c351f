"""Canvas types: styled segments grouped into rows"""

from dataclasses import dataclass, field, replace
from typing import Optional

from lantern.core.utils.width import display_width


@dataclass(frozen=True)
class Style:
    fg:            Optional[str] = None     # '#rrggbb'
    bg:            Optional[str] = None
    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False
    underline:     bool = False
    dim:           bool = False

    def merge(self, **changes) -> "Style":
        return replace(self, **changes)


@dataclass(frozen=True)
class Segment:
    text:  str
    style: Style = Style()

    @property
    def width(self) -> int:
        return display_width(self.text)


@dataclass(frozen=True)
class Row:
    """One terminal line of styled segments."""
    segments: tuple[Segment, ...] = field(default_factory=tuple)

    @property
    def width(self) -> int:
        return sum(s.width for s in self.segments)

    @property
    def text(self) -> str:
        return ''.join(s.text for s in self.segments)

    def prefixed(self, *segments: Segment) -> "Row":
        return Row(tuple(segments) + self.segments)

    def padded(self, width: int, style: Style = Style()) -> "Row":
        """Right-pad with spaces to `width` columns."""
        gap = width - self.width
        if gap <= 0:
            return self
        return Row(self.segments + (Segment(' ' * gap, style),))


Canvas = list[Row]

BLANK = Row()
