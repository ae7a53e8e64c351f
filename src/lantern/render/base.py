"""Renderer capability interface and colour helpers shared by both targets"""

from typing import Protocol

from lantern.core.layout.canvas import Canvas


class Renderer(Protocol):
    """Anything that can put canvas rows in front of the user."""

    def draw(self, rows: Canvas) -> None:
        ...


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert '#rrggbb' to an (r, g, b) tuple."""
    value = color.lstrip('#')
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def rgb_to_ansi256(r: int, g: int, b: int) -> int:
    """Map an RGB tuple (0-255) to the nearest index of the 6x6x6 ANSI colour cube."""
    r_ = int(round(r / 255 * 5))
    g_ = int(round(g / 255 * 5))
    b_ = int(round(b / 255 * 5))
    return 16 + 36 * r_ + 6 * g_ + b_
