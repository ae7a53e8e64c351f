"""Word wrapping and clipping of styled segments by display width"""

import re

from lantern.core.layout.canvas import Segment, Style
from lantern.core.utils.width import display_width, split_at_width


BREAK_RE = re.compile(r'(\n|[^\S\n]+)')

NEWLINE = None      # hard line break marker in the word stream

Word = tuple[list[Segment], Style]      # pieces of one word, style of the gap before it


def merge(segments: list[Segment]) -> list[Segment]:
    """Join neighbouring segments that share a style."""
    out: list[Segment] = []
    for seg in segments:
        if not seg.text:
            continue
        if out and out[-1].style == seg.style:
            out[-1] = Segment(out[-1].text + seg.text, seg.style)
        else:
            out.append(seg)
    return out


def _words(segments: list[Segment]) -> list[Word | None]:
    words: list[Word | None] = []
    current: list[Segment] = []
    gap = Style()
    for seg in segments:
        for piece in BREAK_RE.split(seg.text):
            if not piece:
                continue
            if piece == '\n' or piece.isspace():
                if current:
                    words.append((current, gap))
                    current = []
                if piece == '\n':
                    words.append(NEWLINE)
                gap = seg.style
            else:
                current.append(Segment(piece, seg.style))
    if current:
        words.append((current, gap))
    return words


def wrap(segments: list[Segment], width: int) -> list[list[Segment]]:
    """Wrap segments at word boundaries; whitespace runs collapse to one space.

    Words wider than `width` are hard-broken. Returns [] when there is no text.
    """
    width = max(width, 1)
    lines: list[list[Segment]] = [[]]
    used = 0
    for word in _words(segments):
        if word is NEWLINE:
            lines.append([])
            used = 0
            continue
        pieces, gap = word
        w = sum(p.width for p in pieces)
        if used and used + 1 + w <= width:
            lines[-1].append(Segment(' ', gap))
            lines[-1].extend(pieces)
            used += 1 + w
            continue
        if used:
            lines.append([])
            used = 0
        if w <= width:
            lines[-1].extend(pieces)
            used = w
            continue
        for piece in pieces:
            text = piece.text
            while text:
                if used and display_width(text[0]) > width - used:
                    lines.append([])
                    used = 0
                head, text = split_at_width(text, width - used)
                lines[-1].append(Segment(head, piece.style))
                used += display_width(head)

    while lines and not lines[-1]:
        lines.pop()
    return [merge(line) for line in lines]


def clip(segments: list[Segment], width: int, marker: str = '…') -> list[Segment]:
    """Cut segments to `width` columns, ending with marker if anything was dropped."""
    if sum(s.width for s in segments) <= width:
        return list(segments)
    if width <= 0:
        return []
    out: list[Segment] = []
    used = 0
    budget = width - display_width(marker)
    for seg in segments:
        room = budget - used
        if seg.width <= room:
            out.append(seg)
            used += seg.width
            continue
        head = split_at_width(seg.text, room)[0] if room > 0 else ''
        if display_width(head) > room:
            head = ''
        out.append(Segment(head + marker, seg.style))
        break
    return merge(out)
