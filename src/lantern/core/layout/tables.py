"""Table column sizing and row rendering"""

from lantern.core.layout.canvas import Row, Segment, Style
from lantern.core.layout.wrap import clip, merge


MIN_COLUMN = 3
CELL_SEP = ' │ '
RULE_SEP = '─┼─'


def column_widths(natural: list[int], available: int) -> list[int]:
    """Fit natural column widths into `available` columns.

    Columns are scaled by available/natural total (floored, at least MIN_COLUMN);
    leftover columns go back to the leftmost columns that were cut.
    """
    if not natural:
        return []
    natural = [max(n, 1) for n in natural]
    total = sum(natural)
    if total <= available:
        return natural

    widths = [min(n, max(MIN_COLUMN, n * available // total)) for n in natural]
    # minimums can overshoot; take the excess back from the widest columns
    excess = sum(widths) - available
    while excess > 0:
        widest = max(range(len(widths)), key=lambda i: (widths[i], -i))
        if widths[widest] <= MIN_COLUMN:
            break
        widths[widest] -= 1
        excess -= 1
    spare = available - sum(widths)
    i = 0
    while spare > 0 and any(w < n for w, n in zip(widths, natural)):
        if widths[i] < natural[i]:
            widths[i] += 1
            spare -= 1
        i = (i + 1) % len(widths)
    return widths


def _cell(segments: list[Segment], width: int, align: str) -> list[Segment]:
    """Clip one cell to width (with a truncation marker) and pad it to the column alignment."""
    clipped = clip(segments, width)
    used = sum(s.width for s in clipped)
    gap = width - used
    if gap <= 0:
        return clipped
    if align == 'right':
        return [Segment(' ' * gap)] + clipped
    if align == 'center':
        left = gap // 2
        return [Segment(' ' * left)] + clipped + [Segment(' ' * (gap - left))]
    return clipped + [Segment(' ' * gap)]


def table_row(cells: list[list[Segment]], widths: list[int], alignments: list[str], border: Style) -> Row:
    out: list[Segment] = []
    for i, (cell, width) in enumerate(zip(cells, widths)):
        if i:
            out.append(Segment(CELL_SEP, border))
        out.extend(_cell(cell, width, alignments[i] if i < len(alignments) else 'left'))
    return Row(tuple(merge(out)))


def rule_row(widths: list[int], border: Style) -> Row:
    return Row((Segment(RULE_SEP.join('─' * w for w in widths), border),))
