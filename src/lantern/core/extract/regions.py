"""Slide body pre-scan: speaker notes and admonition regions ahead of markdown-it"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from lantern.core.errors import UnterminatedBlockError
from lantern.core.extract.admonitions import AdmonitionKind, resolve_kind
from lantern.core.models import Diagnostic
from lantern.core.utils.fences import find_close, open_fence


logger = logging.getLogger(__name__)

NOTES_OPEN_RE     = re.compile(r'^\s*:{3,}\s*notes\s*$', re.IGNORECASE)
DIRECTIVE_OPEN_RE = re.compile(r'^\s*:{3,}\s*([A-Za-z][\w-]*)[ \t]*(.*?)\s*$')
DIRECTIVE_CLOSE_RE = re.compile(r'^\s*:{3,}\s*$')
CALLOUT_RE        = re.compile(r'^ {0,3}>[ \t]?\[!([A-Za-z][\w-]*)\][+-]?[ \t]*(.*?)\s*$')
QUOTE_LINE_RE     = re.compile(r'^ {0,3}>[ \t]?')


@dataclass
class Chunk:
    """Plain markdown handed to markdown-it as-is."""
    text: str
    line: int                           # 1-based source line of text's first line


@dataclass
class Region:
    """An admonition region; kind None means an unrecognized ::: directive (rendered as a quote)."""
    kind:  Optional[AdmonitionKind]
    title: Optional[str]
    body:  Chunk


@dataclass
class RegionScan:
    parts:       list[Chunk | Region] = field(default_factory=list)
    notes:       list[Chunk] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def unterminated(diagnostics: list[Diagnostic], line: int, construct: str) -> None:
    """Log and record a recovered unterminated block."""
    err = UnterminatedBlockError(line, construct)
    logger.warning("%s", err)
    diagnostics.append(Diagnostic(kind="unterminated_block", line=err.line, message=err.message))


def _collect_directive(lines: list[str], start: int) -> tuple[int, bool]:
    """Find the ':::' closing the directive opened at start, counting nested openers.

    Returns (closer_index, closed); an unclosed directive runs to len(lines).
    """
    depth = 1
    i = start + 1
    while i < len(lines):
        line = lines[i]
        fence = open_fence(line)
        if fence:
            close = find_close(lines, i + 1, fence)
            if close is not None:
                i = close + 1
                continue
        if DIRECTIVE_CLOSE_RE.match(line):
            depth -= 1
            if depth == 0:
                return i, True
        elif DIRECTIVE_OPEN_RE.match(line):
            depth += 1
        i += 1
    return len(lines), False


def scan_regions(text: str, start_line: int = 1) -> RegionScan:
    """Split a slide body into markdown chunks, admonition regions and notes."""
    lines = text.split('\n')
    scan = RegionScan()
    buf: list[str] = []
    buf_start = 0

    def flush(next_index: int) -> None:
        nonlocal buf, buf_start
        if buf:
            scan.parts.append(Chunk('\n'.join(buf), start_line + buf_start))
        buf = []
        buf_start = next_index

    i = 0
    while i < len(lines):
        line = lines[i]

        fence = open_fence(line)
        if fence:
            close = find_close(lines, i + 1, fence)
            if close is None:
                unterminated(scan.diagnostics, start_line + i, "code fence")
                close = len(lines) - 1
            if not buf:
                buf_start = i
            buf.extend(lines[i:close + 1])
            i = close + 1
            continue

        if NOTES_OPEN_RE.match(line):
            flush(i)
            end, closed = _collect_directive(lines, i)
            if not closed:
                unterminated(scan.diagnostics, start_line + i, "notes fence")
            scan.notes.append(Chunk('\n'.join(lines[i + 1:end]), start_line + i + 1))
            i = end + 1
            buf_start = i
            continue

        m = DIRECTIVE_OPEN_RE.match(line)
        if m:
            flush(i)
            end, closed = _collect_directive(lines, i)
            if not closed:
                unterminated(scan.diagnostics, start_line + i, f"':::{m.group(1)}' fence")
            kind = resolve_kind(m.group(1))
            if kind is None:
                logger.warning("line %d: unknown admonition kind '%s'; rendering as a quote",
                               start_line + i, m.group(1))
                scan.diagnostics.append(Diagnostic(
                    kind="unknown_admonition", line=start_line + i,
                    message=f"unknown admonition kind '{m.group(1)}'"))
            body = Chunk('\n'.join(lines[i + 1:end]), start_line + i + 1)
            scan.parts.append(Region(kind, m.group(2) or None, body))
            i = end + 1
            buf_start = i
            continue

        m = CALLOUT_RE.match(line)
        if m:
            kind = resolve_kind(m.group(1))
            if kind is None:
                # Left to markdown-it, which renders it as a plain blockquote.
                logger.debug("line %d: unknown callout kind '%s'", start_line + i, m.group(1))
                scan.diagnostics.append(Diagnostic(
                    kind="unknown_admonition", line=start_line + i,
                    message=f"unknown admonition kind '{m.group(1)}'"))
            else:
                flush(i)
                end = i + 1
                while end < len(lines) and QUOTE_LINE_RE.match(lines[end]):
                    end += 1
                inner = [QUOTE_LINE_RE.sub('', ln, count=1) for ln in lines[i + 1:end]]
                body = Chunk('\n'.join(inner), start_line + i + 1)
                scan.parts.append(Region(kind, m.group(2) or None, body))
                i = end
                buf_start = i
                continue

        if not buf:
            buf_start = i
        buf.append(line)
        i += 1

    flush(len(lines))
    return scan
