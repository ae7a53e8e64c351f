"""Front matter extraction, slide splitting, and Deck construction"""

import datetime
import logging
import re
import tomllib
from pathlib import Path
from typing import Any

import yaml
from markdown_it import MarkdownIt
from pydantic import ValidationError

from lantern.core.errors import FrontmatterError
from lantern.core.extract.blocks import BlockBuilder
from lantern.core.extract.regions import (
    CALLOUT_RE,
    DIRECTIVE_CLOSE_RE,
    DIRECTIVE_OPEN_RE,
    Region,
    scan_regions,
)
from lantern.core.models import (
    Admonition,
    Block,
    Blockquote,
    Deck,
    DeckMeta,
    Diagnostic,
    Heading,
    Slide,
    SlideSource,
    plain_text,
)
from lantern.core.utils.fences import find_close, open_fence


logger = logging.getLogger(__name__)

SEPARATOR = '---'
FRONTMATTER_FENCES = {'---': 'YAML', '+++': 'TOML'}
META_FIELDS = ('theme', 'author', 'title', 'date', 'paging')
TOML_LINE_RE = re.compile(r'at line (\d+)')


def make_parser(preset: str = 'gfm-like') -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    md = MarkdownIt(preset, options_update={"linkify": False, "html": False})
    # '---' lines are slide separators, never setext underlines
    md.disable('lheading')
    return md


def _toml_error_line(e: tomllib.TOMLDecodeError) -> int | None:
    lineno = getattr(e, 'lineno', None)
    if lineno is None:
        m = TOML_LINE_RE.search(str(e))
        lineno = int(m.group(1)) if m else None
    return lineno


def _decode_frontmatter(header: str, fmt: str, fence_line: int) -> Any:
    """Decode the header; error lines are file lines, header line 1 is fence_line + 1."""
    if fmt == 'TOML':
        try:
            return tomllib.loads(header)
        except tomllib.TOMLDecodeError as e:
            lineno = _toml_error_line(e)
            line = fence_line + lineno if lineno is not None else fence_line
            raise FrontmatterError(line, f"Invalid TOML front matter: {e}") from e
    try:
        return yaml.safe_load(header) or {}
    except yaml.YAMLError as e:
        mark = getattr(e, 'problem_mark', None)
        line = fence_line + 1 + mark.line if mark is not None else fence_line
        raise FrontmatterError(line, f"Invalid YAML front matter: {e}") from e


def _key_line(header: str, key: str, fence_line: int) -> int:
    """File line on which a top-level header key is defined, else the fence line."""
    pattern = re.compile(rf'^\s*["\']?{re.escape(key)}["\']?\s*[:=]')
    for n, text in enumerate(header.split('\n')):
        if pattern.match(text):
            return fence_line + 1 + n
    return fence_line


def _to_meta(data: Any, fmt: str, header: str = '', fence_line: int = 1) -> DeckMeta:
    """Validate decoded front matter into DeckMeta; unknown keys go to options."""
    if not isinstance(data, dict):
        raise FrontmatterError(fence_line,
                               f"Invalid {fmt} front matter: expected a mapping, got {type(data).__name__}")
    known: dict[str, Any] = {}
    options: dict[str, Any] = {}
    for key, value in data.items():
        if key in META_FIELDS:
            if isinstance(value, (datetime.date, datetime.datetime)):
                value = value.isoformat()
            known[key] = value
        else:
            options[str(key)] = value
    try:
        return DeckMeta(**known, options=options)
    except ValidationError as e:
        fields = [str(err["loc"][0]) for err in e.errors()]
        line = _key_line(header, fields[0], fence_line) if fields else fence_line
        raise FrontmatterError(line, f"Invalid {fmt} front matter: bad value for {', '.join(fields)}") from e


def split_frontmatter(text: str) -> tuple[DeckMeta, str, int]:
    """Return (meta, body, body_line) where body_line is the 1-based line the body starts on."""
    if text.startswith('\ufeff'):
        text = text[1:]
    lines = text.split('\n')
    # leading blank lines before the opening fence are allowed
    first = 0
    while first < len(lines) and not lines[first].strip():
        first += 1
    if first == len(lines) or lines[first].rstrip() not in FRONTMATTER_FENCES:
        return DeckMeta(), text, 1

    fence = lines[first].rstrip()
    fmt = FRONTMATTER_FENCES[fence]
    for end in range(first + 1, len(lines)):
        if lines[end].rstrip() == fence:
            break
    else:
        raise FrontmatterError(first + 1, f"Unclosed {fmt} front matter (missing closing {fence})")

    header = '\n'.join(lines[first + 1:end])
    if not header.strip():
        meta = DeckMeta()
    else:
        meta = _to_meta(_decode_frontmatter(header, fmt, first + 1), fmt, header, first + 1)
    return meta, '\n'.join(lines[end + 1:]), end + 2


def split_slides(body: str, body_line: int = 1) -> list[SlideSource]:
    """Split body on full-line '---' separators that sit outside fenced code."""
    lines = body.split('\n')
    slides: list[SlideSource] = []
    current: list[str] = []
    start = 0
    i = 0
    while i < len(lines):
        line = lines[i]
        fence = open_fence(line)
        if fence:
            # only a fence that closes later shields separators; unclosed ones end at the slide
            close = find_close(lines, i + 1, fence)
            if close is not None:
                current.extend(lines[i:close + 1])
                i = close + 1
                continue
        if line.rstrip() == SEPARATOR:
            slides.append(SlideSource(len(slides), '\n'.join(current), body_line + start))
            current = []
            start = i + 1
        else:
            current.append(line)
        i += 1
    slides.append(SlideSource(len(slides), '\n'.join(current), body_line + start))
    return slides


class DeckParser:
    """Turn source text into a Deck; holds the configured markdown-it parser."""

    def __init__(self, parser_config: str = 'gfm-like'):
        self.builder = BlockBuilder(make_parser(parser_config))

    def _content(self, text: str, line: int, diagnostics: list[Diagnostic],
                 env: dict[str, Any]) -> tuple[list[Block], list[Block]]:
        """Return (visible_blocks, note_blocks) for a slide body or region body."""
        scan = scan_regions(text, line)
        diagnostics.extend(scan.diagnostics)
        blocks: list[Block] = []
        notes: list[Block] = []
        for part in scan.parts:
            if isinstance(part, Region):
                inner, inner_notes = self._content(part.body.text, part.body.line, diagnostics, env)
                notes.extend(inner_notes)
                if part.kind is None:
                    blocks.append(Blockquote(blocks=inner))
                else:
                    blocks.append(Admonition(kind=part.kind, title=part.title, blocks=inner))
            else:
                blocks.extend(self.builder.build(part.text, part.line, diagnostics, env))
        for chunk in scan.notes:
            note_blocks, nested_notes = self._content(chunk.text, chunk.line, diagnostics, env)
            notes.extend(note_blocks)
            notes.extend(nested_notes)
        return blocks, notes

    def _references(self, text: str, env: dict[str, Any]) -> None:
        """Collect link definitions from the whole slide into env.

        Directive and callout marker lines are blanked first so a definition
        right after one starts its own block instead of continuing a paragraph.
        """
        lines = []
        for line in text.split('\n'):
            if DIRECTIVE_OPEN_RE.match(line) or DIRECTIVE_CLOSE_RE.match(line):
                line = ''
            elif CALLOUT_RE.match(line):
                line = '>'
            lines.append(line)
        self.builder.collect_references('\n'.join(lines), env)

    def slide(self, source: SlideSource, diagnostics: list[Diagnostic]) -> Slide:
        # one reference table per slide, shared by every notes and admonition region in it
        env: dict[str, Any] = {}
        self._references(source.text, env)
        blocks, notes = self._content(source.text, source.start_line, diagnostics, env)
        title = next((plain_text(b.spans) for b in blocks if isinstance(b, Heading)), None)
        return Slide(index=source.index, blocks=blocks, notes=notes, title=title)

    def parse(self, source: str) -> Deck:
        """Parse source text into a Deck. Raises FrontmatterError on malformed front matter."""
        source = source.replace('\r\n', '\n')
        meta, body, body_line = split_frontmatter(source)
        diagnostics: list[Diagnostic] = []
        slides = [self.slide(s, diagnostics) for s in split_slides(body, body_line)]
        logger.debug("parsed %d slide(s), %d diagnostic(s)", len(slides), len(diagnostics))
        return Deck(slides=slides, meta=meta, diagnostics=diagnostics)


def parse(source: str, parser_config: str = 'gfm-like') -> Deck:
    """Parse markdown slide source into a Deck."""
    return DeckParser(parser_config).parse(source)


def parse_file(path: Path, parser_config: str = 'gfm-like') -> Deck:
    """Read and parse a single UTF-8 markdown file."""
    return parse(path.read_text(encoding='utf-8'), parser_config)
