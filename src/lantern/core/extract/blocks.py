"""markdown-it syntax tree to Block / TextSpan conversion"""

import logging
import re
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from lantern.core.models import (
    Block,
    Blockquote,
    CodeBlock,
    Diagnostic,
    Heading,
    HorizontalRule,
    ListBlock,
    ListItem,
    Paragraph,
    Table,
    TextSpan,
)
from lantern.core.utils.tokens import cell_alignment, heading_level, inline_child


logger = logging.getLogger(__name__)

CELL_SPLIT_RE = re.compile(r'(?<!\\)\|')
QUOTE_PREFIX_RE = re.compile(r'^[ \t>]*')

PLAIN: dict[str, Any] = {"bold": False, "italic": False, "strikethrough": False, "code": False, "link": None}


def _emit(out: list[TextSpan], text: str, style: dict[str, Any]) -> None:
    """Append text, merging into the previous span when the style matches."""
    if not text:
        return
    span = TextSpan(text=text, **style)
    if out and out[-1].same_style(span):
        out[-1] = out[-1].model_copy(update={"text": out[-1].text + text})
    else:
        out.append(span)


def _collect_spans(node: SyntaxTreeNode, style: dict[str, Any], out: list[TextSpan]) -> None:
    for child in node.children:
        t = child.type
        if t == 'text':
            _emit(out, child.content, style)
        elif t == 'softbreak':
            _emit(out, ' ', style)
        elif t == 'hardbreak':
            _emit(out, '\n', style)
        elif t == 'code_inline':
            _emit(out, child.content, {**style, "code": True})
        elif t == 'strong':
            _collect_spans(child, {**style, "bold": True}, out)
        elif t == 'em':
            _collect_spans(child, {**style, "italic": True}, out)
        elif t == 's':
            _collect_spans(child, {**style, "strikethrough": True}, out)
        elif t == 'link':
            _collect_spans(child, {**style, "link": str(child.attrs.get('href', ''))}, out)
        elif t == 'image':
            # alt text stands in for the picture; src kept as the link target
            _emit(out, child.content, {**style, "link": str(child.attrs.get('src', ''))})
        elif child.children:
            _collect_spans(child, style, out)
        else:
            _emit(out, child.content, style)


def inline_spans(node: SyntaxTreeNode | None) -> list[TextSpan]:
    """Flatten an inline node into ordered, non-overlapping TextSpans."""
    out: list[TextSpan] = []
    if node is not None:
        _collect_spans(node, PLAIN, out)
    return out


def _row_cells(row: SyntaxTreeNode) -> list[SyntaxTreeNode]:
    return [c for c in row.children if c.type in ('th', 'td')]


def _source_cell_count(line: str) -> int:
    cells = QUOTE_PREFIX_RE.sub('', line).strip()
    if cells.startswith('|'):
        cells = cells[1:]
    if cells.endswith('|') and not cells.endswith('\\|'):
        cells = cells[:-1]
    return len(CELL_SPLIT_RE.split(cells))


class BlockBuilder:
    """Convert markdown text into Blocks using a configured MarkdownIt parser."""

    def __init__(self, md: MarkdownIt):
        self.md = md

    def collect_references(self, text: str, env: dict[str, Any]) -> None:
        """Gather link reference definitions from text into env['references']."""
        self.md.parse(text, env)

    def build(self, text: str, line: int, diagnostics: list[Diagnostic],
              env: dict[str, Any] | None = None) -> list[Block]:
        """Parse text whose first line is source line `line` into Blocks.

        Passing the env of an earlier collect_references call lets links in
        this chunk resolve against definitions found elsewhere in the slide.
        """
        root = SyntaxTreeNode(self.md.parse(text, env if env is not None else {}))
        return self._blocks(root, text.split('\n'), line, diagnostics)

    def _blocks(self, node: SyntaxTreeNode, lines: list[str], line: int,
                diagnostics: list[Diagnostic]) -> list[Block]:
        blocks: list[Block] = []
        for child in node.children:
            block = self._block(child, lines, line, diagnostics)
            if block is not None:
                blocks.append(block)
        return blocks

    def _block(self, node: SyntaxTreeNode, lines: list[str], line: int,
               diagnostics: list[Diagnostic]) -> Block | None:
        t = node.type
        if t == 'heading':
            return Heading(level=heading_level(node) or 1, spans=inline_spans(inline_child(node)))
        if t == 'paragraph':
            return Paragraph(spans=inline_spans(inline_child(node)))
        if t in ('bullet_list', 'ordered_list'):
            return self._list(node, lines, line, diagnostics)
        if t in ('fence', 'code_block'):
            words = (node.info or '').split()
            content = node.content[:-1] if node.content.endswith('\n') else node.content
            return CodeBlock(language=words[0] if words else None, lines=content.split('\n'))
        if t == 'table':
            return self._table(node, lines, line, diagnostics)
        if t == 'blockquote':
            return Blockquote(blocks=self._blocks(node, lines, line, diagnostics))
        if t == 'hr':
            return HorizontalRule()
        logger.debug("skipping unsupported block node '%s'", t)
        return None

    def _list(self, node: SyntaxTreeNode, lines: list[str], line: int,
              diagnostics: list[Diagnostic]) -> ListBlock:
        items: list[ListItem] = []
        for item in node.children:
            children = list(item.children)
            spans: list[TextSpan] = []
            if children and children[0].type == 'paragraph':
                spans = inline_spans(inline_child(children[0]))
                children = children[1:]
            nested = [b for c in children if (b := self._block(c, lines, line, diagnostics)) is not None]
            items.append(ListItem(spans=spans, blocks=nested))
        ordered = node.type == 'ordered_list'
        start = int(node.attrs.get('start', 1)) if ordered else 1
        return ListBlock(ordered=ordered, start=start, items=items)

    def _table(self, node: SyntaxTreeNode, lines: list[str], line: int,
               diagnostics: list[Diagnostic]) -> Table:
        header_cells: list[SyntaxTreeNode] = []
        body_rows: list[list[SyntaxTreeNode]] = []
        for section in node.children:
            rows = [r for r in section.children if r.type == 'tr']
            if section.type == 'thead' and rows:
                header_cells = _row_cells(rows[0])
            elif section.type == 'tbody':
                body_rows.extend(_row_cells(r) for r in rows)

        ncols = len(header_cells)
        self._check_table_rows(node, lines, line, ncols, diagnostics)

        rows: list[list[list[TextSpan]]] = []
        for cells in body_rows:
            row = [inline_spans(inline_child(c)) for c in cells[:ncols]]
            row.extend([] for _ in range(ncols - len(row)))
            rows.append(row)
        return Table(
            header=[inline_spans(inline_child(c)) for c in header_cells],
            rows=rows,
            alignments=[cell_alignment(c) for c in header_cells],
        )

    def _check_table_rows(self, node: SyntaxTreeNode, lines: list[str], line: int,
                          ncols: int, diagnostics: list[Diagnostic]) -> None:
        """Record rows whose source cell count differs from the header's."""
        if not node.map:
            return
        start, end = node.map
        for offset in range(start + 2, min(end, len(lines))):
            src = lines[offset]
            if not src.strip():
                continue
            count = _source_cell_count(src)
            if count != ncols:
                source_line = line + offset
                logger.warning("line %d: table row has %d cells, header has %d; row normalized",
                               source_line, count, ncols)
                diagnostics.append(Diagnostic(
                    kind="malformed_table", line=source_line,
                    message=f"table row has {count} cells, expected {ncols}"))
