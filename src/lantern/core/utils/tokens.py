"""Shared markdown-it syntax tree utilities"""

from typing import Literal

from markdown_it.tree import SyntaxTreeNode


Alignment = Literal["left", "center", "right"]


def heading_level(node: SyntaxTreeNode) -> int | None:
    """Return the heading level (1-6) for a heading node, else None."""
    if node.type == 'heading' and node.tag and node.tag[0] == 'h' and node.tag[1:].isdigit():
        return int(node.tag[1:])
    return None


def cell_alignment(node: SyntaxTreeNode) -> Alignment:
    """Read a th/td node's text-align style; unaligned columns are left."""
    style = str(node.attrs.get('style', ''))
    for align in ('center', 'right', 'left'):
        if f'text-align:{align}' in style.replace(' ', ''):
            return align
    return 'left'


def inline_child(node: SyntaxTreeNode) -> SyntaxTreeNode | None:
    """Return the inline node under a paragraph/heading/cell, if any."""
    for child in node.children:
        if child.type == 'inline':
            return child
    return None
