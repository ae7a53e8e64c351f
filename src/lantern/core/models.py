"""Document model: decks, slides, blocks and styled text spans"""

from dataclasses import dataclass
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from lantern.core.extract.admonitions import AdmonitionKind


DEFAULT_PAGING = "Slide %d / %d"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextSpan(_Frozen):
    """A contiguous run of inline text with one style-attribute set."""
    text:          str
    bold:          bool = False
    italic:        bool = False
    strikethrough: bool = False
    code:          bool = False
    link:          Optional[str] = None     # link target; None for plain text

    def same_style(self, other: "TextSpan") -> bool:
        return (self.bold, self.italic, self.strikethrough, self.code, self.link) == (
            other.bold, other.italic, other.strikethrough, other.code, other.link)


def plain_text(spans: list[TextSpan]) -> str:
    """Concatenate span text with all styling dropped."""
    return "".join(s.text for s in spans)


class Heading(_Frozen):
    type:  Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    spans: list[TextSpan]


class Paragraph(_Frozen):
    type:  Literal["paragraph"] = "paragraph"
    spans: list[TextSpan]


class ListItem(_Frozen):
    """One list entry: its lead text plus any nested blocks (sub-lists, extra paragraphs)."""
    spans:  list[TextSpan]
    blocks: list["Block"] = []


class ListBlock(_Frozen):
    type:    Literal["list"] = "list"
    ordered: bool = False
    start:   int = 1                    # first number of an ordered list
    items:   list[ListItem]


class CodeBlock(_Frozen):
    type:     Literal["code"] = "code"
    language: Optional[str] = None
    lines:    list[str]


class Table(_Frozen):
    type:       Literal["table"] = "table"
    header:     list[list[TextSpan]]
    rows:       list[list[list[TextSpan]]]
    alignments: list[Literal["left", "center", "right"]]


class Blockquote(_Frozen):
    type:   Literal["blockquote"] = "blockquote"
    blocks: list["Block"]


class HorizontalRule(_Frozen):
    type: Literal["rule"] = "rule"


class Admonition(_Frozen):
    type:   Literal["admonition"] = "admonition"
    kind:   AdmonitionKind
    title:  Optional[str] = None        # custom title; None renders the kind's display name
    blocks: list["Block"] = []


Block = Annotated[
    Union[Heading, Paragraph, ListBlock, CodeBlock, Table, Blockquote, HorizontalRule, Admonition],
    Field(discriminator="type"),
]

for _model in (ListItem, ListBlock, Blockquote, Admonition):
    _model.model_rebuild()


class Slide(_Frozen):
    """One page of content; index always equals its position in Deck.slides."""
    index:  int = Field(ge=0)
    blocks: list[Block] = []
    notes:  list[Block] = []
    title:  Optional[str] = None        # flattened text of the first heading

    @property
    def has_notes(self) -> bool:
        return bool(self.notes)


class DeckMeta(_Frozen):
    """Deck-level metadata decoded from front matter."""
    theme:   Optional[str] = None
    author:  Optional[str] = None
    title:   Optional[str] = None
    date:    Optional[str] = None
    paging:  str = DEFAULT_PAGING
    options: dict[str, Any] = {}        # unrecognized front matter keys, kept verbatim


class Diagnostic(_Frozen):
    """A recovered, non-fatal anomaly found while parsing."""
    kind:    Literal["unterminated_block", "unknown_admonition", "malformed_table"]
    line:    int                        # 1-based source line
    message: str


class Deck(_Frozen):
    slides:      list[Slide]
    meta:        DeckMeta = DeckMeta()
    diagnostics: list[Diagnostic] = []

    @property
    def has_notes(self) -> bool:
        return any(s.has_notes for s in self.slides)

    def page_label(self, index: int) -> str:
        """Format the paging string for a 0-based slide index."""
        try:
            return self.meta.paging % (index + 1, len(self.slides))
        except (TypeError, ValueError):
            return DEFAULT_PAGING % (index + 1, len(self.slides))


@dataclass
class SlideSource:
    """Internal split result: one slide body and where it starts in the source file."""
    index:      int
    text:       str
    start_line: int     # 1-based line of the body's first line in the source file

