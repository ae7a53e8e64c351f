"""Admonition kinds, surface-spelling aliases and display metadata"""

from enum import Enum


class AdmonitionKind(str, Enum):
    note      = "note"
    tip       = "tip"
    important = "important"
    warning   = "warning"
    caution   = "caution"
    danger    = "danger"
    success   = "success"
    question  = "question"
    example   = "example"
    quote     = "quote"
    abstract  = "abstract"
    todo      = "todo"
    bug       = "bug"
    failure   = "failure"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def icon(self) -> str:
        return ICONS[self]


# Checked before the canonical names, so "caution" and "important" fold into
# their aliased kinds rather than their own enum members.
ALIASES: dict[str, AdmonitionKind] = {
    "error":     AdmonitionKind.danger,
    "caution":   AdmonitionKind.warning,
    "attention": AdmonitionKind.warning,
    "help":      AdmonitionKind.question,
    "faq":       AdmonitionKind.question,
    "check":     AdmonitionKind.success,
    "done":      AdmonitionKind.success,
    "hint":      AdmonitionKind.tip,
    "important": AdmonitionKind.tip,
    "summary":   AdmonitionKind.abstract,
    "tldr":      AdmonitionKind.abstract,
    "fail":      AdmonitionKind.failure,
    "missing":   AdmonitionKind.failure,
}

ICONS: dict[AdmonitionKind, str] = {
    AdmonitionKind.note:      "ⓘ",
    AdmonitionKind.tip:       "\U0001f4a1",
    AdmonitionKind.important: "❗",
    AdmonitionKind.warning:   "⚠",
    AdmonitionKind.caution:   "⚠",
    AdmonitionKind.danger:    "⛔",
    AdmonitionKind.success:   "✓",
    AdmonitionKind.question:  "?",
    AdmonitionKind.example:   "▸",
    AdmonitionKind.quote:     "“",
    AdmonitionKind.abstract:  "§",
    AdmonitionKind.todo:      "☐",
    AdmonitionKind.bug:       "\U0001f41b",
    AdmonitionKind.failure:   "✗",
}


def resolve_kind(spelling: str) -> AdmonitionKind | None:
    """Map a surface spelling (any case) to its canonical kind, or None if unrecognized."""
    key = spelling.strip().lower()
    if not key:
        return None
    if key in ALIASES:
        return ALIASES[key]
    try:
        return AdmonitionKind(key)
    except ValueError:
        return None
