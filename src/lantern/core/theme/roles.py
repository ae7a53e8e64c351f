"""Semantic role -> base16 slot mapping shared by every theme"""

from lantern.core.extract.admonitions import AdmonitionKind


ROLE_MAP: dict[str, str] = {
    "h1":             "base0D",
    "h2":             "base0C",
    "h3":             "base0E",
    "h4":             "base0B",
    "h5":             "base0A",
    "h6":             "base09",
    "body":           "base05",
    "strong":         "base06",
    "emphasis":       "base0E",
    "code":           "base0B",
    "inline_code_bg": "base01",
    "link":           "base0D",
    "accent":         "base0A",
    "list_marker":    "base09",
    "dimmed":         "base03",
    "ui_background":  "base00",
    "ui_border":      "base02",
    "ui_title":       "base0D",
    "ui_text":        "base05",
}

ADMONITION_SLOTS: dict[AdmonitionKind, str] = {
    AdmonitionKind.note:      "base0D",
    AdmonitionKind.tip:       "base0C",
    AdmonitionKind.important: "base0E",
    AdmonitionKind.warning:   "base0A",
    AdmonitionKind.caution:   "base0A",
    AdmonitionKind.danger:    "base08",
    AdmonitionKind.success:   "base0B",
    AdmonitionKind.question:  "base0C",
    AdmonitionKind.example:   "base0E",
    AdmonitionKind.quote:     "base04",
    AdmonitionKind.abstract:  "base0D",
    AdmonitionKind.todo:      "base0C",
    AdmonitionKind.bug:       "base08",
    AdmonitionKind.failure:   "base08",
}


def heading_role(level: int) -> str:
    return f"h{min(max(level, 1), 6)}"
