"""Integration tests for the parse → theme → layout → print pipeline.

Each test runs one pipeline stage against the canonical deck below and
asserts stable expected values. Read this file top-to-bottom as a reference
for what each stage produces with default settings.

Canonical deck (pipeline-test.md)
---------------------------------
    ---
    title: Pipeline Test
    author: Ada
    date: 2026-01-15
    theme: gruvbox
    ---
    # Introduction

    An introductory paragraph.

    ::: notes
    Speak slowly.
    :::

    ---
    ## Details

    - first
    - second

    :::tip
    Keep it short.
    :::

    ---
    ```python
    print("hi")
    ```

Slides after parse (3 slides, no diagnostics):
    Slide 0 "Introduction":  [heading h1] [paragraph]      notes: [paragraph]
    Slide 1 "Details":       [heading h2] [list] [admonition tip]
    Slide 2 (untitled):      [code python]

Theme resolution:
    front matter "gruvbox" + dark background → gruvbox:dark
    --theme beats front matter; LANTERN_THEME only applies when both are absent

Plain print at width 40 (see EXPECTED_PRINT):
    slides are separated by a blank line, a full-width ═ rule and a blank line;
    notes never appear in printed output.
"""

import io

import pytest

from lantern.config import load_config
from lantern.core.extract.admonitions import AdmonitionKind
from lantern.core.layout.engine import layout
from lantern.core.models import Admonition, CodeBlock, Heading, ListBlock, Paragraph, plain_text
from lantern.core.parse import parse_file
from lantern.core.pipeline import resolve_theme, run_print


CANONICAL_MD = """\
---
title: Pipeline Test
author: Ada
date: 2026-01-15
theme: gruvbox
---
# Introduction

An introductory paragraph.

::: notes
Speak slowly.
:::

---
## Details

- first
- second

:::tip
Keep it short.
:::

---
```python
print("hi")
```
"""

RULE = "═" * 40

EXPECTED_PRINT = [
    "▉ Introduction",
    "",
    "An introductory paragraph.",
    "",
    RULE,
    "",
    "▓ Details",
    "",
    "• first",
    "• second",
    "",
    "╭─ \U0001f4a1 Tip " + "─" * 29 + "╮",
    "│ Keep it short." + " " * 22 + " │",
    "╰" + "─" * 38 + "╯",
    "",
    RULE,
    "",
    '▎ print("hi")',
]


# --- fixtures ---

@pytest.fixture(name="source_file")
def source_file_fixture(tmp_path):
    """Write the canonical deck to a temp file."""
    f = tmp_path / "pipeline-test.md"
    f.write_text(CANONICAL_MD, encoding="utf-8")
    return f


@pytest.fixture(name="deck")
def deck_fixture(source_file):
    return parse_file(source_file)


# --- parse ---

def test_parse_meta(deck):
    """Known front matter keys land on DeckMeta; the YAML date becomes an ISO string."""
    assert deck.meta.title == "Pipeline Test"
    assert deck.meta.author == "Ada"
    assert deck.meta.date == "2026-01-15"
    assert deck.meta.theme == "gruvbox"
    assert deck.meta.options == {}


def test_parse_slide_count_and_titles(deck):
    """Two separators give three slides; titles come from the first heading."""
    assert [s.index for s in deck.slides] == [0, 1, 2]
    assert [s.title for s in deck.slides] == ["Introduction", "Details", None]
    assert deck.diagnostics == []


def test_parse_block_types(deck):
    """Block types match the canonical deck order."""
    assert [type(b) for b in deck.slides[0].blocks] == [Heading, Paragraph]
    assert [type(b) for b in deck.slides[1].blocks] == [Heading, ListBlock, Admonition]
    assert [type(b) for b in deck.slides[2].blocks] == [CodeBlock]


def test_parse_notes_and_admonition(deck):
    """Notes are detached from slide 0; the tip admonition keeps its body."""
    assert [plain_text(b.spans) for b in deck.slides[0].notes] == ["Speak slowly."]
    assert deck.has_notes
    tip = deck.slides[1].blocks[2]
    assert tip.kind == AdmonitionKind.tip
    assert tip.title is None
    assert plain_text(tip.blocks[0].spans) == "Keep it short."


def test_parse_code_block(deck):
    code = deck.slides[2].blocks[0]
    assert code.language == "python"
    assert code.lines == ['print("hi")']


# --- theme ---

def test_theme_from_frontmatter(deck):
    assert resolve_theme(deck, load_config()).label == "gruvbox:dark"


def test_theme_cli_override(deck):
    assert resolve_theme(deck, load_config(), cli_theme="nord:light").label == "nord:light"


def test_theme_env_does_not_beat_frontmatter(deck, monkeypatch):
    monkeypatch.setenv("LANTERN_THEME", "solarized")
    monkeypatch.setenv("LANTERN_BACKGROUND", "light")
    assert resolve_theme(deck, load_config()).label == "gruvbox:light"


# --- layout ---

def test_layout_uses_theme_colours(deck):
    """Heading rows carry the theme's h1 colour; the admonition border its tip colour."""
    theme = resolve_theme(deck, load_config())
    heading = layout(deck.slides[0], theme, 40)[0]
    assert heading.segments[0].style.fg == theme.heading(1)
    box = layout(deck.slides[1], theme, 40)[5]
    assert box.segments[0].style.fg == theme.admonition(AdmonitionKind.tip)


# --- print ---

def test_print_plain_output(source_file):
    """Plain printing reproduces EXPECTED_PRINT exactly."""
    out = io.StringIO()
    count = run_print(source_file, load_config(), out, width=40, color=False)
    assert count == 3
    assert out.getvalue().splitlines() == EXPECTED_PRINT


def test_print_is_deterministic(source_file):
    first, second = io.StringIO(), io.StringIO()
    run_print(source_file, load_config(), first, width=40, color=True)
    run_print(source_file, load_config(), second, width=40, color=True)
    assert first.getvalue() == second.getvalue()


def test_print_width_from_lantern_yaml(source_file, tmp_path):
    """width in lantern.yaml applies when no explicit width is passed."""
    (tmp_path / "lantern.yaml").write_text("width: 30\n")
    out = io.StringIO()
    run_print(source_file, load_config(), out, color=False)
    assert "═" * 30 in out.getvalue().splitlines()
