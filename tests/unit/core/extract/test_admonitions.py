"""Unit tests for core/extract/admonitions.py"""

import pytest

from lantern.core.extract.admonitions import AdmonitionKind, resolve_kind
from lantern.core.layout.engine import layout
from lantern.core.models import Admonition, Blockquote, plain_text
from lantern.core.parse import parse


@pytest.mark.parametrize("spelling,kind", [
    ("note", AdmonitionKind.note),
    ("NOTE", AdmonitionKind.note),
    ("Tip", AdmonitionKind.tip),
    ("hint", AdmonitionKind.tip),
    ("important", AdmonitionKind.tip),
    ("caution", AdmonitionKind.warning),
    ("attention", AdmonitionKind.warning),
    ("error", AdmonitionKind.danger),
    ("faq", AdmonitionKind.question),
    ("done", AdmonitionKind.success),
    ("tldr", AdmonitionKind.abstract),
    ("missing", AdmonitionKind.failure),
    ("bug", AdmonitionKind.bug),
])
def test_resolve_kind(spelling, kind):
    assert resolve_kind(spelling) is kind


@pytest.mark.parametrize("spelling", ["", "  ", "sparkles", "notes"])
def test_resolve_kind_unknown(spelling):
    assert resolve_kind(spelling) is None


def test_every_kind_has_icon_and_display_name():
    for kind in AdmonitionKind:
        assert kind.icon
        assert kind.display_name == kind.value.capitalize()


def test_fence_and_callout_spellings_normalize_to_same_kind():
    deck = parse(":::caution\nfence body\n:::\n\n> [!WARNING]\n> callout body\n")
    fence, callout = deck.slides[0].blocks
    assert isinstance(fence, Admonition) and isinstance(callout, Admonition)
    assert fence.kind == callout.kind == AdmonitionKind.warning
    assert plain_text(fence.blocks[0].spans) == "fence body"
    assert plain_text(callout.blocks[0].spans) == "callout body"
    assert deck.diagnostics == []


def test_caution_and_warning_callouts_share_kind_and_border(theme):
    slide = parse("> [!CAUTION]\n> a\n\n> [!WARNING]\n> b\n").slides[0]
    caution, warning = slide.blocks
    assert isinstance(caution, Admonition) and isinstance(warning, Admonition)
    assert caution.kind == warning.kind == AdmonitionKind.warning
    tops = [row for row in layout(slide, theme, 30) if row.text.startswith("╭")]
    assert len(tops) == 2
    assert tops[0].segments[0].style.fg == tops[1].segments[0].style.fg == theme.admonition(AdmonitionKind.warning)


def test_admonition_title_is_kept():
    deck = parse(":::tip Pro tip\nUse **bold**.\n:::\n")
    [adm] = deck.slides[0].blocks
    assert adm.title == "Pro tip"


def test_admonition_body_holds_nested_blocks():
    deck = parse(":::note\n- a\n- b\n\n```sh\nls\n```\n:::\n")
    [adm] = deck.slides[0].blocks
    assert [b.type for b in adm.blocks] == ["list", "code"]


def test_unknown_fence_renders_as_blockquote():
    deck = parse(":::sparkles\nshiny\n:::\n")
    [block] = deck.slides[0].blocks
    assert isinstance(block, Blockquote)
    assert plain_text(block.blocks[0].spans) == "shiny"
    assert [d.kind for d in deck.diagnostics] == ["unknown_admonition"]


def test_unknown_callout_renders_as_blockquote_with_marker_text():
    deck = parse("> [!SPARKLES] Hi\n> body\n")
    [block] = deck.slides[0].blocks
    assert isinstance(block, Blockquote)
    assert plain_text(block.blocks[0].spans) == "[!SPARKLES] Hi body"
    assert [d.kind for d in deck.diagnostics] == ["unknown_admonition"]
