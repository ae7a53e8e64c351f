"""Unit tests for core/parse.py"""

import pytest

from lantern.core.errors import FrontmatterError, ParseError
from lantern.core.models import CodeBlock, Heading, HorizontalRule, ListBlock, Paragraph, plain_text
from lantern.core.parse import parse, parse_file, split_frontmatter, split_slides


def test_parse_example_deck():
    """Front matter plus one separator yields two slides with the expected blocks."""
    deck = parse("---\ntheme: nord\n---\n# Title\n\nBody text\n\n---\n## Slide 2\n")
    assert deck.meta.theme == "nord"
    assert len(deck.slides) == 2
    first, second = deck.slides
    assert [type(b) for b in first.blocks] == [Heading, Paragraph]
    assert first.blocks[0].level == 1
    assert plain_text(first.blocks[1].spans) == "Body text"
    assert [type(b) for b in second.blocks] == [Heading]
    assert second.blocks[0].level == 2


def test_parse_empty_document_has_one_empty_slide():
    deck = parse("")
    assert len(deck.slides) == 1
    assert deck.slides[0].blocks == []


def test_slide_count_is_separators_plus_one():
    deck = parse("a\n---\nb\n---\nc\n")
    assert len(deck.slides) == 3
    assert [s.index for s in deck.slides] == [0, 1, 2]


def test_separator_with_trailing_text_is_not_a_separator():
    deck = parse("a\n--- text\nb\n")
    assert len(deck.slides) == 1


def test_separator_with_trailing_spaces_still_splits():
    deck = parse("a\n---   \nb\n")
    assert len(deck.slides) == 2


def test_separator_inside_code_fence_is_ignored():
    deck = parse("```yaml\nkey: 1\n---\nother: 2\n```\n")
    assert len(deck.slides) == 1
    code = deck.slides[0].blocks[0]
    assert isinstance(code, CodeBlock)
    assert code.language == "yaml"
    assert code.lines == ["key: 1", "---", "other: 2"]


def test_unterminated_code_fence_ends_at_slide_and_warns():
    """An unclosed fence does not swallow the next slide; a diagnostic is recorded."""
    deck = parse("# A\n\n```\nx = 1\n---\n# B\n")
    assert len(deck.slides) == 2
    code = deck.slides[0].blocks[1]
    assert isinstance(code, CodeBlock)
    assert code.lines == ["x = 1"]
    assert [d.kind for d in deck.diagnostics] == ["unterminated_block"]
    assert deck.diagnostics[0].line == 3


def test_dash_line_after_text_is_rule_not_heading():
    deck = parse("Text\n----\n")
    assert [type(b) for b in deck.slides[0].blocks] == [Paragraph, HorizontalRule]


def test_parse_is_deterministic(deck_parser):
    """Re-parsing identical input yields an identical Deck."""
    source = "# A\n\n- x\n- **y**\n\n> [!TIP]\n> hint\n\n---\n| a | b |\n|---|--:|\n| 1 | 2 |\n"
    assert deck_parser.parse(source) == deck_parser.parse(source)
    assert parse(source) == deck_parser.parse(source)


def test_sample_deck_structure(sample_deck):
    assert sample_deck.meta.author == "Ada"
    assert len(sample_deck.slides) == 3
    title, lists, code = sample_deck.slides
    assert title.title == "Title"
    assert lists.title == "Lists"
    assert code.title is None
    assert isinstance(lists.blocks[1], ListBlock)
    assert isinstance(code.blocks[0], CodeBlock)
    assert code.blocks[0].language == "python"


def test_notes_are_detached_from_visible_blocks(sample_deck):
    slide = sample_deck.slides[0]
    visible = " ".join(plain_text(b.spans) for b in slide.blocks if hasattr(b, "spans"))
    assert "breathe" not in visible
    assert plain_text(slide.notes[0].spans) == "Remember to breathe."
    assert sample_deck.has_notes
    assert not sample_deck.slides[1].has_notes


def test_crlf_line_endings():
    deck = parse("# A\r\n---\r\n# B\r\n")
    assert [s.title for s in deck.slides] == ["A", "B"]


# --- front matter ---

def test_split_frontmatter_yaml_fields_and_options():
    meta, body, line = split_frontmatter("---\ntheme: gruvbox\ndate: 2026-01-15\nfooter: hi\n---\n# Body\n")
    assert meta.theme == "gruvbox"
    assert meta.date == "2026-01-15"
    assert meta.options == {"footer": "hi"}
    assert meta.paging == "Slide %d / %d"
    assert body == "# Body\n"
    assert line == 6


def test_split_frontmatter_toml():
    meta, body, _ = split_frontmatter('+++\ntheme = "solarized:light"\nauthor = "Bo"\n+++\n# Hi\n')
    assert meta.theme == "solarized:light"
    assert meta.author == "Bo"
    assert body == "# Hi\n"


def test_split_frontmatter_absent():
    meta, body, line = split_frontmatter("# No front matter\n")
    assert meta.theme is None
    assert body == "# No front matter\n"
    assert line == 1


def test_invalid_yaml_frontmatter_raises():
    with pytest.raises(FrontmatterError, match="Invalid YAML"):
        parse("---\ntheme: [nord\n---\n# x\n")


def test_invalid_toml_frontmatter_raises():
    with pytest.raises(FrontmatterError, match="Invalid TOML"):
        parse("+++\ntheme = \n+++\n# x\n")


def test_unclosed_frontmatter_raises():
    with pytest.raises(FrontmatterError, match="Unclosed") as exc:
        parse("---\ntheme: nord\n# x\n")
    assert exc.value.line == 1


def test_non_mapping_frontmatter_raises():
    with pytest.raises(ParseError, match="expected a mapping"):
        parse("---\n- a\n- b\n---\n# x\n")


def test_wrong_field_type_raises():
    with pytest.raises(FrontmatterError, match="theme"):
        parse("---\ntheme: 3\n---\n# x\n")


def test_yaml_error_line_counts_leading_blank_lines():
    with pytest.raises(FrontmatterError, match="Invalid YAML") as exc:
        parse("\n\n---\ntheme: [unclosed\n---\n")
    assert exc.value.line == 4


def test_toml_error_reports_offending_line():
    with pytest.raises(FrontmatterError, match="Invalid TOML") as exc:
        parse('+++\ntitle = "x"\ntheme = \n+++\n')
    assert exc.value.line == 3


def test_wrong_field_type_reports_key_line():
    with pytest.raises(FrontmatterError, match="theme") as exc:
        parse("---\nauthor: Ada\ntheme: 3\n---\n")
    assert exc.value.line == 3


def test_reference_link_resolves_across_admonition():
    deck = parse("[see][id]\n\n:::note\nx\n:::\n\n[id]: http://x\n")
    span = deck.slides[0].blocks[0].spans[0]
    assert (span.text, span.link) == ("see", "http://x")


def test_reference_link_defined_inside_notes_resolves():
    deck = parse("[see][id]\n\n::: notes\n[id]: http://x\n:::\n")
    assert deck.slides[0].blocks[0].spans[0].link == "http://x"


def test_reference_link_does_not_cross_slides():
    deck = parse("[id]: http://x\n---\n[see][id]\n")
    assert all(s.link is None for s in deck.slides[1].blocks[0].spans)


def test_split_slides_tracks_start_lines():
    slides = split_slides("a\n---\nb\n", body_line=4)
    assert [(s.index, s.text, s.start_line) for s in slides] == [(0, "a", 4), (1, "b\n", 6)]


def test_parse_file(tmp_path):
    f = tmp_path / "deck.md"
    f.write_text("# One\n---\n# Two\n", encoding="utf-8")
    deck = parse_file(f)
    assert [s.title for s in deck.slides] == ["One", "Two"]
