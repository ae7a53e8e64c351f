"""Deck and base16 theme-file validation for the check command"""

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from lantern.core.errors import ParseError
from lantern.core.parse import parse
from lantern.core.theme.palettes import SLOTS
from lantern.core.theme.registry import ThemeRegistry, builtin_registry


HEX_RE = re.compile(r'^[0-9a-fA-F]{6}$')


@dataclass
class ValidationResult:
    errors:   list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_deck(path: Path, strict: bool = False, parser_config: str = 'gfm-like',
                  registry: ThemeRegistry | None = None) -> ValidationResult:
    """Check that a deck parses; strict mode also reports theme, author and empty-slide warnings."""
    result = ValidationResult()
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        result.errors.append(f"Failed to read file '{path}': {e}")
        return result

    try:
        deck = parse(text, parser_config)
    except ParseError as e:
        result.errors.append(f"Parse error: {e}")
        return result

    for diag in deck.diagnostics:
        result.warnings.append(f"line {diag.line}: {diag.message}")

    if strict:
        registry = registry or builtin_registry()
        theme = deck.meta.theme
        if theme and not registry.is_known(theme):
            result.warnings.append(
                f"Theme '{theme}' is not a built-in theme. Available themes: {', '.join(registry.names())}")
        if not deck.meta.author:
            result.warnings.append("No author specified in front matter")
        for slide in deck.slides:
            if not slide.blocks:
                result.warnings.append(f"Slide {slide.index + 1} is empty")
    return result


def validate_theme_file(path: Path) -> ValidationResult:
    """Check a base16 YAML scheme: system, name, variant and 16 six-digit hex colours."""
    result = ValidationResult()
    try:
        scheme = yaml.safe_load(path.read_text(encoding='utf-8'))
    except OSError as e:
        result.errors.append(f"Failed to read theme file '{path}': {e}")
        return result
    except yaml.YAMLError as e:
        result.errors.append(f"Failed to parse YAML: {e}")
        return result
    if not isinstance(scheme, dict):
        result.errors.append("Theme file must be a YAML mapping")
        return result

    system = scheme.get('system')
    if system != 'base16':
        result.errors.append(f"Invalid system '{system}', expected 'base16'")
    if not str(scheme.get('name') or '').strip():
        result.errors.append("Theme name is empty")
    if not str(scheme.get('author') or '').strip():
        result.warnings.append("Theme author is empty")
    variant = scheme.get('variant')
    if variant not in ('dark', 'light'):
        result.warnings.append(f"Variant '{variant}' should be 'dark' or 'light'")

    palette = scheme.get('palette')
    if not isinstance(palette, dict):
        result.errors.append("Missing 'palette' mapping")
        return result
    lowered = {str(k).lower(): v for k, v in palette.items()}
    for slot in SLOTS:
        value = lowered.get(slot.lower())
        if value is None:
            result.errors.append(f"Color {slot} is missing")
            continue
        hex_value = str(value).lstrip('#')
        if len(hex_value) != 6:
            result.errors.append(f"Color {slot} has invalid length {len(hex_value)} (expected 6 hex digits)")
        elif not HEX_RE.match(hex_value):
            result.errors.append(f"Color {slot} contains invalid hex characters")
    return result
