"""Pipeline step functions: load, resolve theme, print and present orchestration"""

import logging
from pathlib import Path
from typing import Optional, TextIO

from lantern.config import Settings
from lantern.core.layout.engine import LayoutEngine
from lantern.core.models import Deck
from lantern.core.parse import parse_file
from lantern.core.theme.registry import Theme, ThemeRegistry, builtin_registry
from lantern.render.interactive import present
from lantern.render.static import StaticRenderer, print_deck


logger = logging.getLogger(__name__)


def load_deck(path: Path, settings: Settings) -> Deck:
    """Parse path into a Deck, logging any recovered parse diagnostics."""
    deck = parse_file(path, settings.parser_config)
    for diag in deck.diagnostics:
        logger.info("%s:%d: %s", path, diag.line, diag.message)
    return deck


def resolve_theme(deck: Deck, settings: Settings, cli_theme: Optional[str] = None,
                  registry: Optional[ThemeRegistry] = None) -> Theme:
    """Resolve the active theme: --theme, then front matter, then LANTERN_THEME, then default."""
    registry = registry or builtin_registry()
    return registry.resolve(
        cli_override=cli_theme,
        frontmatter_theme=deck.meta.theme,
        env_var=settings.theme,
        detected_background=settings.background,
    )


def run_print(
    path: Path,
    settings: Settings,
    stream: TextIO,
    cli_theme: Optional[str] = None,
    width: Optional[int] = None,
    color: bool = True,
    ) -> int:
    """Print every slide of path to stream. Returns the number of slides printed."""
    deck = load_deck(path, settings)
    theme = resolve_theme(deck, settings, cli_theme)
    print_deck(deck, theme, width or settings.width, StaticRenderer(stream, color=color), LayoutEngine())
    return len(deck.slides)


def run_present(path: Path, settings: Settings, cli_theme: Optional[str] = None) -> int:
    """Open the interactive view for path. Returns the index of the slide shown at exit."""
    deck = load_deck(path, settings)
    theme = resolve_theme(deck, settings, cli_theme)
    session = present(deck, theme, path.name, LayoutEngine())
    return session.current_index
