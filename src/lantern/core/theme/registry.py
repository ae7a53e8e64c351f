"""Theme type, built-in registry and active-theme resolution"""

import logging
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict

from lantern.core.errors import ThemeNotFoundError
from lantern.core.extract.admonitions import AdmonitionKind
from lantern.core.theme.palettes import BUILTIN_PALETTES, DEFAULT_FAMILY, Variant
from lantern.core.theme.roles import ADMONITION_SLOTS, ROLE_MAP, heading_role


logger = logging.getLogger(__name__)

VARIANTS: tuple[Variant, ...] = ("dark", "light")

# Family-specific spellings accepted in addition to name, name:variant and name-variant.
NAME_ALIASES: dict[str, tuple[str, Variant]] = {
    "catppuccin-mocha": ("catppuccin", "dark"),
    "catppuccin-latte": ("catppuccin", "light"),
}


class Theme(BaseModel):
    """A resolved base16 palette; role lookups go through the shared ROLE_MAP."""
    model_config = ConfigDict(frozen=True)

    name:    str                # family name, e.g. "nord"
    variant: Variant
    palette: dict[str, str]     # base00..base0F -> "#rrggbb"

    @property
    def label(self) -> str:
        return f"{self.name}:{self.variant}"

    def slot(self, slot: str) -> str:
        return self.palette[slot]

    def role(self, role: str) -> str:
        return self.palette[ROLE_MAP[role]]

    def heading(self, level: int) -> str:
        return self.role(heading_role(level))

    def admonition(self, kind: AdmonitionKind) -> str:
        return self.palette[ADMONITION_SLOTS[kind]]


def _split_name(name: str) -> tuple[str, Optional[str]]:
    """Split 'family', 'family:variant' or 'family-variant' into (family, variant|None)."""
    key = name.strip().lower()
    if key in NAME_ALIASES:
        return NAME_ALIASES[key]
    if ":" in key:
        family, _, variant = key.partition(":")
        return family.strip(), variant.strip()
    for variant in VARIANTS:
        suffix = f"-{variant}"
        if key.endswith(suffix) and key[:-len(suffix)] in BUILTIN_PALETTES:
            return key[:-len(suffix)], variant
    return key, None


class ThemeRegistry:
    """Read-only table of the built-in themes, built once per process."""

    def __init__(self, palettes: dict[str, dict[str, dict[str, str]]]):
        self._themes: dict[tuple[str, str], Theme] = {
            (family, variant): Theme(name=family, variant=variant, palette=dict(palette))
            for family, variants in palettes.items()
            for variant, palette in variants.items()
        }

    def names(self) -> list[str]:
        """Return every built-in theme as 'family:variant', sorted."""
        return sorted(f"{f}:{v}" for f, v in self._themes)

    def is_known(self, name: str) -> bool:
        try:
            self.get(name, "dark")
        except ThemeNotFoundError:
            return False
        return True

    def get(self, name: str, background: Variant = "dark") -> Theme:
        """Look up a theme by name (case-insensitive); an explicit variant beats background."""
        family, variant = _split_name(name)
        variant = variant or background
        theme = self._themes.get((family, variant))
        if theme is None:
            raise ThemeNotFoundError(name, self.names())
        return theme

    def resolve(
        self,
        cli_override: Optional[str] = None,
        frontmatter_theme: Optional[str] = None,
        env_var: Optional[str] = None,
        detected_background: Variant = "dark",
        ) -> Theme:
        """Pick the active theme: CLI override, then front matter, then environment, then default."""
        for source, name in (("cli", cli_override), ("frontmatter", frontmatter_theme), ("env", env_var)):
            if name and name.strip():
                theme = self.get(name, detected_background)
                logger.info("theme %s resolved from %s", theme.label, source)
                return theme
        theme = self.get(DEFAULT_FAMILY, detected_background)
        logger.info("theme %s resolved from default", theme.label)
        return theme


@lru_cache(maxsize=1)
def builtin_registry() -> ThemeRegistry:
    """Return the process-wide registry of built-in themes."""
    return ThemeRegistry(BUILTIN_PALETTES)
