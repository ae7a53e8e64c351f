"""Built-in base16 palettes: five families, one dark and one light variant each"""

from typing import Literal


Variant = Literal["dark", "light"]

SLOTS: tuple[str, ...] = tuple(f"base0{d}" for d in "0123456789ABCDEF")


def _scheme(colors: str) -> dict[str, str]:
    """Build a slot -> '#rrggbb' dict from 16 whitespace separated hex values."""
    values = colors.split()
    assert len(values) == 16, f"expected 16 colours, got {len(values)}"
    return {slot: f"#{v.lower()}" for slot, v in zip(SLOTS, values)}


# family -> variant -> palette
BUILTIN_PALETTES: dict[str, dict[Variant, dict[str, str]]] = {
    "nord": {
        "dark": _scheme("""
            2E3440 3B4252 434C5E 4C566A D8DEE9 E5E9F0 ECEFF4 8FBCBB
            BF616A D08770 EBCB8B A3BE8C 88C0D0 81A1C1 B48EAD 5E81AC"""),
        "light": _scheme("""
            ECEFF4 E5E9F0 D8DEE9 9099AB 4C566A 3B4252 2E3440 242933
            BF616A D08770 C5A565 8AA872 5E9EAF 5E81AC 9A7A9A 4C6A94"""),
    },
    "catppuccin": {
        "dark": _scheme("""
            1E1E2E 181825 313244 45475A 585B70 CDD6F4 F5E0DC B4BEFE
            F38BA8 FAB387 F9E2AF A6E3A1 94E2D5 89B4FA CBA6F7 F2CDCD"""),
        "light": _scheme("""
            EFF1F5 E6E9EF CCD0DA BCC0CC ACB0BE 4C4F69 DC8A78 7287FD
            D20F39 FE640B DF8E1D 40A02B 179299 1E66F5 8839EF DD7878"""),
    },
    "gruvbox": {
        "dark": _scheme("""
            282828 3C3836 504945 665C54 BDAE93 D5C4A1 EBDBB2 FBF1C7
            FB4934 FE8019 FABD2F B8BB26 8EC07C 83A598 D3869B D65D0E"""),
        "light": _scheme("""
            FBF1C7 EBDBB2 D5C4A1 BDAE93 665C54 504945 3C3836 282828
            9D0006 AF3A03 B57614 79740E 427B58 076678 8F3F71 D65D0E"""),
    },
    "solarized": {
        "dark": _scheme("""
            002B36 073642 586E75 657B83 839496 93A1A1 EEE8D5 FDF6E3
            DC322F CB4B16 B58900 859900 2AA198 268BD2 6C71C4 D33682"""),
        "light": _scheme("""
            FDF6E3 EEE8D5 93A1A1 839496 657B83 586E75 073642 002B36
            DC322F CB4B16 B58900 859900 2AA198 268BD2 6C71C4 D33682"""),
    },
    "oxocarbon": {
        "dark": _scheme("""
            161616 262626 393939 525252 DDE1E6 F2F4F8 FFFFFF 08BDBA
            3DDBD9 78A9FF EE5396 33B1FF FF7EB6 42BE65 BE95FF 82CFFF"""),
        "light": _scheme("""
            F2F4F8 DDE1E6 C1C7CD 8D8D8D 525252 393939 161616 08BDBA
            FF7EB6 EE5396 FF6F00 0F62FE 673AB7 42BE65 BE95FF FFAB91"""),
    },
}

DEFAULT_FAMILY = "oxocarbon"
