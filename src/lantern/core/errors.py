"""Parse and theme error types"""


class ParseError(Exception):
    """A problem found while turning source text into a Deck."""

    def __init__(self, line: int, message: str):
        self.line = line
        self.message = message
        super().__init__(f"line {line}: {message}")


class FrontmatterError(ParseError):
    """Malformed or unclosed front matter; fatal for the whole document."""


class UnterminatedBlockError(ParseError):
    """A code, notes or admonition fence that never closes before the end of its slide.

    Never raised by the parser: instances are logged and recorded as diagnostics
    while the block is recovered to the end of the slide.
    """

    def __init__(self, line: int, construct: str):
        self.construct = construct
        super().__init__(line, f"unterminated {construct} (consumed to end of slide)")


class ThemeError(Exception):
    """Base class for theme lookup and validation failures."""


class ThemeNotFoundError(ThemeError):
    """No built-in theme matches the requested name."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        msg = f"Theme '{name}' not found"
        if available:
            msg += f". Available themes: {', '.join(available)}"
        super().__init__(msg)
