"""CLI command implementations"""

import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from lantern.config import Settings, configure_logging, load_config
from lantern.core.errors import ParseError, ThemeError
from lantern.core.pipeline import run_present, run_print
from lantern.core.theme.registry import builtin_registry
from lantern.core.validate import ValidationResult, validate_deck, validate_theme_file


ThemeOption = Annotated[Optional[str], typer.Option("--theme", "-t", help="Theme name, e.g. nord or nord:light")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config and set up logging with standard CLI error handling."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    configure_logging(settings)
    return settings


def _echo_result(label: str, result: ValidationResult) -> None:
    for err in result.errors:
        typer.echo(f"  ✗ {err}", err=True)
    for warning in result.warnings:
        typer.echo(f"  ⚠ {warning}")
    if result.is_valid:
        suffix = f" ({len(result.warnings)} warning(s))" if result.warnings else ""
        typer.echo(f"✓ {label} is valid{suffix}")
    else:
        typer.echo(f"✗ {label} has {len(result.errors)} error(s)", err=True)


def present_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown slide deck to present")],
    theme: ThemeOption = None,
    ):
    """Present a deck full-screen with keyboard navigation."""
    settings = _settings()
    try:
        run_present(path, settings, cli_theme=theme)
    except (ParseError, ThemeError) as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def print_cmd(
    path: Annotated[Path, typer.Argument(help="Markdown slide deck to print")],
    theme: ThemeOption = None,
    width: Annotated[Optional[int], typer.Option("--width", "-w", help="Output width in columns")] = None,
    color: Annotated[Optional[bool], typer.Option("--color/--no-color", help="Force ANSI colours on or off")] = None,
    ):
    """Print every slide to stdout as styled text."""
    settings = _settings(overrides={"width": width})
    stream = sys.stdout
    use_color = stream.isatty() if color is None else color
    try:
        run_print(path, settings, stream, cli_theme=theme, color=use_color)
    except (ParseError, ThemeError) as e:
        _fail(str(e))
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def check_cmd(
    path: Annotated[Path, typer.Argument(help="Deck (or, with --theme, base16 YAML scheme) to validate")],
    strict: Annotated[bool, typer.Option("--strict", help="Also warn about theme, author and empty slides")] = False,
    theme_file: Annotated[bool, typer.Option("--theme", help="Validate PATH as a base16 theme file")] = False,
    ):
    """Validate a slide deck or a base16 theme file."""
    settings = _settings()
    if theme_file:
        result = validate_theme_file(path)
    else:
        result = validate_deck(path, strict=strict, parser_config=settings.parser_config)
    _echo_result(str(path), result)
    if not result.is_valid:
        raise typer.Exit(1)


def themes_cmd():
    """List the built-in themes."""
    for name in builtin_registry().names():
        typer.echo(name)
