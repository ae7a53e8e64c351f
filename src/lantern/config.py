"""Application configuration: settings schema, lantern.yaml loader and logging setup"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "lantern.yaml"
ENV_PREFIX = "LANTERN_"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseModel):
    theme:         Optional[str] = Field(default=None, description="Theme used when neither --theme nor front matter sets one")
    background:    Literal["dark", "light"] = Field(default="dark", description="Variant picked for themes without an explicit suffix")
    width:         int = Field(default=80, ge=20, description="Column width for static printing")
    parser_config: str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    log_level:     str = Field(default="WARNING", description="Level for the lantern logger")
    log_file:      Optional[str] = Field(default=None, description="Write logs here; logging is silent when unset")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from lantern.yaml, then LANTERN_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)


def configure_logging(settings: Settings) -> logging.Logger:
    """Route the lantern logger to settings.log_file, or silence it.

    Nothing is ever written to the terminal so the presentation screen stays clean.
    """
    logger = logging.getLogger("lantern")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if settings.log_file:
        handler: logging.Handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.WARNING))
    return logger
