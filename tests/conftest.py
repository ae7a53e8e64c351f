"""Root test configuration: isolate tests from the caller's LANTERN_* environment"""

import logging
import os

import pytest

from lantern.config import Settings
from lantern.core.theme.registry import builtin_registry


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Drop LANTERN_* env vars and run from an empty directory with no lantern.yaml."""
    for name in list(os.environ):
        if name.startswith("LANTERN_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
    for handler in list(logging.getLogger("lantern").handlers):
        logging.getLogger("lantern").removeHandler(handler)
        handler.close()


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="registry")
def registry_fixture():
    return builtin_registry()


@pytest.fixture(name="theme")
def theme_fixture(registry):
    return registry.get("nord", "dark")
