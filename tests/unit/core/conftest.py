"""Shared fixtures for core unit tests"""

import pytest

from lantern.core.parse import DeckParser


SAMPLE_DECK = """\
---
theme: nord
author: Ada
---
# Title

Body text with **bold** and `code`.

::: notes
Remember to breathe.
:::

---
## Lists

- one
- two
  - nested

---
```python
def f():
    return 1
```
"""


@pytest.fixture(name="deck_parser")
def deck_parser_fixture():
    return DeckParser()


@pytest.fixture(name="sample_deck")
def sample_deck_fixture(deck_parser):
    return deck_parser.parse(SAMPLE_DECK)

