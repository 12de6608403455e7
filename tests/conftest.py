from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep host ``VERSE_IMAGES_*`` variables from leaking into GeneratorConfig."""
    for name in list(os.environ):
        if name.startswith("VERSE_IMAGES_"):
            monkeypatch.delenv(name, raising=False)
