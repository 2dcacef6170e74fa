from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def clean_scpdf_env(monkeypatch):
    """Keep SCPDF_* settings from the developer's shell or .env out of tests."""
    for key in list(os.environ):
        if key.startswith("SCPDF_"):
            monkeypatch.delenv(key)
    yield
