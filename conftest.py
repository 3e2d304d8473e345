"""
Pytest configuration for the Leitstand UI tests.

Puts src/ on the import path and isolates every test from LEITSTAND_*
variables of the developer environment.
"""

import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from leitstand_ui.config import clear_settings_cache  # noqa: E402


@pytest.fixture(autouse=True)
def reset_test_env(monkeypatch, tmp_path):
    """Reset environment variables and the settings cache before each test."""
    for key in list(os.environ):
        if key.startswith("LEITSTAND_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("LEITSTAND_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LEITSTAND_DATABASE_URL", f"sqlite:///{tmp_path / 'leitstand.db'}")
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
