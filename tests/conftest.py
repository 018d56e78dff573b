"""Pytest configuration and fixtures."""

import os
from pathlib import Path

import pytest

import fountainkit.config.settings as settings_module
from fountainkit.config import FountainKitSettings, reset_settings, set_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with default settings, unaffected by the host environment.

    Config files in the user's home or the working directory and any
    FOUNTAINKIT_ variables would otherwise leak into the tests.
    """
    for name in list(os.environ):
        if name.startswith("FOUNTAINKIT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    set_settings(FountainKitSettings())
    yield
    reset_settings()
    settings_module._config_paths_cache = None


@pytest.fixture
def fixtures_dir():
    """Directory holding sample .fountain files."""
    return FIXTURES_DIR


@pytest.fixture
def structured_script():
    """Script with title page, chapters, groups, a note and OVER BLACK."""
    return (FIXTURES_DIR / "structured.fountain").read_text(encoding="utf-8")


@pytest.fixture
def structured_script_path():
    return FIXTURES_DIR / "structured.fountain"


@pytest.fixture
def flat_script():
    """Script with scenes but no section headings at all."""
    return (FIXTURES_DIR / "flat.fountain").read_text(encoding="utf-8")
