"""Shared fixtures for parser tests."""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def candidates_path():
    return FIXTURES_DIR / "candidates.csv"


@pytest.fixture
def preferences_path():
    return FIXTURES_DIR / "preferences.csv"


@pytest.fixture
def candidates_lines(candidates_path):
    return candidates_path.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def preferences_lines(preferences_path):
    return preferences_path.read_text(encoding="utf-8").splitlines()
