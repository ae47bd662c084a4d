"""Root conftest - shared test configuration."""

import os

import pytest

from bizflow.config import get_settings

# Ensure tests never touch a real database
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
