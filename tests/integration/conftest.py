"""Integration test configuration."""

import pytest

from tests.harness import TEST_DATABASE_URL


@pytest.fixture(autouse=True)
def _database_env(monkeypatch):
    """Point Settings at the test database."""
    if TEST_DATABASE_URL:
        monkeypatch.setenv("DATABASE__URL", TEST_DATABASE_URL)
