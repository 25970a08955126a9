"""Fixtures for F2 tests - storage repositories."""

from datetime import datetime, timezone

import pytest

from studydebt.db.database import init_db


@pytest.fixture
def db(tmp_path):
    """Fresh database per test."""
    db_path = tmp_path / "test.db"
    init_db(db_path)
    return db_path


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 10, 12, 0, 0, tzinfo=timezone.utc)
