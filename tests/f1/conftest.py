"""Fixtures for F1 tests - debt aggregation."""

from datetime import datetime, timezone

import pytest


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return datetime(2025, 3, 10, 12, 0, 0, tzinfo=timezone.utc)
