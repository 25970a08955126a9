"""Fixtures for F3 tests - web API."""

import pytest
from fastapi.testclient import TestClient

from studydebt.config.app_config import clear_config_cache
from studydebt.web.api import create_app

USER = {"X-User-Id": "alice"}
OTHER_USER = {"X-User-Id": "bob"}


@pytest.fixture
def client(tmp_path):
    """Test client backed by an isolated database."""
    clear_config_cache()
    app = create_app(db_path=tmp_path / "test.db")
    yield TestClient(app)
    clear_config_cache()


@pytest.fixture
def headers():
    return dict(USER)


@pytest.fixture
def other_headers():
    return dict(OTHER_USER)
