"""Tests for health endpoint (F3)."""

from studydebt import __version__


def test_health_ok(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == __version__
    assert "timestamp" in data


def test_health_needs_no_user(client):
    """Health is reachable without the identity header."""
    assert client.get("/health").status_code == 200
