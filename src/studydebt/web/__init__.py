"""Web API (FastAPI)."""
