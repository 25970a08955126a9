"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization
- Per-entity repositories (lectures, chapters, assignments, questions)
- Debt snapshot loading
"""

from studydebt.db.database import get_db, init_db

__all__ = ["get_db", "init_db"]
