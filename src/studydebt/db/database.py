"""SQLite database connection and schema management.

Provides connection management and schema initialization for studydebt.
Every table carries a user_id; all repository queries are scoped by it.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

import structlog

logger = structlog.get_logger(__name__)

# Default database location
DEFAULT_DB_PATH = Path("db/studydebt.db")

# Current database path (module-level, set by init_db)
_db_path: Path | None = None


def init_db(db_path: Path | None = None) -> None:
    """Initialize database with schema.

    Creates the database file and all required tables if they don't exist.

    Args:
        db_path: Path to database file. Defaults to db/studydebt.db
    """
    global _db_path
    _db_path = Path(db_path) if db_path else DEFAULT_DB_PATH

    with get_db() as conn:
        _create_schema(conn)

    logger.info("database.initialized", path=str(_db_path))


def get_db_path() -> Path:
    """Path of the database currently in use."""
    return _db_path or DEFAULT_DB_PATH


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get database connection as context manager.

    Commits on success, rolls back and re-raises on error.

    Yields:
        SQLite connection with row factory set to sqlite3.Row

    Example:
        with get_db() as conn:
            rows = conn.execute("SELECT * FROM lectures").fetchall()
    """
    db_path = get_db_path()

    # Ensure directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")

    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def _create_schema(conn: sqlite3.Connection) -> None:
    """Create database schema.

    Uses IF NOT EXISTS for idempotency.
    """
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS lectures (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            subject TEXT NOT NULL,
            lec_num INTEGER NOT NULL,
            part_num INTEGER,
            title TEXT,
            duration INTEGER NOT NULL,
            is_watched INTEGER NOT NULL DEFAULT 0,
            is_reviewed INTEGER NOT NULL DEFAULT 0,
            watched_at TEXT,
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS reading_chapters (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            chapter_num INTEGER NOT NULL,
            chapter_title TEXT,
            page_start INTEGER NOT NULL,
            page_end INTEGER NOT NULL,
            is_completed INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS assignments (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            title TEXT NOT NULL,
            subject TEXT,
            deadline_at TEXT NOT NULL,
            progress_rate INTEGER NOT NULL DEFAULT 0
                CHECK(progress_rate BETWEEN 0 AND 100),
            created_at TEXT NOT NULL
        );

        CREATE TABLE IF NOT EXISTS subtasks (
            id TEXT PRIMARY KEY,
            assignment_id TEXT NOT NULL
                REFERENCES assignments(id) ON DELETE CASCADE,
            content TEXT NOT NULL,
            is_done INTEGER NOT NULL DEFAULT 0,
            sort_order INTEGER NOT NULL DEFAULT 0
        );

        CREATE TABLE IF NOT EXISTS questions (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL,
            ref_type TEXT NOT NULL CHECK(ref_type IN ('LECTURE', 'ASSIGNMENT')),
            lecture_id TEXT REFERENCES lectures(id) ON DELETE SET NULL,
            assignment_id TEXT REFERENCES assignments(id) ON DELETE SET NULL,
            slide_num INTEGER,
            content TEXT NOT NULL,
            is_resolved INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_lectures_user ON lectures(user_id);
        CREATE INDEX IF NOT EXISTS idx_chapters_user ON reading_chapters(user_id);
        CREATE INDEX IF NOT EXISTS idx_assignments_user ON assignments(user_id);
        CREATE INDEX IF NOT EXISTS idx_subtasks_assignment ON subtasks(assignment_id);
        CREATE INDEX IF NOT EXISTS idx_questions_user ON questions(user_id, is_resolved);
        """
    )
