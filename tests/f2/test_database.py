"""Tests for database schema management (F2)."""

import sqlite3

import pytest

from studydebt.db.database import get_db, get_db_path, init_db


def test_init_creates_file(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "study.db"
    init_db(db_path)
    assert db_path.exists()
    assert get_db_path() == db_path


def test_init_is_idempotent(db):
    init_db(db)
    init_db(db)
    with get_db() as conn:
        tables = {
            row["name"]
            for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        }
    assert {"lectures", "reading_chapters", "assignments", "subtasks", "questions"} <= tables


def test_error_rolls_back(db):
    with pytest.raises(sqlite3.IntegrityError):
        with get_db() as conn:
            conn.execute(
                "INSERT INTO lectures (id, user_id, subject, lec_num, duration, created_at) "
                "VALUES ('a', 'u', 's', 1, 10, 'now')"
            )
            conn.execute(
                "INSERT INTO lectures (id, user_id, subject, lec_num, duration, created_at) "
                "VALUES ('a', 'u', 's', 2, 10, 'now')"
            )

    with get_db() as conn:
        count = conn.execute("SELECT COUNT(*) FROM lectures").fetchone()[0]
    assert count == 0


def test_progress_rate_check_constraint(db):
    with pytest.raises(sqlite3.IntegrityError):
        with get_db() as conn:
            conn.execute(
                "INSERT INTO assignments (id, user_id, title, deadline_at, progress_rate, created_at) "
                "VALUES ('a', 'u', 't', '2025-01-01', 150, 'now')"
            )
