"""Repository functions for assignments and subtasks tables.

An assignment's progress_rate is derived from its subtasks and is
recomputed after every subtask change. Assignments without subtasks keep
whatever rate they have.
"""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import structlog

from studydebt.core.debt import Assignment
from studydebt.core.progress import calculate_progress_rate
from studydebt.db.database import get_db
from studydebt.utils.time_utils import parse_iso, to_iso, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class SubtaskRecord:
    """Subtask record from database."""

    id: str
    assignment_id: str
    content: str
    is_done: bool
    order: int


@dataclass
class AssignmentRecord:
    """Assignment record from database, with its subtasks."""

    id: str
    user_id: str
    title: str
    subject: str | None
    deadline_at: datetime
    progress_rate: int
    created_at: str
    subtasks: list[SubtaskRecord] = field(default_factory=list)

    def to_assignment(self) -> Assignment:
        """Snapshot used by the debt aggregator."""
        return Assignment(
            title=self.title,
            deadline_at=self.deadline_at,
            progress_rate=self.progress_rate,
        )


# =============================================================================
# ASSIGNMENTS
# =============================================================================


def insert_assignment(
    user_id: str,
    title: str,
    deadline_at: datetime,
    subject: str | None = None,
    subtasks: list[str] | None = None,
) -> AssignmentRecord:
    """Insert a new assignment, optionally with initial subtasks.

    Args:
        user_id: Owner
        title: Assignment title
        deadline_at: Deadline
        subject: Optional subject name
        subtasks: Subtask contents, stored in the given order

    Returns:
        The created AssignmentRecord
    """
    assignment_id = uuid.uuid4().hex

    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO assignments (
                id, user_id, title, subject, deadline_at, progress_rate, created_at
            ) VALUES (?, ?, ?, ?, ?, 0, ?)
            """,
            (
                assignment_id,
                user_id,
                title,
                subject,
                to_iso(deadline_at),
                to_iso(utc_now()),
            ),
        )
        conn.executemany(
            """
            INSERT INTO subtasks (id, assignment_id, content, is_done, sort_order)
            VALUES (?, ?, ?, 0, ?)
            """,
            [
                (uuid.uuid4().hex, assignment_id, content, index)
                for index, content in enumerate(subtasks or [])
            ],
        )

    logger.debug(
        "assignments.inserted",
        assignment_id=assignment_id,
        subtasks=len(subtasks or []),
    )

    record = get_assignment(user_id, assignment_id)
    assert record is not None
    return record


def get_assignment(user_id: str, assignment_id: str) -> AssignmentRecord | None:
    """Get assignment with subtasks, or None if not found."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM assignments WHERE id = ? AND user_id = ?",
            (assignment_id, user_id),
        ).fetchone()
        if row is None:
            return None
        subtasks = _fetch_subtasks(conn, [assignment_id])

    return _row_to_record(row, subtasks.get(assignment_id, []))


def list_assignments(
    user_id: str,
    subject: str | None = None,
    upcoming_after: datetime | None = None,
) -> list[AssignmentRecord]:
    """List assignments ordered by deadline.

    Args:
        user_id: Owner
        subject: Only assignments of this subject, if given
        upcoming_after: Only assignments due at or after this time
    """
    query = "SELECT * FROM assignments WHERE user_id = ?"
    params: list[Any] = [user_id]
    if subject:
        query += " AND subject = ?"
        params.append(subject)
    if upcoming_after is not None:
        query += " AND deadline_at >= ?"
        params.append(to_iso(upcoming_after))
    query += " ORDER BY deadline_at ASC"

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()
        subtasks = _fetch_subtasks(conn, [row["id"] for row in rows])

    return [_row_to_record(row, subtasks.get(row["id"], [])) for row in rows]


def update_assignment(
    user_id: str,
    assignment_id: str,
    title: str | None = None,
    subject: str | None = None,
    deadline_at: datetime | None = None,
) -> AssignmentRecord | None:
    """Update title, subject or deadline.

    Returns:
        Updated record, or None if not found
    """
    sets: list[str] = []
    params: list[Any] = []

    if title is not None:
        sets.append("title = ?")
        params.append(title)
    if subject is not None:
        sets.append("subject = ?")
        params.append(subject)
    if deadline_at is not None:
        sets.append("deadline_at = ?")
        params.append(to_iso(deadline_at))

    if sets:
        with get_db() as conn:
            cursor = conn.execute(
                f"UPDATE assignments SET {', '.join(sets)} WHERE id = ? AND user_id = ?",
                (*params, assignment_id, user_id),
            )
        if cursor.rowcount == 0:
            return None
        logger.debug("assignments.updated", assignment_id=assignment_id)

    return get_assignment(user_id, assignment_id)


def delete_assignment(user_id: str, assignment_id: str) -> bool:
    """Delete assignment by ID; its subtasks go with it.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute(
            "DELETE FROM assignments WHERE id = ? AND user_id = ?",
            (assignment_id, user_id),
        )

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("assignments.deleted", assignment_id=assignment_id)

    return deleted


# =============================================================================
# SUBTASKS
# =============================================================================


def add_subtask(user_id: str, assignment_id: str, content: str) -> SubtaskRecord | None:
    """Append a subtask at the end of the assignment's list.

    Returns:
        The created SubtaskRecord, or None if the assignment is not found
    """
    with get_db() as conn:
        owner = conn.execute(
            "SELECT id FROM assignments WHERE id = ? AND user_id = ?",
            (assignment_id, user_id),
        ).fetchone()
        if owner is None:
            return None

        max_order = conn.execute(
            "SELECT MAX(sort_order) FROM subtasks WHERE assignment_id = ?",
            (assignment_id,),
        ).fetchone()[0]
        order = (max_order if max_order is not None else -1) + 1

        subtask = SubtaskRecord(
            id=uuid.uuid4().hex,
            assignment_id=assignment_id,
            content=content,
            is_done=False,
            order=order,
        )
        conn.execute(
            """
            INSERT INTO subtasks (id, assignment_id, content, is_done, sort_order)
            VALUES (?, ?, ?, 0, ?)
            """,
            (subtask.id, assignment_id, content, order),
        )
        _refresh_progress(conn, assignment_id)

    logger.debug("subtasks.inserted", assignment_id=assignment_id, order=order)
    return subtask


def update_subtask(
    user_id: str,
    subtask_id: str,
    is_done: bool | None = None,
    content: str | None = None,
) -> SubtaskRecord | None:
    """Toggle or edit a subtask.

    Returns:
        Updated record, or None if not found
    """
    with get_db() as conn:
        row = _owned_subtask_row(conn, user_id, subtask_id)
        if row is None:
            return None

        if is_done is not None:
            conn.execute(
                "UPDATE subtasks SET is_done = ? WHERE id = ?",
                (int(is_done), subtask_id),
            )
        if content is not None:
            conn.execute(
                "UPDATE subtasks SET content = ? WHERE id = ?",
                (content, subtask_id),
            )
        _refresh_progress(conn, row["assignment_id"])

        row = conn.execute(
            "SELECT * FROM subtasks WHERE id = ?", (subtask_id,)
        ).fetchone()

    logger.debug("subtasks.updated", subtask_id=subtask_id)
    return _row_to_subtask(row)


def delete_subtask(user_id: str, subtask_id: str) -> bool:
    """Delete a subtask and recompute the parent's progress.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        row = _owned_subtask_row(conn, user_id, subtask_id)
        if row is None:
            return False

        conn.execute("DELETE FROM subtasks WHERE id = ?", (subtask_id,))
        _refresh_progress(conn, row["assignment_id"])

    logger.debug("subtasks.deleted", subtask_id=subtask_id)
    return True


# =============================================================================
# HELPERS
# =============================================================================


def _owned_subtask_row(conn: sqlite3.Connection, user_id: str, subtask_id: str):
    return conn.execute(
        """
        SELECT s.* FROM subtasks s
        JOIN assignments a ON a.id = s.assignment_id
        WHERE s.id = ? AND a.user_id = ?
        """,
        (subtask_id, user_id),
    ).fetchone()


def _refresh_progress(conn: sqlite3.Connection, assignment_id: str) -> None:
    """Recompute progress_rate from subtasks inside an open transaction."""
    rows = conn.execute(
        "SELECT is_done FROM subtasks WHERE assignment_id = ?",
        (assignment_id,),
    ).fetchall()

    rate = calculate_progress_rate(bool(r["is_done"]) for r in rows)
    if rate is None:
        return

    conn.execute(
        "UPDATE assignments SET progress_rate = ? WHERE id = ?",
        (rate, assignment_id),
    )
    logger.debug("assignments.progress_updated", assignment_id=assignment_id, rate=rate)


def _fetch_subtasks(
    conn: sqlite3.Connection, assignment_ids: list[str]
) -> dict[str, list[SubtaskRecord]]:
    if not assignment_ids:
        return {}

    placeholders = ", ".join("?" for _ in assignment_ids)
    rows = conn.execute(
        f"SELECT * FROM subtasks WHERE assignment_id IN ({placeholders}) "
        "ORDER BY sort_order ASC",
        assignment_ids,
    ).fetchall()

    result: dict[str, list[SubtaskRecord]] = {}
    for row in rows:
        result.setdefault(row["assignment_id"], []).append(_row_to_subtask(row))
    return result


def _row_to_subtask(row) -> SubtaskRecord:
    return SubtaskRecord(
        id=row["id"],
        assignment_id=row["assignment_id"],
        content=row["content"],
        is_done=bool(row["is_done"]),
        order=row["sort_order"],
    )


def _row_to_record(row, subtasks: list[SubtaskRecord]) -> AssignmentRecord:
    """Convert database row to AssignmentRecord."""
    return AssignmentRecord(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        subject=row["subject"],
        deadline_at=parse_iso(row["deadline_at"]),
        progress_rate=row["progress_rate"],
        created_at=row["created_at"],
        subtasks=subtasks,
    )
