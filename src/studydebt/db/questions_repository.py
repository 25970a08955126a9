"""Repository functions for questions table.

A question is logged against either a lecture or an assignment.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Literal

import structlog

from studydebt.db.database import get_db
from studydebt.utils.time_utils import to_iso, utc_now

logger = structlog.get_logger(__name__)

RefType = Literal["LECTURE", "ASSIGNMENT"]


class QuestionReferenceError(Exception):
    """Raised when a question lacks the id its ref_type requires."""

    def __init__(self, ref_type: str):
        self.ref_type = ref_type
        field_name = "lectureId" if ref_type == "LECTURE" else "assignmentId"
        super().__init__(f"{field_name} is required for {ref_type} type")


@dataclass
class QuestionRecord:
    """Question record from database."""

    id: str
    user_id: str
    ref_type: str
    lecture_id: str | None
    assignment_id: str | None
    slide_num: int | None
    content: str
    is_resolved: bool
    created_at: str


def insert_question(
    user_id: str,
    ref_type: RefType,
    content: str,
    lecture_id: str | None = None,
    assignment_id: str | None = None,
    slide_num: int | None = None,
) -> QuestionRecord:
    """Insert a new question.

    Args:
        user_id: Owner
        ref_type: 'LECTURE' or 'ASSIGNMENT'
        content: Question text
        lecture_id: Required when ref_type is LECTURE
        assignment_id: Required when ref_type is ASSIGNMENT
        slide_num: Optional slide reference

    Returns:
        The created QuestionRecord

    Raises:
        QuestionReferenceError: If the id matching ref_type is missing
    """
    if ref_type == "LECTURE" and not lecture_id:
        raise QuestionReferenceError(ref_type)
    if ref_type == "ASSIGNMENT" and not assignment_id:
        raise QuestionReferenceError(ref_type)

    record = QuestionRecord(
        id=uuid.uuid4().hex,
        user_id=user_id,
        ref_type=ref_type,
        lecture_id=lecture_id,
        assignment_id=assignment_id,
        slide_num=slide_num,
        content=content,
        is_resolved=False,
        created_at=to_iso(utc_now()),
    )

    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO questions (
                id, user_id, ref_type, lecture_id, assignment_id,
                slide_num, content, is_resolved, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?)
            """,
            (
                record.id,
                record.user_id,
                record.ref_type,
                record.lecture_id,
                record.assignment_id,
                record.slide_num,
                record.content,
                record.created_at,
            ),
        )

    logger.debug("questions.inserted", question_id=record.id, ref_type=ref_type)
    return record


def get_question(user_id: str, question_id: str) -> QuestionRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM questions WHERE id = ? AND user_id = ?",
            (question_id, user_id),
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def list_questions(
    user_id: str,
    ref_type: str | None = None,
    lecture_id: str | None = None,
    assignment_id: str | None = None,
    unresolved_only: bool = False,
) -> list[QuestionRecord]:
    """List questions, newest first."""
    query = "SELECT * FROM questions WHERE user_id = ?"
    params: list[Any] = [user_id]
    if ref_type:
        query += " AND ref_type = ?"
        params.append(ref_type)
    if lecture_id:
        query += " AND lecture_id = ?"
        params.append(lecture_id)
    if assignment_id:
        query += " AND assignment_id = ?"
        params.append(assignment_id)
    if unresolved_only:
        query += " AND is_resolved = 0"
    query += " ORDER BY created_at DESC, rowid DESC"

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()

    return [_row_to_record(row) for row in rows]


def count_unresolved(user_id: str) -> int:
    """Number of the user's unresolved questions."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT COUNT(*) FROM questions WHERE user_id = ? AND is_resolved = 0",
            (user_id,),
        ).fetchone()

    return row[0]


def update_question(
    user_id: str,
    question_id: str,
    is_resolved: bool | None = None,
    content: str | None = None,
) -> QuestionRecord | None:
    """Resolve/reopen or edit a question.

    Returns:
        Updated record, or None if not found
    """
    sets: list[str] = []
    params: list[Any] = []

    if is_resolved is not None:
        sets.append("is_resolved = ?")
        params.append(int(is_resolved))
    if content is not None:
        sets.append("content = ?")
        params.append(content)

    if sets:
        with get_db() as conn:
            cursor = conn.execute(
                f"UPDATE questions SET {', '.join(sets)} WHERE id = ? AND user_id = ?",
                (*params, question_id, user_id),
            )
        if cursor.rowcount == 0:
            return None
        logger.debug("questions.updated", question_id=question_id)

    return get_question(user_id, question_id)


def delete_question(user_id: str, question_id: str) -> bool:
    with get_db() as conn:
        cursor = conn.execute(
            "DELETE FROM questions WHERE id = ? AND user_id = ?",
            (question_id, user_id),
        )

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("questions.deleted", question_id=question_id)

    return deleted


def _row_to_record(row) -> QuestionRecord:
    """Convert database row to QuestionRecord."""
    return QuestionRecord(
        id=row["id"],
        user_id=row["user_id"],
        ref_type=row["ref_type"],
        lecture_id=row["lecture_id"],
        assignment_id=row["assignment_id"],
        slide_num=row["slide_num"],
        content=row["content"],
        is_resolved=bool(row["is_resolved"]),
        created_at=row["created_at"],
    )
