"""Repository functions for lectures table.

Provides CRUD operations for a user's lectures.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

import structlog

from studydebt.core.debt import LectureUnit
from studydebt.db.database import get_db
from studydebt.utils.time_utils import to_iso, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class LectureRecord:
    """Lecture record from database."""

    id: str
    user_id: str
    subject: str
    lec_num: int
    part_num: int | None
    title: str | None
    duration: int
    is_watched: bool
    is_reviewed: bool
    watched_at: str | None
    created_at: str

    def to_unit(self) -> LectureUnit:
        """Snapshot used by the debt aggregator."""
        return LectureUnit(
            subject=self.subject,
            lec_num=self.lec_num,
            part_num=self.part_num,
            duration=self.duration,
            is_watched=self.is_watched,
            is_reviewed=self.is_reviewed,
        )


def insert_lecture(
    user_id: str,
    subject: str,
    lec_num: int,
    duration: int,
    part_num: int | None = None,
    title: str | None = None,
) -> LectureRecord:
    """Insert a new lecture.

    Args:
        user_id: Owner
        subject: Course/subject name
        lec_num: Lecture number
        duration: Length in minutes
        part_num: Part number when a lecture is split
        title: Optional lecture title

    Returns:
        The created LectureRecord
    """
    return insert_lectures(
        user_id,
        [
            {
                "subject": subject,
                "lec_num": lec_num,
                "part_num": part_num,
                "title": title,
                "duration": duration,
            }
        ],
    )[0]


def insert_lectures(user_id: str, lectures: list[dict]) -> list[LectureRecord]:
    """Insert several lectures in one transaction.

    Args:
        user_id: Owner
        lectures: Dicts with subject, lec_num, duration and optional
            part_num/title

    Returns:
        Created records, in input order
    """
    created_at = to_iso(utc_now())
    records = [
        LectureRecord(
            id=uuid.uuid4().hex,
            user_id=user_id,
            subject=lec["subject"],
            lec_num=lec["lec_num"],
            part_num=lec.get("part_num"),
            title=lec.get("title"),
            duration=lec["duration"],
            is_watched=False,
            is_reviewed=False,
            watched_at=None,
            created_at=created_at,
        )
        for lec in lectures
    ]

    with get_db() as conn:
        conn.executemany(
            """
            INSERT INTO lectures (
                id, user_id, subject, lec_num, part_num, title,
                duration, is_watched, is_reviewed, watched_at, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, 0, 0, NULL, ?)
            """,
            [
                (
                    r.id,
                    r.user_id,
                    r.subject,
                    r.lec_num,
                    r.part_num,
                    r.title,
                    r.duration,
                    r.created_at,
                )
                for r in records
            ],
        )

    logger.debug("lectures.inserted", user_id=user_id, count=len(records))
    return records


def get_lecture(user_id: str, lecture_id: str) -> LectureRecord | None:
    """Get a lecture by ID, or None if missing or owned by someone else."""
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM lectures WHERE id = ? AND user_id = ?",
            (lecture_id, user_id),
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def list_lectures(user_id: str, subject: str | None = None) -> list[LectureRecord]:
    """List lectures ordered by subject, lecture number and part.

    Args:
        user_id: Owner
        subject: Only lectures of this subject, if given
    """
    query = "SELECT * FROM lectures WHERE user_id = ?"
    params: list = [user_id]
    if subject:
        query += " AND subject = ?"
        params.append(subject)
    query += " ORDER BY subject ASC, lec_num ASC, part_num ASC"

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()

    return [_row_to_record(row) for row in rows]


def update_lecture(
    user_id: str,
    lecture_id: str,
    is_watched: bool | None = None,
    is_reviewed: bool | None = None,
    title: str | None = None,
) -> LectureRecord | None:
    """Update watch/review state or title.

    Marking watched stamps watched_at; unmarking clears it.

    Returns:
        Updated record, or None if not found
    """
    sets: list[str] = []
    params: list = []

    if is_watched is not None:
        sets.append("is_watched = ?")
        params.append(int(is_watched))
        sets.append("watched_at = ?")
        params.append(to_iso(utc_now()) if is_watched else None)
    if is_reviewed is not None:
        sets.append("is_reviewed = ?")
        params.append(int(is_reviewed))
    if title is not None:
        sets.append("title = ?")
        params.append(title)

    if sets:
        with get_db() as conn:
            cursor = conn.execute(
                f"UPDATE lectures SET {', '.join(sets)} WHERE id = ? AND user_id = ?",
                (*params, lecture_id, user_id),
            )
        if cursor.rowcount == 0:
            return None
        logger.debug("lectures.updated", lecture_id=lecture_id)

    return get_lecture(user_id, lecture_id)


def delete_lecture(user_id: str, lecture_id: str) -> bool:
    """Delete lecture by ID.

    Returns:
        True if deleted, False if not found
    """
    with get_db() as conn:
        cursor = conn.execute(
            "DELETE FROM lectures WHERE id = ? AND user_id = ?",
            (lecture_id, user_id),
        )

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("lectures.deleted", lecture_id=lecture_id)

    return deleted


def _row_to_record(row) -> LectureRecord:
    """Convert database row to LectureRecord."""
    return LectureRecord(
        id=row["id"],
        user_id=row["user_id"],
        subject=row["subject"],
        lec_num=row["lec_num"],
        part_num=row["part_num"],
        title=row["title"],
        duration=row["duration"],
        is_watched=bool(row["is_watched"]),
        is_reviewed=bool(row["is_reviewed"]),
        watched_at=row["watched_at"],
        created_at=row["created_at"],
    )
