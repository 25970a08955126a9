"""Repository functions for reading_chapters table."""

from __future__ import annotations

import uuid
from dataclasses import dataclass

import structlog

from studydebt.core.debt import ReadingChapter
from studydebt.db.database import get_db
from studydebt.utils.time_utils import to_iso, utc_now

logger = structlog.get_logger(__name__)


@dataclass
class ChapterRecord:
    """Reading chapter record from database."""

    id: str
    user_id: str
    title: str
    chapter_num: int
    chapter_title: str | None
    page_start: int
    page_end: int
    is_completed: bool
    created_at: str

    @property
    def pages(self) -> int:
        return self.page_end - self.page_start + 1

    def to_chapter(self) -> ReadingChapter:
        """Snapshot used by the debt aggregator."""
        return ReadingChapter(
            title=self.title,
            chapter_num=self.chapter_num,
            page_start=self.page_start,
            page_end=self.page_end,
            is_completed=self.is_completed,
        )


def insert_chapter(
    user_id: str,
    title: str,
    chapter_num: int,
    page_start: int,
    page_end: int,
    chapter_title: str | None = None,
) -> ChapterRecord:
    """Insert a new chapter of a book.

    Args:
        user_id: Owner
        title: Book title
        chapter_num: Chapter number
        page_start: First page (inclusive)
        page_end: Last page (inclusive)
        chapter_title: Optional chapter title

    Returns:
        The created ChapterRecord
    """
    record = ChapterRecord(
        id=uuid.uuid4().hex,
        user_id=user_id,
        title=title,
        chapter_num=chapter_num,
        chapter_title=chapter_title,
        page_start=page_start,
        page_end=page_end,
        is_completed=False,
        created_at=to_iso(utc_now()),
    )

    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO reading_chapters (
                id, user_id, title, chapter_num, chapter_title,
                page_start, page_end, is_completed, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, 0, ?)
            """,
            (
                record.id,
                record.user_id,
                record.title,
                record.chapter_num,
                record.chapter_title,
                record.page_start,
                record.page_end,
                record.created_at,
            ),
        )

    logger.debug("chapters.inserted", chapter_id=record.id, title=title)
    return record


def get_chapter(user_id: str, chapter_id: str) -> ChapterRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM reading_chapters WHERE id = ? AND user_id = ?",
            (chapter_id, user_id),
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def list_chapters(user_id: str, title: str | None = None) -> list[ChapterRecord]:
    """List chapters ordered by book title and chapter number.

    Args:
        user_id: Owner
        title: Substring filter on the book title
    """
    query = "SELECT * FROM reading_chapters WHERE user_id = ?"
    params: list = [user_id]
    if title:
        query += " AND title LIKE ?"
        params.append(f"%{title}%")
    query += " ORDER BY title ASC, chapter_num ASC"

    with get_db() as conn:
        rows = conn.execute(query, params).fetchall()

    return [_row_to_record(row) for row in rows]


def update_chapter(
    user_id: str,
    chapter_id: str,
    is_completed: bool | None = None,
    chapter_title: str | None = None,
) -> ChapterRecord | None:
    """Update completion state or chapter title.

    Returns:
        Updated record, or None if not found
    """
    sets: list[str] = []
    params: list = []

    if is_completed is not None:
        sets.append("is_completed = ?")
        params.append(int(is_completed))
    if chapter_title is not None:
        sets.append("chapter_title = ?")
        params.append(chapter_title)

    if sets:
        with get_db() as conn:
            cursor = conn.execute(
                f"UPDATE reading_chapters SET {', '.join(sets)} "
                "WHERE id = ? AND user_id = ?",
                (*params, chapter_id, user_id),
            )
        if cursor.rowcount == 0:
            return None
        logger.debug("chapters.updated", chapter_id=chapter_id)

    return get_chapter(user_id, chapter_id)


def delete_chapter(user_id: str, chapter_id: str) -> bool:
    with get_db() as conn:
        cursor = conn.execute(
            "DELETE FROM reading_chapters WHERE id = ? AND user_id = ?",
            (chapter_id, user_id),
        )

    deleted = cursor.rowcount > 0
    if deleted:
        logger.debug("chapters.deleted", chapter_id=chapter_id)

    return deleted


def _row_to_record(row) -> ChapterRecord:
    """Convert database row to ChapterRecord."""
    return ChapterRecord(
        id=row["id"],
        user_id=row["user_id"],
        title=row["title"],
        chapter_num=row["chapter_num"],
        chapter_title=row["chapter_title"],
        page_start=row["page_start"],
        page_end=row["page_end"],
        is_completed=bool(row["is_completed"]),
        created_at=row["created_at"],
    )
