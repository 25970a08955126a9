"""Reading chapter endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from studydebt.db import chapters_repository as repo
from studydebt.web.deps import get_current_user_id
from studydebt.web.schemas import (
    ChapterCreate,
    ChapterListResponse,
    ChapterResponse,
    ChapterUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/chapters", tags=["chapters"])


@router.get("", response_model=ChapterListResponse)
async def list_chapters(
    title: str | None = None,
    user_id: str = Depends(get_current_user_id),
) -> ChapterListResponse:
    """List chapters, optionally filtered by book title."""
    chapters = [ChapterResponse.from_record(r) for r in repo.list_chapters(user_id, title=title)]
    return ChapterListResponse(chapters=chapters, count=len(chapters))


@router.post("", response_model=ChapterResponse, status_code=status.HTTP_201_CREATED)
async def create_chapter(
    chapter_data: ChapterCreate,
    user_id: str = Depends(get_current_user_id),
) -> ChapterResponse:
    """Add a chapter of a book."""
    record = repo.insert_chapter(
        user_id,
        title=chapter_data.title,
        chapter_num=chapter_data.chapter_num,
        chapter_title=chapter_data.chapter_title,
        page_start=chapter_data.page_start,
        page_end=chapter_data.page_end,
    )
    logger.info("chapters.created", user_id=user_id, chapter_id=record.id)
    return ChapterResponse.from_record(record)


@router.patch("/{chapter_id}", response_model=ChapterResponse)
async def update_chapter(
    chapter_id: str,
    update: ChapterUpdate,
    user_id: str = Depends(get_current_user_id),
) -> ChapterResponse:
    """Mark a chapter completed or change its title."""
    record = repo.update_chapter(
        user_id,
        chapter_id,
        is_completed=update.is_completed,
        chapter_title=update.chapter_title,
    )

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chapter '{chapter_id}' not found",
        )

    return ChapterResponse.from_record(record)


@router.delete("/{chapter_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_chapter(
    chapter_id: str,
    user_id: str = Depends(get_current_user_id),
) -> None:
    """Delete a chapter."""
    if not repo.delete_chapter(user_id, chapter_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Chapter '{chapter_id}' not found",
        )
