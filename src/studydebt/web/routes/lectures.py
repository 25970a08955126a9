"""Lecture endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from studydebt.db import lectures_repository as repo
from studydebt.web.deps import get_current_user_id
from studydebt.web.schemas import (
    BulkCreateResponse,
    LectureBulkCreate,
    LectureCreate,
    LectureListResponse,
    LectureResponse,
    LectureUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/lectures", tags=["lectures"])


@router.get("", response_model=LectureListResponse)
async def list_lectures(
    subject: str | None = None,
    user_id: str = Depends(get_current_user_id),
) -> LectureListResponse:
    """List lectures, optionally for one subject."""
    records = repo.list_lectures(user_id, subject=subject)
    lectures = [LectureResponse.from_record(r) for r in records]
    return LectureListResponse(lectures=lectures, count=len(lectures))


@router.post("", response_model=LectureResponse, status_code=status.HTTP_201_CREATED)
async def create_lecture(
    lecture_data: LectureCreate,
    user_id: str = Depends(get_current_user_id),
) -> LectureResponse:
    """Register a single lecture."""
    record = repo.insert_lecture(
        user_id,
        subject=lecture_data.subject,
        lec_num=lecture_data.lec_num,
        part_num=lecture_data.part_num,
        title=lecture_data.title,
        duration=lecture_data.duration,
    )
    logger.info("lectures.created", user_id=user_id, lecture_id=record.id)
    return LectureResponse.from_record(record)


@router.post(
    "/bulk", response_model=BulkCreateResponse, status_code=status.HTTP_201_CREATED
)
async def create_lectures_bulk(
    bulk_data: LectureBulkCreate,
    user_id: str = Depends(get_current_user_id),
) -> BulkCreateResponse:
    """Register several lectures (e.g. a whole course) at once."""
    records = repo.insert_lectures(
        user_id, [lec.model_dump() for lec in bulk_data.lectures]
    )
    logger.info("lectures.bulk_created", user_id=user_id, count=len(records))
    return BulkCreateResponse(count=len(records))


@router.patch("/{lecture_id}", response_model=LectureResponse)
async def update_lecture(
    lecture_id: str,
    update: LectureUpdate,
    user_id: str = Depends(get_current_user_id),
) -> LectureResponse:
    """Mark a lecture watched/reviewed or rename it."""
    record = repo.update_lecture(
        user_id,
        lecture_id,
        is_watched=update.is_watched,
        is_reviewed=update.is_reviewed,
        title=update.title,
    )

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lecture '{lecture_id}' not found",
        )

    return LectureResponse.from_record(record)


@router.delete("/{lecture_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lecture(
    lecture_id: str,
    user_id: str = Depends(get_current_user_id),
) -> None:
    """Delete a lecture."""
    if not repo.delete_lecture(user_id, lecture_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lecture '{lecture_id}' not found",
        )
