"""Question log endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from studydebt.db import questions_repository as repo
from studydebt.db.assignments_repository import get_assignment
from studydebt.db.lectures_repository import get_lecture
from studydebt.db.questions_repository import QuestionReferenceError
from studydebt.web.deps import get_current_user_id
from studydebt.web.schemas import (
    QuestionCreate,
    QuestionListResponse,
    QuestionResponse,
    QuestionUpdate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("", response_model=QuestionListResponse)
async def list_questions(
    ref_type: str | None = Query(default=None, alias="refType"),
    lecture_id: str | None = Query(default=None, alias="lectureId"),
    assignment_id: str | None = Query(default=None, alias="assignmentId"),
    unresolved: bool = False,
    user_id: str = Depends(get_current_user_id),
) -> QuestionListResponse:
    """List questions, newest first."""
    records = repo.list_questions(
        user_id,
        ref_type=ref_type,
        lecture_id=lecture_id,
        assignment_id=assignment_id,
        unresolved_only=unresolved,
    )
    questions = [QuestionResponse.from_record(r) for r in records]
    return QuestionListResponse(questions=questions, count=len(questions))


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    question_data: QuestionCreate,
    user_id: str = Depends(get_current_user_id),
) -> QuestionResponse:
    """Log a question against a lecture or an assignment."""
    if question_data.lecture_id and get_lecture(user_id, question_data.lecture_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lecture '{question_data.lecture_id}' not found",
        )
    if (
        question_data.assignment_id
        and get_assignment(user_id, question_data.assignment_id) is None
    ):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Assignment '{question_data.assignment_id}' not found",
        )

    try:
        record = repo.insert_question(
            user_id,
            ref_type=question_data.ref_type,
            content=question_data.content,
            lecture_id=question_data.lecture_id,
            assignment_id=question_data.assignment_id,
            slide_num=question_data.slide_num,
        )
    except QuestionReferenceError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    logger.info("questions.created", user_id=user_id, question_id=record.id)
    return QuestionResponse.from_record(record)


@router.patch("/{question_id}", response_model=QuestionResponse)
async def update_question(
    question_id: str,
    update: QuestionUpdate,
    user_id: str = Depends(get_current_user_id),
) -> QuestionResponse:
    """Resolve, reopen or edit a question."""
    record = repo.update_question(
        user_id, question_id, is_resolved=update.is_resolved, content=update.content
    )
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question '{question_id}' not found",
        )
    return QuestionResponse.from_record(record)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    user_id: str = Depends(get_current_user_id),
) -> None:
    """Delete a question."""
    if not repo.delete_question(user_id, question_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Question '{question_id}' not found",
        )
