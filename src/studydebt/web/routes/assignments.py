"""Assignment endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from studydebt.db import assignments_repository as repo
from studydebt.utils.time_utils import utc_now
from studydebt.web.deps import get_current_user_id
from studydebt.web.schemas import (
    AssignmentCreate,
    AssignmentListResponse,
    AssignmentResponse,
    AssignmentUpdate,
    SubtaskCreate,
    SubtaskResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


def _not_found(assignment_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Assignment '{assignment_id}' not found",
    )


@router.get("", response_model=AssignmentListResponse)
async def list_assignments(
    subject: str | None = None,
    upcoming: bool = False,
    user_id: str = Depends(get_current_user_id),
) -> AssignmentListResponse:
    """List assignments by deadline; ``upcoming=true`` hides past ones."""
    now = utc_now()
    records = repo.list_assignments(
        user_id,
        subject=subject,
        upcoming_after=now if upcoming else None,
    )
    assignments = [AssignmentResponse.from_record(r, now) for r in records]
    return AssignmentListResponse(assignments=assignments, count=len(assignments))


@router.get("/{assignment_id}", response_model=AssignmentResponse)
async def get_assignment(
    assignment_id: str,
    user_id: str = Depends(get_current_user_id),
) -> AssignmentResponse:
    """Get an assignment with its subtasks."""
    record = repo.get_assignment(user_id, assignment_id)
    if record is None:
        raise _not_found(assignment_id)
    return AssignmentResponse.from_record(record, utc_now())


@router.post("", response_model=AssignmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assignment(
    assignment_data: AssignmentCreate,
    user_id: str = Depends(get_current_user_id),
) -> AssignmentResponse:
    """Create an assignment, optionally with subtasks."""
    record = repo.insert_assignment(
        user_id,
        title=assignment_data.title,
        subject=assignment_data.subject,
        deadline_at=assignment_data.deadline_at,
        subtasks=assignment_data.subtasks,
    )
    logger.info("assignments.created", user_id=user_id, assignment_id=record.id)
    return AssignmentResponse.from_record(record, utc_now())


@router.patch("/{assignment_id}", response_model=AssignmentResponse)
async def update_assignment(
    assignment_id: str,
    update: AssignmentUpdate,
    user_id: str = Depends(get_current_user_id),
) -> AssignmentResponse:
    """Change title, subject or deadline."""
    record = repo.update_assignment(
        user_id,
        assignment_id,
        title=update.title,
        subject=update.subject,
        deadline_at=update.deadline_at,
    )
    if record is None:
        raise _not_found(assignment_id)
    return AssignmentResponse.from_record(record, utc_now())


@router.delete("/{assignment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assignment(
    assignment_id: str,
    user_id: str = Depends(get_current_user_id),
) -> None:
    """Delete an assignment and its subtasks."""
    if not repo.delete_assignment(user_id, assignment_id):
        raise _not_found(assignment_id)


@router.post(
    "/{assignment_id}/subtasks",
    response_model=SubtaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_subtask(
    assignment_id: str,
    subtask_data: SubtaskCreate,
    user_id: str = Depends(get_current_user_id),
) -> SubtaskResponse:
    """Append a subtask; the assignment's progress is recomputed."""
    subtask = repo.add_subtask(user_id, assignment_id, subtask_data.content)
    if subtask is None:
        raise _not_found(assignment_id)
    return SubtaskResponse.from_record(subtask)
