"""Subtask endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status

from studydebt.db import assignments_repository as repo
from studydebt.utils.time_utils import utc_now
from studydebt.web.deps import get_current_user_id
from studydebt.web.schemas import (
    AssignmentResponse,
    SubtaskResponse,
    SubtaskUpdate,
    SubtaskUpdateResponse,
)

router = APIRouter(prefix="/api/subtasks", tags=["subtasks"])


@router.patch("/{subtask_id}", response_model=SubtaskUpdateResponse)
async def update_subtask(
    subtask_id: str,
    update: SubtaskUpdate,
    user_id: str = Depends(get_current_user_id),
) -> SubtaskUpdateResponse:
    """Toggle or edit a subtask and return the refreshed assignment."""
    subtask = repo.update_subtask(
        user_id, subtask_id, is_done=update.is_done, content=update.content
    )
    if subtask is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subtask '{subtask_id}' not found",
        )

    assignment = repo.get_assignment(user_id, subtask.assignment_id)
    assert assignment is not None

    return SubtaskUpdateResponse(
        subtask=SubtaskResponse.from_record(subtask),
        assignment=AssignmentResponse.from_record(assignment, utc_now()),
    )


@router.delete("/{subtask_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subtask(
    subtask_id: str,
    user_id: str = Depends(get_current_user_id),
) -> None:
    """Delete a subtask."""
    if not repo.delete_subtask(user_id, subtask_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Subtask '{subtask_id}' not found",
        )
