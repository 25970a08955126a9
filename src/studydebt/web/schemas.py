"""Pydantic schemas for Web API.

Request and response bodies use camelCase on the wire (``lecNum``,
``deadlineAt``); snake_case names are accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from studydebt.core.debt import AssignmentItem, DebtReport, classify_assignment
from studydebt.db.assignments_repository import AssignmentRecord, SubtaskRecord
from studydebt.db.chapters_repository import ChapterRecord
from studydebt.db.lectures_repository import LectureRecord
from studydebt.db.questions_repository import QuestionRecord


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# =============================================================================
# LECTURE SCHEMAS
# =============================================================================


class LectureCreate(CamelModel):
    """Request body for creating a lecture."""

    subject: str = Field(..., min_length=1, max_length=200)
    lec_num: int = Field(..., ge=0)
    part_num: int | None = Field(default=None, ge=1)
    title: str | None = Field(default=None, max_length=200)
    duration: int = Field(..., ge=1, description="Length in minutes")


class LectureBulkCreate(CamelModel):
    """Request body for registering several lectures at once."""

    lectures: list[LectureCreate] = Field(..., min_length=1)


class LectureUpdate(CamelModel):
    """Request body for updating a lecture."""

    is_watched: bool | None = None
    is_reviewed: bool | None = None
    title: str | None = Field(default=None, max_length=200)


class LectureResponse(CamelModel):
    """Response for a lecture."""

    id: str
    subject: str
    lec_num: int
    part_num: int | None
    title: str | None
    duration: int
    is_watched: bool
    is_reviewed: bool
    watched_at: str | None
    created_at: str

    @classmethod
    def from_record(cls, record: LectureRecord) -> "LectureResponse":
        return cls(
            id=record.id,
            subject=record.subject,
            lec_num=record.lec_num,
            part_num=record.part_num,
            title=record.title,
            duration=record.duration,
            is_watched=record.is_watched,
            is_reviewed=record.is_reviewed,
            watched_at=record.watched_at,
            created_at=record.created_at,
        )


class LectureListResponse(CamelModel):
    """Response for list of lectures."""

    lectures: list[LectureResponse]
    count: int


class BulkCreateResponse(CamelModel):
    count: int


# =============================================================================
# CHAPTER SCHEMAS
# =============================================================================


class ChapterCreate(CamelModel):
    """Request body for adding a book chapter."""

    title: str = Field(..., min_length=1, max_length=200)
    chapter_num: int = Field(..., ge=0)
    chapter_title: str | None = Field(default=None, max_length=200)
    page_start: int = Field(..., ge=0)
    page_end: int = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_page_range(self) -> "ChapterCreate":
        if self.page_end < self.page_start:
            raise ValueError("pageEnd must be greater than or equal to pageStart")
        return self


class ChapterUpdate(CamelModel):
    is_completed: bool | None = None
    chapter_title: str | None = Field(default=None, max_length=200)


class ChapterResponse(CamelModel):
    """Response for a chapter."""

    id: str
    title: str
    chapter_num: int
    chapter_title: str | None
    page_start: int
    page_end: int
    pages: int
    is_completed: bool
    created_at: str

    @classmethod
    def from_record(cls, record: ChapterRecord) -> "ChapterResponse":
        return cls(
            id=record.id,
            title=record.title,
            chapter_num=record.chapter_num,
            chapter_title=record.chapter_title,
            page_start=record.page_start,
            page_end=record.page_end,
            pages=record.pages,
            is_completed=record.is_completed,
            created_at=record.created_at,
        )


class ChapterListResponse(CamelModel):
    chapters: list[ChapterResponse]
    count: int


# =============================================================================
# ASSIGNMENT SCHEMAS
# =============================================================================


class AssignmentCreate(CamelModel):
    """Request body for creating an assignment."""

    title: str = Field(..., min_length=1, max_length=200)
    subject: str | None = Field(default=None, max_length=200)
    deadline_at: datetime
    subtasks: list[str] = Field(default_factory=list)


class AssignmentUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    subject: str | None = Field(default=None, max_length=200)
    deadline_at: datetime | None = None


class SubtaskCreate(CamelModel):
    content: str = Field(..., min_length=1, max_length=500)


class SubtaskUpdate(CamelModel):
    is_done: bool | None = None
    content: str | None = Field(default=None, min_length=1, max_length=500)


class SubtaskResponse(CamelModel):
    id: str
    assignment_id: str
    content: str
    is_done: bool
    order: int

    @classmethod
    def from_record(cls, record: SubtaskRecord) -> "SubtaskResponse":
        return cls(
            id=record.id,
            assignment_id=record.assignment_id,
            content=record.content,
            is_done=record.is_done,
            order=record.order,
        )


class AssignmentResponse(CamelModel):
    """Response for an assignment with its subtasks."""

    id: str
    title: str
    subject: str | None
    deadline_at: datetime
    progress_rate: int
    status: Literal["completed", "overdue", "urgent", "on_track"]
    created_at: str
    subtasks: list[SubtaskResponse]

    @classmethod
    def from_record(cls, record: AssignmentRecord, now: datetime) -> "AssignmentResponse":
        return cls(
            id=record.id,
            title=record.title,
            subject=record.subject,
            deadline_at=record.deadline_at,
            progress_rate=record.progress_rate,
            status=classify_assignment(record.to_assignment(), now),
            created_at=record.created_at,
            subtasks=[SubtaskResponse.from_record(s) for s in record.subtasks],
        )


class AssignmentListResponse(CamelModel):
    assignments: list[AssignmentResponse]
    count: int


class SubtaskUpdateResponse(CamelModel):
    """Updated subtask plus its parent with the recomputed progress."""

    subtask: SubtaskResponse
    assignment: AssignmentResponse


# =============================================================================
# QUESTION SCHEMAS
# =============================================================================


class QuestionCreate(CamelModel):
    """Request body for logging a question."""

    ref_type: Literal["LECTURE", "ASSIGNMENT"]
    lecture_id: str | None = None
    assignment_id: str | None = None
    slide_num: int | None = Field(default=None, ge=1)
    content: str = Field(..., min_length=1, max_length=2000)


class QuestionUpdate(CamelModel):
    is_resolved: bool | None = None
    content: str | None = Field(default=None, min_length=1, max_length=2000)


class QuestionResponse(CamelModel):
    id: str
    ref_type: str
    lecture_id: str | None
    assignment_id: str | None
    slide_num: int | None
    content: str
    is_resolved: bool
    created_at: str

    @classmethod
    def from_record(cls, record: QuestionRecord) -> "QuestionResponse":
        return cls(
            id=record.id,
            ref_type=record.ref_type,
            lecture_id=record.lecture_id,
            assignment_id=record.assignment_id,
            slide_num=record.slide_num,
            content=record.content,
            is_resolved=record.is_resolved,
            created_at=record.created_at,
        )


class QuestionListResponse(CamelModel):
    questions: list[QuestionResponse]
    count: int


# =============================================================================
# DEBT SCHEMAS
# =============================================================================


class UnwatchedLectureSchema(CamelModel):
    subject: str
    lec_num: int
    part_num: int | None
    duration: int


class UnreadBookSchema(CamelModel):
    title: str
    chapter_num: int
    pages: int


class DebtAssignmentSchema(CamelModel):
    title: str
    deadline_at: datetime
    progress_rate: int

    @classmethod
    def from_item(cls, item: AssignmentItem) -> "DebtAssignmentSchema":
        return cls(
            title=item.title,
            deadline_at=item.deadline_at,
            progress_rate=item.progress_rate,
        )


class DebtDetailsSchema(CamelModel):
    unwatched_lectures: list[UnwatchedLectureSchema]
    unread_books: list[UnreadBookSchema]
    overdue_assignment_list: list[DebtAssignmentSchema]
    urgent_assignment_list: list[DebtAssignmentSchema]


class DebtReportResponse(CamelModel):
    """Knowledge debt dashboard payload."""

    unwatched_lecture_minutes: int
    unreviewed_lecture_minutes: int
    unread_pages: int
    overdue_assignments: int
    urgent_assignments: int
    unresolved_questions: int
    total_debt_score: int
    severity: Literal["safe", "warning", "danger"]
    message: str
    progress_percent: float
    details: DebtDetailsSchema

    @classmethod
    def from_report(cls, report: DebtReport) -> "DebtReportResponse":
        return cls(
            unwatched_lecture_minutes=report.unwatched_lecture_minutes,
            unreviewed_lecture_minutes=report.unreviewed_lecture_minutes,
            unread_pages=report.unread_pages,
            overdue_assignments=report.overdue_assignments,
            urgent_assignments=report.urgent_assignments,
            unresolved_questions=report.unresolved_questions,
            total_debt_score=report.total_debt_score,
            severity=report.severity,
            message=report.message,
            progress_percent=report.progress_percent,
            details=DebtDetailsSchema(
                unwatched_lectures=[
                    UnwatchedLectureSchema(
                        subject=i.subject,
                        lec_num=i.lec_num,
                        part_num=i.part_num,
                        duration=i.duration,
                    )
                    for i in report.details.unwatched_lectures
                ],
                unread_books=[
                    UnreadBookSchema(title=i.title, chapter_num=i.chapter_num, pages=i.pages)
                    for i in report.details.unread_books
                ],
                overdue_assignment_list=[
                    DebtAssignmentSchema.from_item(i)
                    for i in report.details.overdue_assignment_list
                ],
                urgent_assignment_list=[
                    DebtAssignmentSchema.from_item(i)
                    for i in report.details.urgent_assignment_list
                ],
            ),
        )


# =============================================================================
# HEALTH SCHEMAS
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: str
