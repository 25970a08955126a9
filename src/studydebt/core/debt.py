"""Knowledge debt aggregation.

Collects unfinished study items (unwatched/unreviewed lectures, unread
chapters, overdue/urgent assignments, unresolved questions) into a single
weighted score and classifies it into a severity level.

Everything here is pure: callers pass complete snapshots and an explicit
``now``; nothing is read from storage or the clock.

Score:
    overdue * 50 + urgent * 30 + (unwatched_minutes / 60) * 10
    + (unread_pages / 10) * 5 + unresolved_questions * 2

Severity (on the rounded score):
    < 50 safe, < 150 warning, otherwise danger
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Literal

import structlog

logger = structlog.get_logger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

OVERDUE_WEIGHT = 50
URGENT_WEIGHT = 30
POINTS_PER_LECTURE_HOUR = 10
POINTS_PER_TEN_PAGES = 5
POINTS_PER_QUESTION = 2

WARNING_THRESHOLD = 50
DANGER_THRESHOLD = 150

# Score at which the dashboard bar is full
PROGRESS_BAR_MAX_SCORE = 300

URGENT_WINDOW = timedelta(hours=24)
COMPLETE_PROGRESS = 100

Severity = Literal["safe", "warning", "danger"]
AssignmentStatus = Literal["completed", "overdue", "urgent", "on_track"]

SEVERITY_MESSAGES: dict[str, str] = {
    "safe": "You're doing well! Keep it up 💪",
    "warning": "Things are starting to pile up. Try to focus a bit more today 📚",
    "danger": "Danger zone! Start studying right now 🔥",
}

# =============================================================================
# INPUT SNAPSHOTS
# =============================================================================


@dataclass(frozen=True)
class LectureUnit:
    """A lecture (or lecture part) to watch and review."""

    subject: str
    lec_num: int
    duration: int
    part_num: int | None = None
    is_watched: bool = False
    is_reviewed: bool = False


@dataclass(frozen=True)
class ReadingChapter:
    """A chapter of a book to read."""

    title: str
    chapter_num: int
    page_start: int
    page_end: int
    is_completed: bool = False

    @property
    def pages(self) -> int:
        return self.page_end - self.page_start + 1


@dataclass(frozen=True)
class Assignment:
    """An assignment with a deadline and an externally derived progress rate."""

    title: str
    deadline_at: datetime
    progress_rate: int = 0


# =============================================================================
# REPORT
# =============================================================================


@dataclass
class UnwatchedLectureItem:
    subject: str
    lec_num: int
    part_num: int | None
    duration: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "subject": self.subject,
            "lecNum": self.lec_num,
            "partNum": self.part_num,
            "duration": self.duration,
        }


@dataclass
class UnreadChapterItem:
    title: str
    chapter_num: int
    pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "chapterNum": self.chapter_num,
            "pages": self.pages,
        }


@dataclass
class AssignmentItem:
    title: str
    deadline_at: datetime
    progress_rate: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "deadlineAt": self.deadline_at.isoformat(),
            "progressRate": self.progress_rate,
        }


@dataclass
class DebtDetails:
    """Offending items behind each measure."""

    unwatched_lectures: list[UnwatchedLectureItem] = field(default_factory=list)
    unread_books: list[UnreadChapterItem] = field(default_factory=list)
    overdue_assignment_list: list[AssignmentItem] = field(default_factory=list)
    urgent_assignment_list: list[AssignmentItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "unwatchedLectures": [i.to_dict() for i in self.unwatched_lectures],
            "unreadBooks": [i.to_dict() for i in self.unread_books],
            "overdueAssignmentList": [i.to_dict() for i in self.overdue_assignment_list],
            "urgentAssignmentList": [i.to_dict() for i in self.urgent_assignment_list],
        }


@dataclass
class DebtReport:
    """Knowledge debt at a point in time."""

    unwatched_lecture_minutes: int
    unreviewed_lecture_minutes: int
    unread_pages: int
    overdue_assignments: int
    urgent_assignments: int
    unresolved_questions: int
    total_debt_score: int
    details: DebtDetails = field(default_factory=DebtDetails)

    @property
    def severity(self) -> Severity:
        return classify_severity(self.total_debt_score)

    @property
    def message(self) -> str:
        return severity_message(self.severity)

    @property
    def progress_percent(self) -> float:
        return progress_percent(self.total_debt_score)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the dashboard JSON shape (camelCase keys)."""
        return {
            "unwatchedLectureMinutes": self.unwatched_lecture_minutes,
            "unreviewedLectureMinutes": self.unreviewed_lecture_minutes,
            "unreadPages": self.unread_pages,
            "overdueAssignments": self.overdue_assignments,
            "urgentAssignments": self.urgent_assignments,
            "unresolvedQuestions": self.unresolved_questions,
            "totalDebtScore": self.total_debt_score,
            "severity": self.severity,
            "message": self.message,
            "progressPercent": self.progress_percent,
            "details": self.details.to_dict(),
        }


# =============================================================================
# SCORING HELPERS
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    ``round()`` would use banker's rounding (52.5 -> 52); the dashboard
    contract is 52.5 -> 53.
    """
    return math.floor(value + 0.5)


def raw_debt_score(
    overdue: int,
    urgent: int,
    unwatched_minutes: float,
    unread_pages: float,
    unresolved_questions: int,
) -> float:
    """Weighted score before rounding."""
    return (
        overdue * OVERDUE_WEIGHT
        + urgent * URGENT_WEIGHT
        + (unwatched_minutes / 60) * POINTS_PER_LECTURE_HOUR
        + (unread_pages / 10) * POINTS_PER_TEN_PAGES
        + unresolved_questions * POINTS_PER_QUESTION
    )


def classify_severity(score: int) -> Severity:
    """Map a rounded debt score to its severity level."""
    if score < WARNING_THRESHOLD:
        return "safe"
    if score < DANGER_THRESHOLD:
        return "warning"
    return "danger"


def severity_message(severity: Severity) -> str:
    return SEVERITY_MESSAGES[severity]


def progress_percent(score: int) -> float:
    """Dashboard bar fill, capped at 100."""
    return min(score / PROGRESS_BAR_MAX_SCORE * 100, 100)


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_overdue(assignment: Assignment, now: datetime) -> bool:
    return (
        _as_utc(assignment.deadline_at) < _as_utc(now)
        and assignment.progress_rate < COMPLETE_PROGRESS
    )


def is_urgent(assignment: Assignment, now: datetime) -> bool:
    now = _as_utc(now)
    deadline = _as_utc(assignment.deadline_at)
    return (
        now <= deadline < now + URGENT_WINDOW
        and assignment.progress_rate < COMPLETE_PROGRESS
    )


def classify_assignment(assignment: Assignment, now: datetime) -> AssignmentStatus:
    """Badge an assignment using the same windows as the debt score."""
    if assignment.progress_rate >= COMPLETE_PROGRESS:
        return "completed"
    if is_overdue(assignment, now):
        return "overdue"
    if is_urgent(assignment, now):
        return "urgent"
    return "on_track"


def _assignment_item(assignment: Assignment) -> AssignmentItem:
    return AssignmentItem(
        title=assignment.title,
        deadline_at=assignment.deadline_at,
        progress_rate=assignment.progress_rate,
    )


# =============================================================================
# AGGREGATION
# =============================================================================


def compute_debt(
    lectures: Iterable[LectureUnit],
    chapters: Iterable[ReadingChapter],
    assignments: Iterable[Assignment],
    unresolved_question_count: int,
    now: datetime,
) -> DebtReport:
    """Compute the knowledge debt report for one user.

    Args:
        lectures: All of the user's lectures
        chapters: All of the user's reading chapters
        assignments: All of the user's assignments
        unresolved_question_count: Number of unresolved questions
        now: Reference time for the overdue/urgent windows

    Returns:
        DebtReport with raw measures, rounded score and detail lists.
        Empty inputs give a zero score.
    """
    lectures = list(lectures)
    chapters = list(chapters)
    assignments = list(assignments)

    unwatched = [lec for lec in lectures if not lec.is_watched]
    # Reviewed-but-unwatched counts only as unwatched
    unreviewed = [lec for lec in lectures if lec.is_watched and not lec.is_reviewed]
    unread = [ch for ch in chapters if not ch.is_completed]
    overdue = [a for a in assignments if is_overdue(a, now)]
    urgent = [a for a in assignments if is_urgent(a, now)]

    unwatched_minutes = sum(lec.duration for lec in unwatched)
    unreviewed_minutes = sum(lec.duration for lec in unreviewed)
    unread_pages = sum(ch.pages for ch in unread)

    score = round_half_up(
        raw_debt_score(
            overdue=len(overdue),
            urgent=len(urgent),
            unwatched_minutes=unwatched_minutes,
            unread_pages=unread_pages,
            unresolved_questions=unresolved_question_count,
        )
    )

    details = DebtDetails(
        unwatched_lectures=[
            UnwatchedLectureItem(
                subject=lec.subject,
                lec_num=lec.lec_num,
                part_num=lec.part_num,
                duration=lec.duration,
            )
            for lec in unwatched
        ],
        unread_books=[
            UnreadChapterItem(title=ch.title, chapter_num=ch.chapter_num, pages=ch.pages)
            for ch in unread
        ],
        overdue_assignment_list=[_assignment_item(a) for a in overdue],
        urgent_assignment_list=[_assignment_item(a) for a in urgent],
    )

    report = DebtReport(
        unwatched_lecture_minutes=unwatched_minutes,
        unreviewed_lecture_minutes=unreviewed_minutes,
        unread_pages=unread_pages,
        overdue_assignments=len(overdue),
        urgent_assignments=len(urgent),
        unresolved_questions=unresolved_question_count,
        total_debt_score=score,
        details=details,
    )

    logger.debug(
        "debt.computed",
        score=score,
        severity=report.severity,
        overdue=len(overdue),
        urgent=len(urgent),
    )

    return report
