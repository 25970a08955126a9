"""Inputs handed to the debt aggregator.

The aggregator never sees the question log itself, only a count, so the
question schema can change without touching the scoring code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol

from studydebt.core.debt import (
    Assignment,
    DebtReport,
    LectureUnit,
    ReadingChapter,
    compute_debt,
)


class UnresolvedQuestionCounter(Protocol):
    """Anything that can count a user's unresolved questions."""

    def __call__(self, user_id: str) -> int: ...


@dataclass
class DebtInputs:
    """Complete snapshot of one user's debt-relevant entities."""

    lectures: list[LectureUnit] = field(default_factory=list)
    chapters: list[ReadingChapter] = field(default_factory=list)
    assignments: list[Assignment] = field(default_factory=list)
    unresolved_question_count: int = 0

    def compute(self, now: datetime) -> DebtReport:
        return compute_debt(
            lectures=self.lectures,
            chapters=self.chapters,
            assignments=self.assignments,
            unresolved_question_count=self.unresolved_question_count,
            now=now,
        )
