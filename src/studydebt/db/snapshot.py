"""Load debt inputs from storage.

This is the only place that knows both the storage layout and the
aggregator's input types.
"""

from __future__ import annotations

from datetime import datetime

import structlog

from studydebt.core.debt import DebtReport
from studydebt.core.snapshot import DebtInputs, UnresolvedQuestionCounter
from studydebt.db.assignments_repository import list_assignments
from studydebt.db.chapters_repository import list_chapters
from studydebt.db.lectures_repository import list_lectures
from studydebt.db.questions_repository import count_unresolved
from studydebt.utils.time_utils import utc_now

logger = structlog.get_logger(__name__)


def load_debt_inputs(
    user_id: str,
    question_counter: UnresolvedQuestionCounter = count_unresolved,
) -> DebtInputs:
    """Read a complete snapshot of one user's debt-relevant entities.

    Args:
        user_id: Owner
        question_counter: Source of the unresolved question count

    Returns:
        DebtInputs ready for the aggregator
    """
    return DebtInputs(
        lectures=[r.to_unit() for r in list_lectures(user_id)],
        chapters=[r.to_chapter() for r in list_chapters(user_id)],
        assignments=[r.to_assignment() for r in list_assignments(user_id)],
        unresolved_question_count=question_counter(user_id),
    )


def build_debt_report(user_id: str, now: datetime | None = None) -> DebtReport:
    """Load the user's snapshot and compute the debt report.

    Args:
        user_id: Owner
        now: Reference time; defaults to the current UTC time

    Returns:
        DebtReport for the user
    """
    inputs = load_debt_inputs(user_id)
    report = inputs.compute(now or utc_now())

    logger.info(
        "debt.report_built",
        user_id=user_id,
        score=report.total_debt_score,
        severity=report.severity,
    )
    return report
