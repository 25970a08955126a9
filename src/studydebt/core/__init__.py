"""Core business logic.

Modules:
- debt: knowledge debt aggregation and severity classification
- progress: assignment progress from subtasks
- snapshot: aggregator inputs and the question-count adapter
"""

from studydebt.core.debt import (
    Assignment,
    DebtReport,
    LectureUnit,
    ReadingChapter,
    classify_assignment,
    classify_severity,
    compute_debt,
)
from studydebt.core.snapshot import DebtInputs

__all__ = [
    "Assignment",
    "DebtInputs",
    "DebtReport",
    "LectureUnit",
    "ReadingChapter",
    "classify_assignment",
    "classify_severity",
    "compute_debt",
]
