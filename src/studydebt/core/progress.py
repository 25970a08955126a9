"""Assignment progress derived from subtask completion."""

from __future__ import annotations

from typing import Iterable

from studydebt.core.debt import round_half_up


def calculate_progress_rate(subtask_done_flags: Iterable[bool]) -> int | None:
    """Percentage of completed subtasks, rounded half-up.

    Args:
        subtask_done_flags: ``is_done`` of every subtask of one assignment

    Returns:
        Integer 0-100, or None when the assignment has no subtasks
        (the stored rate is then left as it is).
    """
    flags = list(subtask_done_flags)
    if not flags:
        return None

    done = sum(1 for f in flags if f)
    return round_half_up(done / len(flags) * 100)
