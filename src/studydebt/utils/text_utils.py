"""Human-readable formatting for dashboard output."""

from __future__ import annotations

import math
from datetime import datetime

from studydebt.utils.time_utils import ensure_utc


def format_minutes(minutes: int) -> str:
    """Format a minute count as ``2h 5m``, ``2h`` or ``5m``."""
    hours, mins = divmod(minutes, 60)
    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def format_deadline(deadline: datetime, now: datetime) -> str:
    """Relative deadline label: ``3 days overdue``, ``5 hours left``, ``2 days left``."""
    diff = (ensure_utc(deadline) - ensure_utc(now)).total_seconds()
    hours = math.floor(diff / 3600)
    days = math.floor(hours / 24)

    if diff < 0:
        return f"{abs(days)} days overdue"
    if hours < 24:
        return f"{hours} hours left"
    return f"{days} days left"


def truncate(text: str, max_len: int = 60) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
