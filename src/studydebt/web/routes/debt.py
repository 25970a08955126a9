"""Knowledge debt dashboard endpoint."""

from datetime import datetime

from fastapi import APIRouter, Depends

from studydebt.db.snapshot import build_debt_report
from studydebt.utils.time_utils import ensure_utc, utc_now
from studydebt.web.deps import get_current_user_id
from studydebt.web.schemas import DebtReportResponse

router = APIRouter(prefix="/api/debt", tags=["debt"])


@router.get("", response_model=DebtReportResponse)
async def get_debt(
    now: datetime | None = None,
    user_id: str = Depends(get_current_user_id),
) -> DebtReportResponse:
    """Compute the current user's knowledge debt.

    ``now`` overrides the reference time (ISO-8601); defaults to the
    server's current UTC time.
    """
    reference = ensure_utc(now) if now is not None else utc_now()
    report = build_debt_report(user_id, now=reference)
    return DebtReportResponse.from_report(report)
