"""Administrative endpoints for the monthly credit reset."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ApiResponse, ResetStatisticsRead, ResetSummaryRead
from ...services import monthly_reset_service

router = APIRouter(prefix="/admin/monthly-reset", tags=["admin"])


@router.post(
    "",
    response_model=ApiResponse[ResetSummaryRead],
    summary="Run the monthly reset sweep now",
)
def run_monthly_reset(db: Session = Depends(get_db)) -> ApiResponse[ResetSummaryRead]:
    """Reset every account not yet rolled into the current month.

    Safe to call repeatedly; accounts already reset are skipped.
    """

    summary = monthly_reset_service.run_monthly_reset(db)
    db.commit()
    return ApiResponse(
        message=f"Successfully reset {summary.reset_count} student(s)",
        data=ResetSummaryRead.model_validate(summary),
    )


@router.get(
    "/stats",
    response_model=ApiResponse[ResetStatisticsRead],
    summary="Monthly reset progress",
)
def get_reset_statistics(db: Session = Depends(get_db)) -> ApiResponse[ResetStatisticsRead]:
    stats = monthly_reset_service.reset_statistics(db)
    return ApiResponse(message="Reset statistics fetched", data=ResetStatisticsRead(**stats))
