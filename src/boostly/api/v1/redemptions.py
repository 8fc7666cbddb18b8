"""Endpoints for credit redemptions."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import (
    ApiResponse,
    RedemptionCreate,
    RedemptionData,
    RedemptionHistoryRead,
    RedemptionInfo,
    RedemptionRead,
    RedemptionReceipt,
)
from ...services import redemption_service

router = APIRouter(prefix="/redemption", tags=["redemptions"])


@router.post(
    "",
    response_model=ApiResponse[RedemptionData],
    summary="Redeem credits",
    responses={
        200: {
            "description": "Redemption completed",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Credits redeemed successfully",
                        "data": {
                            "redemption": {
                                "redemptionId": "88888888-8888-8888-8888-888888888888",
                                "studentId": "S1002",
                                "creditsRedeemed": 40,
                                "voucherValue": 200,
                                "voucherValueCurrency": "₹200",
                                "remainingCredits": 70,
                                "redeemedAt": "2025-11-12T14:30:00",
                            }
                        },
                    }
                }
            },
        },
        400: {"description": "Business rule violation"},
        404: {"description": "Student not found"},
    },
)
def redeem_credits(
    payload: RedemptionCreate,
    db: Session = Depends(get_db),
) -> ApiResponse[RedemptionData]:
    """Redeem available credits for vouchers at a fixed ₹5 per credit.

    Example request body::

        {
            "studentId": "S1002",
            "creditsToRedeem": 40
        }
    """

    result = redemption_service.redeem(
        db,
        student_id=payload.student_id,
        credits_to_redeem=payload.credits_to_redeem,
    )
    receipt = RedemptionReceipt.from_result(result)
    db.commit()
    return ApiResponse(message="Credits redeemed successfully", data=RedemptionData(redemption=receipt))


@router.get(
    "/info/{student_id}",
    response_model=ApiResponse[RedemptionInfo],
    summary="Redeemable balance and potential voucher value",
    responses={404: {"description": "Student not found"}},
)
def get_redemption_info(student_id: str, db: Session = Depends(get_db)) -> ApiResponse[RedemptionInfo]:
    info = redemption_service.redemption_info(db, student_id)
    # persists a lazy monthly reset, if one was applied
    db.commit()
    return ApiResponse(message="Redemption info fetched", data=RedemptionInfo(**info))


@router.get(
    "/history/{student_id}",
    response_model=ApiResponse[RedemptionHistoryRead],
    summary="Past redemptions for a student",
    responses={404: {"description": "Student not found"}},
)
def get_redemption_history(
    student_id: str,
    limit: int = Query(50, ge=1, le=100, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
) -> ApiResponse[RedemptionHistoryRead]:
    history = redemption_service.redemption_history(db, student_id, limit=limit, offset=offset)
    # persists a lazy monthly reset, if one was applied
    db.commit()
    return ApiResponse(
        message="Redemption history fetched",
        data=RedemptionHistoryRead(
            student_id=history.student.student_id,
            current_credits=history.student.credits,
            total_credits_received=history.student.total_credits_received,
            redemptions=[RedemptionRead.from_model(r) for r in history.redemptions],
            total=history.total,
            total_credits_redeemed=history.total_credits_redeemed,
            total_voucher_value=history.total_voucher_value,
        ),
    )
