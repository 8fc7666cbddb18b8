"""Pydantic schemas for redemption workflows."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import Field, StrictFloat, StrictInt

from ..utils.credits import format_voucher_value
from .common import CamelModel


class RedemptionCreate(CamelModel):
    """Incoming payload for redeeming credits."""

    student_id: Optional[str] = None
    credits_to_redeem: Optional[Union[StrictInt, StrictFloat]] = Field(
        None,
        description="Number of credits to redeem.",
    )


class RedemptionReceipt(CamelModel):
    """Response returned after processing a redemption."""

    redemption_id: UUID
    student_id: str
    credits_redeemed: int
    voucher_value: int
    voucher_value_currency: str
    remaining_credits: int
    redeemed_at: datetime

    @classmethod
    def from_result(cls, result) -> "RedemptionReceipt":
        return cls(
            redemption_id=result.redemption.redemption_id,
            student_id=result.student_id,
            credits_redeemed=result.credits_redeemed,
            voucher_value=result.voucher_value,
            voucher_value_currency=result.voucher_value_formatted,
            remaining_credits=result.remaining_credits,
            redeemed_at=result.redeemed_at,
        )


class RedemptionData(CamelModel):
    redemption: RedemptionReceipt


class RedemptionInfo(CamelModel):
    student_id: str
    available_credits: int
    conversion_rate: int
    currency: str
    potential_voucher_value: int
    potential_voucher_value_formatted: str
    total_credits_received: int


class RedemptionRead(CamelModel):
    """Represents a stored redemption record."""

    redemption_id: UUID
    credits_redeemed: int
    voucher_value: int
    voucher_value_currency: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_model(cls, redemption) -> "RedemptionRead":
        return cls(
            redemption_id=redemption.redemption_id,
            credits_redeemed=redemption.credits_redeemed,
            voucher_value=redemption.voucher_value,
            voucher_value_currency=format_voucher_value(redemption.credits_redeemed),
            created_at=redemption.created_at,
        )


class RedemptionHistoryRead(CamelModel):
    student_id: str
    current_credits: int
    total_credits_received: int
    redemptions: List[RedemptionRead]
    total: int
    total_credits_redeemed: int
    total_voucher_value: int
