"""Pydantic schemas for recognition endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union
from uuid import UUID

from pydantic import Field, StrictFloat, StrictInt

from ..models.recognition import MAX_MESSAGE_LENGTH
from .common import CamelModel, StudentRef


class RecognitionCreate(CamelModel):
    """Request body for creating a recognition.

    Fields are optional here so missing values are reported by the service
    with its own message, in rule order.
    """

    sender_id: Optional[str] = None
    receiver_id: Optional[str] = None
    credits: Optional[Union[StrictInt, StrictFloat]] = Field(
        None,
        description="Whole number of credits to transfer to the receiver.",
    )
    message: Optional[str] = Field(None, max_length=MAX_MESSAGE_LENGTH)


class RecognitionRead(CamelModel):
    """Recognition response payload."""

    id: UUID
    sender_id: str
    receiver_id: str
    credits: int
    message: str
    recognition_month: str
    created_at: datetime
    sender: Optional[StudentRef] = None
    receiver: Optional[StudentRef] = None

    @classmethod
    def from_view(cls, view) -> "RecognitionRead":
        recognition = view.recognition
        return cls(
            id=recognition.recognition_id,
            sender_id=recognition.sender_id,
            receiver_id=recognition.receiver_id,
            credits=recognition.credits,
            message=recognition.message or "",
            recognition_month=recognition.recognition_month,
            created_at=recognition.created_at,
            sender=StudentRef.model_validate(view.sender) if view.sender else None,
            receiver=StudentRef.model_validate(view.receiver) if view.receiver else None,
        )


class RecognitionCreated(CamelModel):
    recognition: RecognitionRead
    sender_balance: int
    receiver_balance: int


class RecognitionDetail(CamelModel):
    recognition: RecognitionRead


class RecognitionList(CamelModel):
    recognitions: List[RecognitionRead]
    total: int
    limit: int
    offset: int

    @classmethod
    def from_page(cls, page) -> "RecognitionList":
        return cls(
            recognitions=[RecognitionRead.from_view(view) for view in page.items],
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        )
