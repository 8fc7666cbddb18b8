"""Recognition endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ApiResponse, RecognitionCreate, RecognitionCreated, RecognitionDetail, RecognitionList, RecognitionRead
from ...services import recognition_service
from ...services.recognition_service import RecognitionView

router = APIRouter(prefix="/recognition", tags=["recognitions"])


@router.post(
    "",
    response_model=ApiResponse[RecognitionCreated],
    status_code=status.HTTP_201_CREATED,
    summary="Create a recognition",
    responses={
        201: {
            "description": "Recognition created",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Recognition created successfully",
                        "data": {
                            "recognition": {
                                "id": "44444444-4444-4444-4444-444444444444",
                                "senderId": "S1001",
                                "receiverId": "S1002",
                                "credits": 10,
                                "message": "Great work!",
                                "recognitionMonth": "2025-11",
                                "createdAt": "2025-11-12T10:15:30",
                            },
                            "senderBalance": 90,
                            "receiverBalance": 110,
                        },
                    }
                }
            },
        },
        400: {"description": "Business rule violation"},
        404: {"description": "Sender or receiver not found"},
    },
)
def create_recognition(
    payload: RecognitionCreate,
    db: Session = Depends(get_db),
) -> ApiResponse[RecognitionCreated]:
    """Transfer credits from one student to another.

    Example request body::

        {
            "senderId": "S1001",
            "receiverId": "S1002",
            "credits": 10,
            "message": "Great work!"
        }
    """

    result = recognition_service.create_recognition(
        db,
        sender_id=payload.sender_id,
        receiver_id=payload.receiver_id,
        credits=payload.credits,
        message=payload.message,
    )
    db.commit()
    return ApiResponse(
        message="Recognition created successfully",
        data=RecognitionCreated(
            recognition=RecognitionRead.from_view(RecognitionView(recognition=result.recognition)),
            sender_balance=result.sender_balance,
            receiver_balance=result.receiver_balance,
        ),
    )


@router.get(
    "/received/{student_id}",
    response_model=ApiResponse[RecognitionList],
    summary="Recognitions received by a student",
)
def list_received(
    student_id: str,
    limit: int = Query(50, ge=1, le=100, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
) -> ApiResponse[RecognitionList]:
    """Newest first; each entry carries the sender's name."""

    page = recognition_service.list_received(db, student_id, limit=limit, offset=offset)
    return ApiResponse(message="Recognitions fetched", data=RecognitionList.from_page(page))


@router.get(
    "/sent/{student_id}",
    response_model=ApiResponse[RecognitionList],
    summary="Recognitions sent by a student",
)
def list_sent(
    student_id: str,
    limit: int = Query(50, ge=1, le=100, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
) -> ApiResponse[RecognitionList]:
    """Newest first; each entry carries the receiver's name."""

    page = recognition_service.list_sent(db, student_id, limit=limit, offset=offset)
    return ApiResponse(message="Recognitions fetched", data=RecognitionList.from_page(page))


@router.get(
    "/{recognition_id}",
    response_model=ApiResponse[RecognitionDetail],
    summary="Fetch a recognition",
    responses={404: {"description": "Recognition not found"}},
)
def get_recognition(recognition_id: str, db: Session = Depends(get_db)) -> ApiResponse[RecognitionDetail]:
    view = recognition_service.get_recognition(db, recognition_id)
    return ApiResponse(message="Recognition fetched", data=RecognitionDetail(recognition=RecognitionRead.from_view(view)))
