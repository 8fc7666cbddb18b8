"""Endpoints for recognition endorsements."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ApiResponse, EndorsementCheck, EndorsementCreate, EndorsementDetail, EndorsementList, EndorsementRead
from ...services import endorsement_service

router = APIRouter(prefix="/endorsement", tags=["endorsements"])


@router.post(
    "",
    response_model=ApiResponse[EndorsementDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Create an endorsement",
    responses={
        201: {
            "description": "Endorsement created",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Endorsement created successfully",
                        "data": {
                            "endorsement": {
                                "id": "66666666-6666-6666-6666-666666666666",
                                "recognitionId": "44444444-4444-4444-4444-444444444444",
                                "endorserId": "S1003",
                                "createdAt": "2025-11-12T12:05:30",
                            }
                        },
                    }
                }
            },
        },
        400: {"description": "Missing fields or already endorsed"},
        404: {"description": "Recognition or endorser not found"},
    },
)
def create_endorsement(
    payload: EndorsementCreate,
    db: Session = Depends(get_db),
) -> ApiResponse[EndorsementDetail]:
    """Register an endorsement for a recognition.

    Example request body::

        {
            "recognitionId": "44444444-4444-4444-4444-444444444444",
            "endorserId": "S1003"
        }
    """

    endorsement = endorsement_service.create_endorsement(
        db,
        recognition_id=payload.recognition_id,
        endorser_id=payload.endorser_id,
    )
    db.commit()
    return ApiResponse(
        message="Endorsement created successfully",
        data=EndorsementDetail(endorsement=EndorsementRead.from_model(endorsement)),
    )


@router.delete(
    "/{endorsement_id}",
    response_model=ApiResponse[dict],
    summary="Remove an endorsement",
    responses={404: {"description": "Endorsement not found"}},
)
def delete_endorsement(endorsement_id: str, db: Session = Depends(get_db)) -> ApiResponse[dict]:
    endorsement_service.delete_endorsement(db, endorsement_id)
    db.commit()
    return ApiResponse(message="Endorsement removed successfully")


@router.get(
    "/recognition/{recognition_id}",
    response_model=ApiResponse[EndorsementList],
    summary="List endorsements for a recognition",
)
def list_endorsements(recognition_id: str, db: Session = Depends(get_db)) -> ApiResponse[EndorsementList]:
    """Return endorsements scoped to a recognition, newest first."""

    endorsements = endorsement_service.list_by_recognition(db, recognition_id)
    return ApiResponse(
        message="Endorsements fetched",
        data=EndorsementList(
            endorsements=[EndorsementRead.from_model(e, with_endorser=True) for e in endorsements],
            count=len(endorsements),
        ),
    )


@router.get(
    "/check/{recognition_id}/{endorser_id}",
    response_model=ApiResponse[EndorsementCheck],
    summary="Check whether a student endorsed a recognition",
)
def check_endorsement(
    recognition_id: str,
    endorser_id: str,
    db: Session = Depends(get_db),
) -> ApiResponse[EndorsementCheck]:
    endorsement = endorsement_service.check_endorsement(db, recognition_id, endorser_id)
    return ApiResponse(
        message="Endorsement status fetched",
        data=EndorsementCheck(
            has_endorsed=endorsement is not None,
            endorsement=EndorsementRead.from_model(endorsement) if endorsement else None,
        ),
    )
