"""Leaderboard endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ApiResponse, LeaderboardRead, LeaderboardStudent
from ...services import leaderboard_service

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])


@router.get(
    "",
    response_model=ApiResponse[LeaderboardRead],
    summary="Top credit recipients",
    responses={
        200: {
            "description": "Leaderboard entries ordered by credits received",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "Leaderboard fetched",
                        "data": {
                            "leaderboard": [
                                {
                                    "rank": 1,
                                    "studentId": "S1002",
                                    "name": "Bianca Liu",
                                    "totalCreditsReceived": 80,
                                    "recognitionCount": 3,
                                    "endorsementCount": 5,
                                }
                            ],
                            "limit": 10,
                            "total": 1,
                        },
                    }
                }
            },
        }
    },
)
def get_leaderboard(
    limit: int = Query(10, ge=1, le=100, description="Number of top students to return"),
    db: Session = Depends(get_db),
) -> ApiResponse[LeaderboardRead]:
    """Return ranked list of students based on credits received."""

    entries = leaderboard_service.top_recipients(db, limit=limit)
    return ApiResponse(
        message="Leaderboard fetched",
        data=LeaderboardRead(
            leaderboard=[LeaderboardStudent.model_validate(entry) for entry in entries],
            limit=limit,
            total=len(entries),
        ),
    )


@router.get(
    "/student/{student_id}",
    response_model=ApiResponse[LeaderboardStudent],
    summary="A single student's rank",
    responses={404: {"description": "Student not found"}},
)
def get_student_ranking(student_id: str, db: Session = Depends(get_db)) -> ApiResponse[LeaderboardStudent]:
    entry = leaderboard_service.student_ranking(db, student_id)
    return ApiResponse(message="Student ranking fetched", data=LeaderboardStudent.model_validate(entry))
