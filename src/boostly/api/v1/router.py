"""Primary API router definition."""

from fastapi import APIRouter

from ...schemas import ErrorResponse
from . import admin, endorsements, leaderboard, recognitions, redemptions

api_router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Validation or business rule failure"},
        404: {"model": ErrorResponse, "description": "Resource not found"},
        500: {"model": ErrorResponse, "description": "Unexpected error"},
    }
)

api_router.include_router(recognitions.router)
api_router.include_router(endorsements.router)
api_router.include_router(redemptions.router)
api_router.include_router(leaderboard.router)
api_router.include_router(admin.router)


@api_router.get("/health", tags=["health"])
async def healthcheck() -> dict[str, str]:
    """Basic health check endpoint."""
    return {"status": "ok"}
