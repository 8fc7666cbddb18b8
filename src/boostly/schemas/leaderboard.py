"""Leaderboard response schemas."""

from typing import List

from pydantic import Field

from .common import CamelModel


class LeaderboardStudent(CamelModel):
    """Aggregated leaderboard entry."""

    rank: int = Field(..., ge=1)
    student_id: str
    name: str
    total_credits_received: int = Field(..., ge=0)
    recognition_count: int = Field(..., ge=0)
    endorsement_count: int = Field(..., ge=0)


class LeaderboardRead(CamelModel):
    leaderboard: List[LeaderboardStudent]
    limit: int
    total: int
