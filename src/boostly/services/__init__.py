"""Service layer exports."""

from . import (
	endorsement_service,
	leaderboard_service,
	monthly_reset_service,
	recognition_service,
	redemption_service,
)

__all__ = [
	"endorsement_service",
	"leaderboard_service",
	"monthly_reset_service",
	"recognition_service",
	"redemption_service",
]
