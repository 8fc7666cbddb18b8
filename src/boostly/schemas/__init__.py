"""Public schema exports."""

from .admin import ResetStatisticsRead, ResetSummaryRead
from .common import ApiResponse, ErrorResponse, StudentRef
from .endorsement import EndorsementCheck, EndorsementCreate, EndorsementDetail, EndorsementList, EndorsementRead
from .leaderboard import LeaderboardRead, LeaderboardStudent
from .recognition import RecognitionCreate, RecognitionCreated, RecognitionDetail, RecognitionList, RecognitionRead
from .redemption import (
	RedemptionCreate,
	RedemptionData,
	RedemptionHistoryRead,
	RedemptionInfo,
	RedemptionRead,
	RedemptionReceipt,
)

__all__ = [
	"ApiResponse",
	"EndorsementCheck",
	"EndorsementCreate",
	"EndorsementDetail",
	"EndorsementList",
	"EndorsementRead",
	"ErrorResponse",
	"LeaderboardRead",
	"LeaderboardStudent",
	"RecognitionCreate",
	"RecognitionCreated",
	"RecognitionDetail",
	"RecognitionList",
	"RecognitionRead",
	"RedemptionCreate",
	"RedemptionData",
	"RedemptionHistoryRead",
	"RedemptionInfo",
	"RedemptionRead",
	"RedemptionReceipt",
	"ResetStatisticsRead",
	"ResetSummaryRead",
	"StudentRef",
]
