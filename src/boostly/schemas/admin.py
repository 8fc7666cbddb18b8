"""Schemas for administrative monthly reset endpoints."""

from .common import CamelModel


class ResetSummaryRead(CamelModel):
    reset_count: int
    total_carry_forward: int
    current_month: str


class ResetStatisticsRead(CamelModel):
    current_month: str
    total_students: int
    students_needing_reset: int
    students_with_carry_forward: int
    students_with_max_carry_forward: int
    reset_percentage: float
