"""
Statistics schemas.

POST /stats/evaluate → EvaluateRequest      → EvaluateResponse
POST /stats/child    → ChildStatsRequest    → ChildStatsResponse
POST /stats/summary  → CohortSummaryRequest → CohortSummaryResponse
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from devpanel.schemas.children import ChildSchema
from devpanel.schemas.common import CamelModel


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class EvaluateRequest(CamelModel):
    scores: list[int] = Field(description="Flat list of category scores.")
    config: dict[str, Any] = Field(description="Stored settings document (current or legacy).")


class ChildStatsRequest(CamelModel):
    child: ChildSchema
    config: dict[str, Any]


class CohortSummaryRequest(CamelModel):
    children: list[ChildSchema]
    config: dict[str, Any]
    include_archived: bool = False


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class AggregateResultResponse(CamelModel):
    average: float = Field(description="Reported as 0 when vetoApplied is true.")
    remaining_zeros: int
    total_scores: int = Field(description="Scores left after cancellation.")
    veto_applied: bool


class EvaluateResponse(CamelModel):
    result: Optional[AggregateResultResponse] = Field(
        default=None,
        description="Null when there is no data to aggregate.",
    )
    achieved: bool


class PeriodResultResponse(CamelModel):
    name: str
    days: int
    average: float
    remaining_zeros: int
    total_scores: int
    veto_applied: bool
    achieved: bool
    days_count: int = Field(description="Evaluation dates actually in the window.")


class ChildStatsResponse(CamelModel):
    child_id: str
    average: Optional[float] = None
    remaining_zeros: int = 0
    total_scores: int = 0
    veto_applied: bool = False
    periods: list[Optional[PeriodResultResponse]] = Field(
        description="One entry per configured period, in order. Null = no data.",
    )


class PeriodAchievementResponse(CamelModel):
    name: str
    days: int
    total: int
    achieved: int
    not_achieved: int
    percentage: int


class CategoryAverageResponse(CamelModel):
    index: int
    name: str
    average: float
    count: int


class CohortSummaryResponse(CamelModel):
    children_count: int
    achievement: list[PeriodAchievementResponse]
    categories: list[CategoryAverageResponse]
