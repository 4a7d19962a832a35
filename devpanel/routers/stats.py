"""
Statistics router — scoring engine over caller-supplied documents.

POST /stats/evaluate   — aggregate one flat score list
POST /stats/child      — overall + per-period stats for one child
POST /stats/summary    — per-period achievement counts and category averages
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from devpanel.schemas.common import ErrorResponse
from devpanel.schemas.stats import (
    AggregateResultResponse,
    CategoryAverageResponse,
    ChildStatsRequest,
    ChildStatsResponse,
    CohortSummaryRequest,
    CohortSummaryResponse,
    EvaluateRequest,
    EvaluateResponse,
    PeriodAchievementResponse,
    PeriodResultResponse,
)
from devpanel.services.aggregator import (
    ChildStats,
    PeriodResult,
    aggregate,
    category_averages,
    summarize_achievement,
)
from devpanel.services.evaluator import AggregateResult, evaluate, is_achieved
from devpanel.services.migration import migrate_score, needs_migration
from devpanel.services.rule_config import load_dataset, load_rule_config

router = APIRouter(prefix="/stats", tags=["stats"])


# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------

def _result_to_response(r: AggregateResult) -> AggregateResultResponse:
    return AggregateResultResponse(
        average=r.average,
        remaining_zeros=r.remaining_zeros,
        total_scores=r.total_scores,
        veto_applied=r.veto_applied,
    )


def _period_to_response(p: Optional[PeriodResult]) -> Optional[PeriodResultResponse]:
    if p is None:
        return None
    return PeriodResultResponse(
        name=p.name,
        days=p.days,
        average=p.average,
        remaining_zeros=p.remaining_zeros,
        total_scores=p.total_scores,
        veto_applied=p.veto_applied,
        achieved=p.achieved,
        days_count=p.days_count,
    )


def _stats_to_response(child_id: str, s: ChildStats) -> ChildStatsResponse:
    return ChildStatsResponse(
        child_id=child_id,
        average=s.average,
        remaining_zeros=s.remaining_zeros,
        total_scores=s.total_scores,
        veto_applied=s.veto_applied,
        periods=[_period_to_response(p) for p in s.periods],
    )


# ---------------------------------------------------------------------------
# POST /stats/evaluate
# ---------------------------------------------------------------------------

@router.post(
    "/evaluate",
    response_model=EvaluateResponse,
    summary="Aggregate a flat score list under the rule configuration",
    responses={
        200: {"description": "Aggregate result (null when there is no data)."},
        422: {"model": ErrorResponse, "description": "Invalid rule configuration or request body."},
    },
)
def evaluate_scores(payload: EvaluateRequest):
    """
    Apply the cancel rule, then the veto rule, then average.

    `achieved` is true only when a result exists, no veto applied and the
    average reaches the configured threshold. Scores sent with a legacy
    settings document are rescored to 0–2 along with the document.
    """
    config = load_rule_config(payload.config)
    scores = payload.scores
    if needs_migration(payload.config):
        scores = [migrate_score(s) for s in scores]
    result = evaluate(scores, config)
    return EvaluateResponse(
        result=_result_to_response(result) if result is not None else None,
        achieved=is_achieved(result, config),
    )


# ---------------------------------------------------------------------------
# POST /stats/child
# ---------------------------------------------------------------------------

@router.post(
    "/child",
    response_model=ChildStatsResponse,
    summary="Overall and per-period statistics for one child",
    responses={
        200: {"description": "Child statistics, one period entry per configured period."},
        422: {"model": ErrorResponse, "description": "Invalid rule configuration or request body."},
    },
)
def child_stats(payload: ChildStatsRequest):
    """
    ### Periods
    A period of N days covers the N most recent **distinct evaluation dates**,
    not calendar days. `daysCount` reports how many dates were available.

    With a legacy settings document the child's history is migrated to
    0–2 before aggregating.
    """
    outcome = load_dataset(payload.config, [payload.child.to_model()])
    child = outcome.children[0]
    return _stats_to_response(child.id, aggregate(child, outcome.config))


# ---------------------------------------------------------------------------
# POST /stats/summary
# ---------------------------------------------------------------------------

@router.post(
    "/summary",
    response_model=CohortSummaryResponse,
    summary="Achievement counts per period and averages per category",
)
def cohort_summary(payload: CohortSummaryRequest):
    """Archived children are left out unless `includeArchived` is set."""
    outcome = load_dataset(payload.config, [c.to_model() for c in payload.children])
    config, children = outcome.config, outcome.children
    counted = [c for c in children if payload.include_archived or not c.archived]

    achievement = summarize_achievement(children, config, payload.include_archived)
    categories = category_averages(children, config, payload.include_archived)
    return CohortSummaryResponse(
        children_count=len(counted),
        achievement=[
            PeriodAchievementResponse(
                name=a.name,
                days=a.days,
                total=a.total,
                achieved=a.achieved,
                not_achieved=a.not_achieved,
                percentage=a.percentage,
            )
            for a in achievement
        ],
        categories=[
            CategoryAverageResponse(
                index=c.index,
                name=c.name,
                average=c.average,
                count=c.count,
            )
            for c in categories
        ],
    )
