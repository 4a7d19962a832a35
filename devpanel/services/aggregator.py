"""
Period Aggregator — per-child statistics over the whole history and over
trailing windows of evaluation dates.

A period of N days covers the N most recent *distinct evaluation dates* in
the child's history, not N calendar days. A child evaluated on 2 dates has a
6-day period with days_count == 2.

Public API
----------
aggregate(child, config)                    -> ChildStats
summarize_achievement(children, config)     -> list[PeriodAchievement]
category_averages(children, config)         -> list[CategoryAverage]
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from devpanel.models.rules import Period, RuleConfig
from devpanel.models.scores import Child, ScoreEntry
from devpanel.services.evaluator import evaluate, is_achieved


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PeriodResult:
    name: str
    days: int               # configured window size
    average: float
    remaining_zeros: int
    total_scores: int
    veto_applied: bool
    achieved: bool
    days_count: int         # dates actually in the window, <= days


@dataclass(frozen=True)
class ChildStats:
    average: Optional[float]
    remaining_zeros: int
    total_scores: int
    veto_applied: bool
    periods: list[Optional[PeriodResult]]   # config order, None = no data


@dataclass(frozen=True)
class PeriodAchievement:
    name: str
    days: int
    total: int              # children with data in this period
    achieved: int
    not_achieved: int
    percentage: int


@dataclass(frozen=True)
class CategoryAverage:
    index: int
    name: str
    average: float
    count: int


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def flatten_scores(entries: Iterable[ScoreEntry]) -> list[int]:
    """All category scores of all entries, in one list."""
    values: list[int] = []
    for entry in entries:
        values.extend(entry.category_scores.values())
    return values


def distinct_dates_desc(entries: Iterable[ScoreEntry]) -> list[date]:
    return sorted({entry.date for entry in entries}, reverse=True)


def _evaluate_period(
    period: Period,
    entries: list[ScoreEntry],
    dates_desc: list[date],
    config: RuleConfig,
) -> Optional[PeriodResult]:
    window = set(dates_desc[:period.days])
    # Entries sharing a date all count; dedup happens only on the date set.
    scores = flatten_scores(e for e in entries if e.date in window)
    if not scores:
        return None

    result = evaluate(scores, config)
    if result is None:
        return None

    return PeriodResult(
        name=period.name,
        days=period.days,
        average=result.average,
        remaining_zeros=result.remaining_zeros,
        total_scores=result.total_scores,
        veto_applied=result.veto_applied,
        achieved=is_achieved(result, config),
        days_count=len(window),
    )


# ---------------------------------------------------------------------------
# Public — single child
# ---------------------------------------------------------------------------

def aggregate(child: Child, config: RuleConfig) -> ChildStats:
    """Overall result plus one result-or-None per configured period."""
    entries = list(child.scores)
    overall = evaluate(flatten_scores(entries), config)
    dates_desc = distinct_dates_desc(entries)

    periods = [
        _evaluate_period(period, entries, dates_desc, config)
        for period in config.periods
    ]

    if overall is None:
        return ChildStats(
            average=None,
            remaining_zeros=0,
            total_scores=0,
            veto_applied=False,
            periods=periods,
        )

    return ChildStats(
        average=overall.average,
        remaining_zeros=overall.remaining_zeros,
        total_scores=overall.total_scores,
        veto_applied=overall.veto_applied,
        periods=periods,
    )


# ---------------------------------------------------------------------------
# Public — cohort summaries
# ---------------------------------------------------------------------------

def _active(children: Iterable[Child], include_archived: bool) -> list[Child]:
    return [c for c in children if include_archived or not c.archived]


def _whole_percent(part: int, total: int) -> int:
    if not total:
        return 0
    share = Decimal(part * 100) / Decimal(total)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def summarize_achievement(
    children: Iterable[Child],
    config: RuleConfig,
    include_archived: bool = False,
) -> list[PeriodAchievement]:
    """Per period: how many children with data reached the threshold."""
    stats = [aggregate(c, config) for c in _active(children, include_archived)]

    summary = []
    for i, period in enumerate(config.periods):
        results = [s.periods[i] for s in stats if s.periods[i] is not None]
        total = len(results)
        achieved = sum(1 for r in results if r.achieved)
        percentage = _whole_percent(achieved, total)
        summary.append(PeriodAchievement(
            name=period.name,
            days=period.days,
            total=total,
            achieved=achieved,
            not_achieved=total - achieved,
            percentage=percentage,
        ))
    return summary


def category_averages(
    children: Iterable[Child],
    config: RuleConfig,
    include_archived: bool = False,
) -> list[CategoryAverage]:
    """Plain mean per category index. No cancel or veto rules applied."""
    totals = [0] * len(config.categories)
    counts = [0] * len(config.categories)

    for child in _active(children, include_archived):
        for entry in child.scores:
            for index, score in entry.category_scores.items():
                if 0 <= index < len(config.categories):
                    totals[index] += score
                    counts[index] += 1

    return [
        CategoryAverage(
            index=i,
            name=name,
            average=totals[i] / counts[i] if counts[i] else 0.0,
            count=counts[i],
        )
        for i, name in enumerate(config.categories)
    ]
