"""
Rule Evaluator — aggregate a flat list of category scores under a RuleConfig.

Order of operations
-------------------
  1. Work on a copy of the input list.
  2. CANCELLATION (cancel_rule.enabled)
     While at least `high_count` x `high_score` AND `low_count` x `low_score`
     remain, drop one batch of each. Multiset operation: which occurrence is
     removed does not matter.
  3. VETO (veto_rule.enabled)
     If the list left after cancellation still holds >= `zero_count` zeros,
     the result is vetoed: average reported as 0, never achieved.
  4. Empty list → None ("no data"). Otherwise the arithmetic mean.

Pure, stateless, never raises. Out-of-range scores are passed through as-is;
range checks happen where entries are created (see services.roster).

Public API
----------
evaluate(scores, config)        -> AggregateResult | None
apply_cancel_rule(scores, rule) -> list[int]
is_achieved(result, config)     -> bool
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from devpanel.models.rules import VETO_SCORE, CancelRule, RuleConfig


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AggregateResult:
    # 0.0 when veto_applied; not a statistic in that case.
    average: float
    remaining_zeros: int
    total_scores: int       # size of the list after cancellation
    veto_applied: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def arithmetic_mean(values: list[int]) -> float:
    return sum(values) / len(values)


def _remove_occurrences(values: list[int], target: int, count: int) -> None:
    """Remove `count` occurrences of `target` from `values` in place."""
    for _ in range(count):
        values.remove(target)


def apply_cancel_rule(scores: list[int], rule: CancelRule) -> list[int]:
    """Return a new list with paired high/low scores cancelled out.

    A disabled or degenerate rule (same high and low score, or a count below 1)
    leaves the list untouched.
    """
    working = list(scores)
    if not rule.enabled or rule.is_degenerate:
        return working

    highs = working.count(rule.high_score)
    lows = working.count(rule.low_score)
    rounds = min(highs // rule.high_count, lows // rule.low_count)
    if rounds == 0:
        return working

    _remove_occurrences(working, rule.high_score, rounds * rule.high_count)
    _remove_occurrences(working, rule.low_score, rounds * rule.low_count)
    return working


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def evaluate(scores: list[int], config: RuleConfig) -> Optional[AggregateResult]:
    """Aggregate `scores` under the cancel and veto rules of `config`."""
    if not scores:
        return None

    working = apply_cancel_rule(scores, config.cancel_rule)
    remaining_zeros = working.count(VETO_SCORE)

    veto = config.veto_rule
    if veto.enabled and remaining_zeros >= veto.zero_count:
        return AggregateResult(
            average=0.0,
            remaining_zeros=remaining_zeros,
            total_scores=len(working),
            veto_applied=True,
        )

    if not working:
        return None

    return AggregateResult(
        average=arithmetic_mean(working),
        remaining_zeros=remaining_zeros,
        total_scores=len(working),
        veto_applied=False,
    )


def is_achieved(result: Optional[AggregateResult], config: RuleConfig) -> bool:
    """Veto dominates the threshold; no data is never achieved."""
    if result is None or result.veto_applied:
        return False
    return result.average >= config.threshold
