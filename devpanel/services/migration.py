"""
Legacy 1–5 → 0–2 scoring migration.

Score mapping
-------------
  1, 2 → 0   (insufficient)
  3    → 1   (average)
  4, 5 → 2   (successful)

Settings mapping
----------------
  threshold       → 1.5 (default for the 0–2 scheme)
  scoreSystem     → {min: 0, max: 2}   (marks the document as migrated)
  vetoRule        → disabled, zeroCount 3
  cancelRule      → disabled, 2 x 2 cancel 1 x 0
                    enabled with highCount=vetoFives, lowCount=vetoOnes when
                    both legacy fields were set
  categories, periods, units → kept

Transforms are pure and return new objects. The one-shot, marker-guarded
dataset pass lives in services.rule_config.load_dataset.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from devpanel.models.rules import (
    CancelRule,
    LegacyRuleConfig,
    RuleConfig,
    ScoreSystem,
    VetoRule,
)
from devpanel.models.scores import Child, ScoreEntry

MIGRATED_THRESHOLD = 1.5
SCORE_SYSTEM_MARKER = "scoreSystem"


@dataclass(frozen=True)
class MigrationOutcome:
    config: RuleConfig
    children: list[Child]
    migrated: bool


# ---------------------------------------------------------------------------
# Scores
# ---------------------------------------------------------------------------

def migrate_score(old_score: int) -> int:
    if old_score <= 2:
        return 0
    if old_score == 3:
        return 1
    return 2


def is_old_system_score(score: int) -> bool:
    """True for values that cannot occur in the 0–2 scheme."""
    return score >= 3


def migrate_score_entry(entry: ScoreEntry) -> ScoreEntry:
    return replace(
        entry,
        category_scores={i: migrate_score(s) for i, s in entry.category_scores.items()},
    )


def migrate_child(child: Child) -> Child:
    return replace(child, scores=[migrate_score_entry(e) for e in child.scores])


def migrate_children(children: list[Child]) -> list[Child]:
    return [migrate_child(c) for c in children]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def needs_migration(raw_settings: Mapping[str, Any]) -> bool:
    return not raw_settings.get(SCORE_SYSTEM_MARKER)


def migrate_settings(legacy: LegacyRuleConfig) -> RuleConfig:
    cancel_rule = CancelRule()
    if legacy.veto_fives is not None and legacy.veto_ones is not None:
        # Old "N fives cancel M ones" becomes an enabled cancel rule on 2s and 0s.
        cancel_rule = replace(
            cancel_rule,
            enabled=True,
            high_count=legacy.veto_fives,
            low_count=legacy.veto_ones,
        )

    return RuleConfig(
        categories=list(legacy.categories),
        threshold=MIGRATED_THRESHOLD,
        score_system=ScoreSystem(min=0, max=2),
        veto_rule=VetoRule(enabled=False, zero_count=3),
        cancel_rule=cancel_rule,
        periods=list(legacy.periods),
        units=list(legacy.units),
    )
