from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

# Score assigned the veto meaning. Fixed, not tied to CancelRule.low_score.
VETO_SCORE = 0


@dataclass(frozen=True)
class ScoreSystem:
    min: int = 0
    max: int = 2


@dataclass(frozen=True)
class VetoRule:
    enabled: bool = False
    zero_count: int = 3


@dataclass(frozen=True)
class CancelRule:
    """`high_count` x `high_score` cancel `low_count` x `low_score`, repeatedly."""
    enabled: bool = False
    high_score: int = 2
    high_count: int = 2
    low_score: int = 0
    low_count: int = 1

    @property
    def is_degenerate(self) -> bool:
        return (
            self.high_score == self.low_score
            or self.high_count < 1
            or self.low_count < 1
        )


@dataclass(frozen=True)
class Period:
    days: int
    name: str


@dataclass(frozen=True)
class RuleConfig:
    """Canonical (0–2 scheme) rule configuration shared by all children."""
    categories: list[str]
    threshold: float = 1.5
    score_system: ScoreSystem = field(default_factory=ScoreSystem)
    veto_rule: VetoRule = field(default_factory=VetoRule)
    cancel_rule: CancelRule = field(default_factory=CancelRule)
    periods: list[Period] = field(default_factory=list)
    units: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class LegacyRuleConfig:
    """Settings document of the retired 1–5 scheme. Input to migration only."""
    categories: list[str]
    threshold: float = 3.25
    calc_type: str = "neutral"
    veto_fives: Optional[int] = None
    veto_ones: Optional[int] = None
    cancel_threshold: int = 0
    periods: list[Period] = field(default_factory=list)
    units: list[str] = field(default_factory=list)
