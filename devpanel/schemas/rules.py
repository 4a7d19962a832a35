"""
Rule configuration schemas.

Two shapes exist in stored settings documents:
  RuleConfigSchema        current 0–2 scheme, carries `scoreSystem`
  LegacyRuleConfigSchema  retired 1–5 scheme (calcType / vetoFives / vetoOnes)

Only services.rule_config decides which one applies; everything past that
boundary sees the canonical RuleConfig dataclass.
"""
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from devpanel.models.rules import (
    CancelRule,
    LegacyRuleConfig,
    Period,
    RuleConfig,
    ScoreSystem,
    VetoRule,
)
from devpanel.schemas.common import CamelModel


class ScoreSystemSchema(CamelModel):
    min: int = 0
    max: int = 2


class VetoRuleSchema(CamelModel):
    enabled: bool = False
    zero_count: int = Field(
        default=3,
        description="Zeros left after cancellation that force 'not achieved'.",
    )


class CancelRuleSchema(CamelModel):
    enabled: bool = False
    high_score: int = 2
    high_count: int = 2
    low_score: int = 0
    low_count: int = 1


class PeriodSchema(CamelModel):
    days: int = Field(description="Number of most recent distinct evaluation dates.")
    name: str


class RuleConfigSchema(CamelModel):
    """Current settings document."""
    categories: list[str]
    threshold: float = Field(
        default=1.5,
        description="Inclusive minimum average for 'achieved'.",
    )
    score_system: ScoreSystemSchema
    veto_rule: VetoRuleSchema = Field(default_factory=VetoRuleSchema)
    cancel_rule: CancelRuleSchema = Field(default_factory=CancelRuleSchema)
    periods: list[PeriodSchema] = Field(default_factory=list)
    units: list[str] = Field(default_factory=list)

    def to_model(self) -> RuleConfig:
        return RuleConfig(
            categories=list(self.categories),
            threshold=self.threshold,
            score_system=ScoreSystem(min=self.score_system.min, max=self.score_system.max),
            veto_rule=VetoRule(
                enabled=self.veto_rule.enabled,
                zero_count=self.veto_rule.zero_count,
            ),
            cancel_rule=CancelRule(
                enabled=self.cancel_rule.enabled,
                high_score=self.cancel_rule.high_score,
                high_count=self.cancel_rule.high_count,
                low_score=self.cancel_rule.low_score,
                low_count=self.cancel_rule.low_count,
            ),
            periods=[Period(days=p.days, name=p.name) for p in self.periods],
            units=list(self.units),
        )

    @classmethod
    def from_model(cls, config: RuleConfig) -> "RuleConfigSchema":
        return cls(
            categories=list(config.categories),
            threshold=config.threshold,
            score_system=ScoreSystemSchema(
                min=config.score_system.min,
                max=config.score_system.max,
            ),
            veto_rule=VetoRuleSchema(
                enabled=config.veto_rule.enabled,
                zero_count=config.veto_rule.zero_count,
            ),
            cancel_rule=CancelRuleSchema(
                enabled=config.cancel_rule.enabled,
                high_score=config.cancel_rule.high_score,
                high_count=config.cancel_rule.high_count,
                low_score=config.cancel_rule.low_score,
                low_count=config.cancel_rule.low_count,
            ),
            periods=[PeriodSchema(days=p.days, name=p.name) for p in config.periods],
            units=list(config.units),
        )


class LegacyRuleConfigSchema(CamelModel):
    """Settings document written before the 0–2 scheme."""
    categories: list[str]
    threshold: float = 3.25
    calc_type: Literal["neutral", "normal"] = "neutral"
    veto_fives: Optional[int] = None
    veto_ones: Optional[int] = None
    cancel_threshold: int = 0
    periods: list[PeriodSchema] = Field(default_factory=list)
    units: list[str] = Field(default_factory=list)

    def to_model(self) -> LegacyRuleConfig:
        return LegacyRuleConfig(
            categories=list(self.categories),
            threshold=self.threshold,
            calc_type=self.calc_type,
            veto_fives=self.veto_fives,
            veto_ones=self.veto_ones,
            cancel_threshold=self.cancel_threshold,
            periods=[Period(days=p.days, name=p.name) for p in self.periods],
            units=list(self.units),
        )
