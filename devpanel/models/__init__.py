from .scores import ScoreEntry, Child
from .rules import (
    VETO_SCORE,
    ScoreSystem,
    VetoRule,
    CancelRule,
    Period,
    RuleConfig,
    LegacyRuleConfig,
)

__all__ = [
    "ScoreEntry",
    "Child",
    "VETO_SCORE",
    "ScoreSystem",
    "VetoRule",
    "CancelRule",
    "Period",
    "RuleConfig",
    "LegacyRuleConfig",
]
