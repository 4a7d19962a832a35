"""
Rule configuration boundary: stored settings document → canonical RuleConfig.

The evaluator and aggregator only ever receive a RuleConfig that passed
through here. Legacy (1–5) documents are detected by the missing
`scoreSystem` marker and migrated on the way in.

Public API
----------
load_rule_config(raw)               -> RuleConfig          (parse, migrate, validate)
validate_rule_config(config)        -> None                (raises InvalidRuleConfigError)
default_rule_config(settings)       -> RuleConfig
load_dataset(raw, children)         -> MigrationOutcome    (one-shot batch migration)
"""
from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from devpanel.core.config import Settings
from devpanel.core.errors import InvalidRuleConfigError
from devpanel.models.rules import (
    CancelRule,
    LegacyRuleConfig,
    Period,
    RuleConfig,
    ScoreSystem,
    VetoRule,
)
from devpanel.models.scores import Child
from devpanel.schemas.rules import LegacyRuleConfigSchema, RuleConfigSchema
from devpanel.services.migration import (
    MigrationOutcome,
    migrate_children,
    migrate_settings,
    needs_migration,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _schema_problems(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]


def parse_rule_config(raw: Mapping[str, Any]) -> RuleConfig:
    try:
        return RuleConfigSchema.model_validate(dict(raw)).to_model()
    except ValidationError as exc:
        raise InvalidRuleConfigError(_schema_problems(exc)) from exc


def parse_legacy_rule_config(raw: Mapping[str, Any]) -> LegacyRuleConfig:
    try:
        return LegacyRuleConfigSchema.model_validate(dict(raw)).to_model()
    except ValidationError as exc:
        raise InvalidRuleConfigError(_schema_problems(exc)) from exc


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _cancel_rule_problems(rule: CancelRule, system: ScoreSystem) -> list[str]:
    if not rule.enabled:
        return []
    problems = []
    if rule.high_score == rule.low_score:
        problems.append("cancelRule: highScore and lowScore must differ")
    if rule.high_count < 1:
        problems.append("cancelRule: highCount must be at least 1")
    if rule.low_count < 1:
        problems.append("cancelRule: lowCount must be at least 1")
    for label, score in (("highScore", rule.high_score), ("lowScore", rule.low_score)):
        if not system.min <= score <= system.max:
            problems.append(
                f"cancelRule: {label} {score} outside score system "
                f"[{system.min}, {system.max}]"
            )
    return problems


def _period_problems(periods: list[Period]) -> list[str]:
    return [
        f"periods: '{period.name}' must span at least 1 day"
        for period in periods
        if period.days < 1
    ]


def validate_rule_config(config: RuleConfig) -> None:
    """Raise InvalidRuleConfigError listing every problem found."""
    system = config.score_system
    problems: list[str] = []

    if not config.categories:
        problems.append("categories: at least one category is required")
    if system.min >= system.max:
        problems.append("scoreSystem: min must be lower than max")
    elif not system.min <= config.threshold <= system.max:
        problems.append(
            f"threshold: {config.threshold} outside score system "
            f"[{system.min}, {system.max}]"
        )
    if config.veto_rule.enabled and config.veto_rule.zero_count < 1:
        problems.append("vetoRule: zeroCount must be at least 1")

    problems.extend(_cancel_rule_problems(config.cancel_rule, system))
    problems.extend(_period_problems(config.periods))

    if problems:
        raise InvalidRuleConfigError(problems)


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

def load_rule_config(raw: Mapping[str, Any]) -> RuleConfig:
    """Resolve a stored settings document, current or legacy, to a RuleConfig."""
    if needs_migration(raw):
        logger.info("Settings document has no scoreSystem; applying legacy migration")
        config = migrate_settings(parse_legacy_rule_config(raw))
    else:
        config = parse_rule_config(raw)
    validate_rule_config(config)
    return config


def default_rule_config(settings: Settings) -> RuleConfig:
    config = RuleConfig(
        categories=settings.default_categories_list,
        threshold=settings.DEFAULT_THRESHOLD,
        score_system=ScoreSystem(),
        veto_rule=VetoRule(),
        cancel_rule=CancelRule(),
        periods=[Period(days=d, name=n) for d, n in settings.default_periods_list],
    )
    validate_rule_config(config)
    return config


def load_dataset(raw: Mapping[str, Any], children: list[Child]) -> MigrationOutcome:
    """
    One-shot migration of a whole dataset, guarded by the scoreSystem marker.
    Already-migrated data is returned unchanged with migrated=False.
    """
    config = load_rule_config(raw)
    if not needs_migration(raw):
        return MigrationOutcome(config=config, children=list(children), migrated=False)

    migrated = migrate_children(children)
    logger.info(
        "Migrated %d children (%d score entries) from 1-5 to 0-2 scoring",
        len(migrated),
        sum(len(c.scores) for c in migrated),
    )
    return MigrationOutcome(config=config, children=migrated, migrated=True)
