"""
Migration router — legacy 1–5 scoring to 0–2.

POST /migration/dataset   — migrate a settings document and its children
POST /migration/score     — map a single legacy score
"""
from fastapi import APIRouter

from devpanel.schemas.common import ErrorResponse
from devpanel.schemas.children import ChildSchema
from devpanel.schemas.migration import (
    MigrateDatasetRequest,
    MigrateDatasetResponse,
    MigrateScoreRequest,
    MigrateScoreResponse,
)
from devpanel.schemas.rules import RuleConfigSchema
from devpanel.services.migration import migrate_score
from devpanel.services.rule_config import load_dataset

router = APIRouter(prefix="/migration", tags=["migration"])


@router.post(
    "/dataset",
    response_model=MigrateDatasetResponse,
    summary="One-shot migration of settings and score history",
    responses={
        200: {"description": "Migrated (or already current) dataset."},
        422: {"model": ErrorResponse, "description": "Settings document is not a usable rule configuration."},
    },
)
def migrate_dataset(payload: MigrateDatasetRequest):
    """
    Runs only when the settings document lacks `scoreSystem`.
    Already-migrated data comes back unchanged with `migrated: false`,
    so the call is safe to repeat.
    """
    outcome = load_dataset(payload.settings, [c.to_model() for c in payload.children])
    return MigrateDatasetResponse(
        migrated=outcome.migrated,
        config=RuleConfigSchema.from_model(outcome.config),
        children=[ChildSchema.from_model(c) for c in outcome.children],
    )


@router.post(
    "/score",
    response_model=MigrateScoreResponse,
    summary="Map one 1–5 score to the 0–2 scale",
)
def migrate_single_score(payload: MigrateScoreRequest):
    return MigrateScoreResponse(score=payload.score, migrated=migrate_score(payload.score))
