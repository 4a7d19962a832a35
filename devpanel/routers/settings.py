"""
Settings router.

GET  /settings/defaults  — default rule configuration
POST /settings/resolve   — canonical form of a stored settings document
"""
from fastapi import APIRouter

from devpanel.core.config import settings
from devpanel.schemas.common import ErrorResponse
from devpanel.schemas.rules import RuleConfigSchema
from devpanel.schemas.settings import ResolveSettingsRequest
from devpanel.services.rule_config import default_rule_config, load_rule_config

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get(
    "/defaults",
    response_model=RuleConfigSchema,
    summary="Default rule configuration",
)
def settings_defaults():
    """Configuration used when no settings document has been stored yet."""
    return RuleConfigSchema.from_model(default_rule_config(settings))


@router.post(
    "/resolve",
    response_model=RuleConfigSchema,
    summary="Validate a settings document and return its canonical form",
    responses={
        200: {"description": "Canonical 0–2 rule configuration."},
        422: {"model": ErrorResponse, "description": "The document cannot be used as a rule configuration."},
    },
)
def settings_resolve(payload: ResolveSettingsRequest):
    """
    Documents without `scoreSystem` are treated as the legacy 1–5 scheme and
    migrated. Raises **422** `RULE_CONFIG_INVALID` with the full problem list.
    """
    return RuleConfigSchema.from_model(load_rule_config(payload.config))
