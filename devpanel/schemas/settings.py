"""
Settings schemas.

POST /settings/resolve → ResolveSettingsRequest → RuleConfigSchema
"""
from __future__ import annotations

from typing import Any

from pydantic import Field

from devpanel.schemas.common import CamelModel


class ResolveSettingsRequest(CamelModel):
    config: dict[str, Any] = Field(
        description="Stored settings document. Legacy documents are migrated.",
    )
