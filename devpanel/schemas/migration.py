"""
Migration schemas.

POST /migration/dataset → MigrateDatasetRequest → MigrateDatasetResponse
POST /migration/score   → MigrateScoreRequest   → MigrateScoreResponse
"""
from __future__ import annotations

from typing import Any

from pydantic import Field

from devpanel.schemas.children import ChildSchema
from devpanel.schemas.common import CamelModel
from devpanel.schemas.rules import RuleConfigSchema


class MigrateDatasetRequest(CamelModel):
    settings: dict[str, Any] = Field(description="Stored settings document.")
    children: list[ChildSchema] = Field(default_factory=list)


class MigrateDatasetResponse(CamelModel):
    migrated: bool = Field(description="False when the data already used the 0–2 scheme.")
    config: RuleConfigSchema
    children: list[ChildSchema]


class MigrateScoreRequest(CamelModel):
    score: int = Field(ge=1, le=5, description="Score on the legacy 1–5 scale.")


class MigrateScoreResponse(CamelModel):
    score: int
    migrated: int
