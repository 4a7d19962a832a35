"""
Child and score-entry schemas.

Score entries are accepted in two shapes:
  {"date", "evaluator", "categoryScores": {"0": 2, "1": 1}, "descriptions": {...}}
  {"date", "evaluator", "s1": 2, "s2": 1, ...}   (stored documents, 1-based keys)

Responses always use `categoryScores`.
"""
from __future__ import annotations

import re
import datetime as dt
from typing import Any, Optional

from pydantic import Field, model_validator

from devpanel.models.scores import Child, ScoreEntry
from devpanel.schemas.common import CamelModel

_SLOT_KEY = re.compile(r"^s(\d+)$")


class ScoreEntrySchema(CamelModel):
    date: dt.date
    evaluator: str = ""
    category_scores: dict[int, int] = Field(
        default_factory=dict,
        description="0-based category index → score. Missing index = not scored.",
    )
    descriptions: dict[int, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_slot_keys(cls, data: Any) -> Any:
        """Fold `s1`, `s2`, ... keys into categoryScores."""
        if not isinstance(data, dict):
            return data
        slots = {}
        rest = {}
        for key, value in data.items():
            match = _SLOT_KEY.match(key) if isinstance(key, str) else None
            if match and int(match.group(1)) >= 1:
                slots[int(match.group(1)) - 1] = value
            else:
                rest[key] = value
        if not slots:
            return data
        existing = rest.get("categoryScores", rest.get("category_scores")) or {}
        rest.pop("category_scores", None)
        rest["categoryScores"] = {**slots, **existing}
        return rest

    def to_model(self) -> ScoreEntry:
        return ScoreEntry(
            date=self.date,
            evaluator=self.evaluator,
            category_scores=dict(self.category_scores),
            descriptions=dict(self.descriptions),
        )

    @classmethod
    def from_model(cls, entry: ScoreEntry) -> "ScoreEntrySchema":
        return cls(
            date=entry.date,
            evaluator=entry.evaluator,
            category_scores=dict(entry.category_scores),
            descriptions=dict(entry.descriptions),
        )


class ChildSchema(CamelModel):
    id: str
    name: str
    scores: list[ScoreEntrySchema] = Field(default_factory=list)
    archived: bool = False
    created_at: Optional[dt.datetime] = None

    def to_model(self) -> Child:
        return Child(
            id=self.id,
            name=self.name,
            scores=[s.to_model() for s in self.scores],
            archived=self.archived,
            created_at=self.created_at,
        )

    @classmethod
    def from_model(cls, child: Child) -> "ChildSchema":
        return cls(
            id=child.id,
            name=child.name,
            scores=[ScoreEntrySchema.from_model(s) for s in child.scores],
            archived=child.archived,
            created_at=child.created_at,
        )


# ---------------------------------------------------------------------------
# Roster requests
# ---------------------------------------------------------------------------

class RecordEvaluationRequest(CamelModel):
    """Save one day's evaluation for one child."""
    child: ChildSchema
    config: dict[str, Any] = Field(description="Stored settings document (current or legacy).")
    date: dt.date
    evaluator: str = Field(min_length=1)
    scores: dict[int, int] = Field(description="0-based category index → score.")
    descriptions: dict[int, str] = Field(default_factory=dict)


class MarkAbsentRequest(CamelModel):
    child: ChildSchema
    date: dt.date


class SearchChildrenRequest(CamelModel):
    children: list[ChildSchema]
    query: Optional[str] = Field(default=None, description="Case-insensitive name substring.")
    include_archived: bool = False


class ChildListResponse(CamelModel):
    total: int
    items: list[ChildSchema]


class ArchiveChildRequest(CamelModel):
    children: list[ChildSchema]
    child_id: str
