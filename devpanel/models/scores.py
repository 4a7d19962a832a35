from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class ScoreEntry:
    """One evaluation of one child on one date.

    category_scores is keyed by the 0-based position of the category in
    RuleConfig.categories. A missing key means the category was not scored.
    """
    date: date
    evaluator: str
    category_scores: dict[int, int] = field(default_factory=dict)
    descriptions: dict[int, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Child:
    id: str
    name: str
    # Newest first after a save; at most one entry per date.
    scores: list[ScoreEntry] = field(default_factory=list)
    archived: bool = False
    created_at: Optional[datetime] = None
