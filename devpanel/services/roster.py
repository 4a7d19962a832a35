"""
Roster service: building and saving score entries, archiving, search.

Every operation returns new objects; a saved evaluation replaces the
child's entry for that date and is placed first in `scores`.
"""
from __future__ import annotations

import unicodedata
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from devpanel.core.errors import (
    ChildNotFoundError,
    IncompleteEvaluationError,
    ScoreOutOfRangeError,
    UnknownCategoryError,
)
from devpanel.models.rules import RuleConfig
from devpanel.models.scores import Child, ScoreEntry


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------

def build_score_entry(
    day: date,
    evaluator: str,
    category_scores: dict[int, int],
    config: RuleConfig,
    descriptions: Optional[dict[int, str]] = None,
) -> ScoreEntry:
    """Validate one evaluation against `config`. Every category must be scored."""
    system = config.score_system
    category_count = len(config.categories)

    for index, score in category_scores.items():
        if not 0 <= index < category_count:
            raise UnknownCategoryError(index, category_count)
        if not system.min <= score <= system.max:
            raise ScoreOutOfRangeError(index, score, system.min, system.max)

    missing = [
        name for i, name in enumerate(config.categories) if i not in category_scores
    ]
    if missing:
        raise IncompleteEvaluationError(missing)

    notes = {i: text for i, text in (descriptions or {}).items() if text and text.strip()}
    for index in notes:
        if not 0 <= index < category_count:
            raise UnknownCategoryError(index, category_count)

    return ScoreEntry(
        date=day,
        evaluator=evaluator,
        category_scores=dict(sorted(category_scores.items())),
        descriptions=notes,
    )


def record_evaluation(child: Child, entry: ScoreEntry) -> Child:
    """Replace any entry for `entry.date` and put the new one first."""
    kept = [s for s in child.scores if s.date != entry.date]
    return replace(child, scores=[entry, *kept])


def mark_absent(child: Child, day: date) -> Child:
    """Drop the entry for `day`, if any. Absent days are not evaluated."""
    return replace(child, scores=[s for s in child.scores if s.date != day])


def archive_child(child: Child) -> Child:
    return replace(child, archived=True)


# ---------------------------------------------------------------------------
# Lookup / listing
# ---------------------------------------------------------------------------

def find_child(children: Iterable[Child], child_id: str) -> Child:
    for child in children:
        if child.id == child_id:
            return child
    raise ChildNotFoundError(child_id)


def _collation_key(name: str) -> tuple[str, str]:
    # Accent-insensitive primary key, case-insensitive tiebreak.
    folded = name.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, folded


def list_children(
    children: Iterable[Child],
    query: Optional[str] = None,
    include_archived: bool = False,
) -> list[Child]:
    needle = (query or "").strip().casefold()
    selected = [
        c for c in children
        if (include_archived or not c.archived)
        and (not needle or needle in c.name.casefold())
    ]
    return sorted(selected, key=lambda c: _collation_key(c.name))
