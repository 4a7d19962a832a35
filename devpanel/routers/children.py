"""
Children router — roster transforms over caller-supplied documents.

POST /children/evaluations  — save one day's evaluation for a child
POST /children/absence      — remove a child's evaluation for a day
POST /children/archive      — soft-delete a child in a roster
POST /children/search       — filter and sort a roster by name
"""
from fastapi import APIRouter

from devpanel.schemas.common import ErrorResponse
from devpanel.schemas.children import (
    ArchiveChildRequest,
    ChildListResponse,
    ChildSchema,
    MarkAbsentRequest,
    RecordEvaluationRequest,
    SearchChildrenRequest,
)
from devpanel.services.roster import (
    archive_child,
    build_score_entry,
    find_child,
    list_children,
    mark_absent,
    record_evaluation,
)
from devpanel.services.rule_config import load_dataset

router = APIRouter(prefix="/children", tags=["children"])


@router.post(
    "/evaluations",
    response_model=ChildSchema,
    summary="Save a day's evaluation for one child",
    responses={
        200: {"description": "Child with the new entry first in `scores`."},
        422: {"model": ErrorResponse, "description": "Missing category, unknown category or score out of range."},
    },
)
def save_evaluation(payload: RecordEvaluationRequest):
    """
    Every configured category must be scored. An existing entry for the same
    date is replaced, never duplicated. A legacy settings document migrates
    the child's stored history before the new entry is added.
    """
    outcome = load_dataset(payload.config, [payload.child.to_model()])
    config = outcome.config
    entry = build_score_entry(
        day=payload.date,
        evaluator=payload.evaluator,
        category_scores=payload.scores,
        config=config,
        descriptions=payload.descriptions,
    )
    child = record_evaluation(outcome.children[0], entry)
    return ChildSchema.from_model(child)


@router.post(
    "/absence",
    response_model=ChildSchema,
    summary="Mark a child absent on a day",
)
def save_absence(payload: MarkAbsentRequest):
    """Absent days carry no evaluation; any entry for that date is removed."""
    child = mark_absent(payload.child.to_model(), payload.date)
    return ChildSchema.from_model(child)


@router.post(
    "/archive",
    response_model=ChildListResponse,
    summary="Archive one child in a roster",
    responses={
        200: {"description": "Roster with the child flagged archived."},
        404: {"model": ErrorResponse, "description": "No child with that id in the roster."},
    },
)
def archive(payload: ArchiveChildRequest):
    """Archived children keep their history and stay out of default listings."""
    children = [c.to_model() for c in payload.children]
    target = find_child(children, payload.child_id)
    updated = [archive_child(c) if c.id == target.id else c for c in children]
    return ChildListResponse(
        total=len(updated),
        items=[ChildSchema.from_model(c) for c in updated],
    )


@router.post(
    "/search",
    response_model=ChildListResponse,
    summary="Filter a roster by name and sort it",
)
def search(payload: SearchChildrenRequest):
    """Case-insensitive substring match on name; archived excluded by default."""
    found = list_children(
        (c.to_model() for c in payload.children),
        query=payload.query,
        include_archived=payload.include_archived,
    )
    return ChildListResponse(
        total=len(found),
        items=[ChildSchema.from_model(c) for c in found],
    )
