"""
Tests for roster operations: building entries, one entry per date,
absence, archiving, search and ordering.
"""
from __future__ import annotations

from datetime import date

import pytest

from devpanel.core.errors import (
    ChildNotFoundError,
    IncompleteEvaluationError,
    ScoreOutOfRangeError,
    UnknownCategoryError,
)
from devpanel.services.roster import (
    archive_child,
    build_score_entry,
    find_child,
    list_children,
    mark_absent,
    record_evaluation,
)
from tests.factories import make_child, make_config, make_entry

DAY = date(2026, 4, 1)


class TestBuildScoreEntry:
    def test_complete_entry(self):
        entry = build_score_entry(
            DAY, "Ms. K", {3: 1, 0: 2, 1: 0, 2: 2}, make_config(),
            descriptions={2: "Great reading", 1: "  "},
        )
        assert entry.category_scores == {0: 2, 1: 0, 2: 2, 3: 1}
        assert list(entry.category_scores) == [0, 1, 2, 3]
        assert entry.descriptions == {2: "Great reading"}

    def test_missing_category(self):
        with pytest.raises(IncompleteEvaluationError) as exc_info:
            build_score_entry(DAY, "x", {0: 2, 1: 1}, make_config())
        assert exc_info.value.details["missing_categories"] == [
            "Education", "General Attitude",
        ]

    def test_score_out_of_range(self):
        with pytest.raises(ScoreOutOfRangeError) as exc_info:
            build_score_entry(DAY, "x", {0: 2, 1: 3, 2: 1, 3: 1}, make_config())
        assert exc_info.value.details["category_index"] == 1

    def test_unknown_category(self):
        with pytest.raises(UnknownCategoryError):
            build_score_entry(DAY, "x", {0: 2, 1: 1, 2: 1, 3: 1, 4: 1}, make_config())

    def test_description_for_unknown_category(self):
        with pytest.raises(UnknownCategoryError):
            build_score_entry(
                DAY, "x", {0: 2, 1: 1, 2: 1, 3: 1}, make_config(),
                descriptions={9: "??"},
            )


class TestRecordEvaluation:
    def test_prepends(self):
        old = make_entry(date(2026, 3, 31), 1, 1, 1, 1)
        child = record_evaluation(make_child([old]), make_entry(DAY, 2, 2, 2, 2))
        assert [e.date for e in child.scores] == [DAY, old.date]

    def test_replaces_same_date(self):
        child = make_child([
            make_entry(date(2026, 3, 31), 1, 1, 1, 1),
            make_entry(DAY, 0, 0, 0, 0),
        ])
        updated = record_evaluation(child, make_entry(DAY, 2, 2, 2, 2, evaluator="b"))
        assert len(updated.scores) == 2
        assert updated.scores[0].evaluator == "b"
        assert sum(1 for e in updated.scores if e.date == DAY) == 1
        # original untouched
        assert len(child.scores) == 2
        assert child.scores[1].category_scores[0] == 0

    def test_mark_absent(self):
        child = make_child([make_entry(DAY, 2), make_entry(date(2026, 3, 31), 1)])
        assert [e.date for e in mark_absent(child, DAY).scores] == [date(2026, 3, 31)]
        assert mark_absent(child, date(2020, 1, 1)).scores == child.scores


class TestRosterListing:
    def _roster(self):
        return [
            make_child([], id="1", name="zeynep"),
            make_child([], id="2", name="Çağan"),
            make_child([], id="3", name="Ali"),
            make_child([], id="4", name="Cem", archived=True),
            make_child([], id="5", name="ayşe"),
        ]

    def test_sorted_by_name_ignoring_case_and_accents(self):
        names = [c.name for c in list_children(self._roster())]
        assert names == ["Ali", "ayşe", "Çağan", "zeynep"]

    def test_archived_excluded_by_default(self):
        assert "Cem" not in [c.name for c in list_children(self._roster())]
        assert "Cem" in [c.name for c in list_children(self._roster(), include_archived=True)]

    def test_search_case_insensitive(self):
        found = list_children(self._roster(), query="ZEY")
        assert [c.id for c in found] == ["1"]

    def test_blank_query_returns_all_active(self):
        assert len(list_children(self._roster(), query="   ")) == 4

    def test_find_and_archive(self):
        child = find_child(self._roster(), "3")
        archived = archive_child(child)
        assert archived.archived is True
        assert child.archived is False

    def test_find_missing(self):
        with pytest.raises(ChildNotFoundError):
            find_child(self._roster(), "nope")
