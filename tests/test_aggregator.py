"""
Tests for the Period Aggregator and cohort summaries.

Periods are windows of the N most recent *distinct evaluation dates*.
"""
from __future__ import annotations

from datetime import date

import pytest

from devpanel.models.rules import CancelRule, Period, VetoRule
from devpanel.services.aggregator import (
    aggregate,
    category_averages,
    distinct_dates_desc,
    flatten_scores,
    summarize_achievement,
)
from tests.factories import days_back, make_child, make_config, make_entry

TODAY = date(2026, 3, 20)


class TestOverall:
    def test_no_scores(self):
        config = make_config(periods=[Period(days=6, name="6-Day")])
        stats = aggregate(make_child([]), config)
        assert stats.average is None
        assert stats.remaining_zeros == 0
        assert stats.total_scores == 0
        assert stats.veto_applied is False
        assert stats.periods == [None]

    def test_no_periods(self):
        child = make_child([make_entry(TODAY, 2, 1, 1, 2)])
        stats = aggregate(child, make_config())
        assert stats.average == pytest.approx(1.5)
        assert stats.periods == []

    def test_flattens_all_dates(self):
        child = make_child([
            make_entry(TODAY, 2, 2),
            make_entry(date(2026, 3, 19), 0, 0),
        ])
        stats = aggregate(child, make_config())
        assert stats.total_scores == 4
        assert stats.remaining_zeros == 2
        assert stats.average == pytest.approx(1.0)

    def test_overall_veto(self):
        child = make_child([make_entry(TODAY, 0, 0, 0, 2)])
        config = make_config(veto=VetoRule(enabled=True, zero_count=3))
        stats = aggregate(child, config)
        assert stats.veto_applied is True
        assert stats.average == 0.0


class TestPeriods:
    def test_window_uses_most_recent_dates(self):
        dates = days_back(TODAY, 5)
        # Three most recent days all 2s, two oldest all 0s.
        entries = [make_entry(d, 2, 2, 2, 2) for d in dates[:3]]
        entries += [make_entry(d, 0, 0, 0, 0) for d in dates[3:]]
        config = make_config(periods=[Period(days=3, name="3-day")])

        period = aggregate(make_child(entries), config).periods[0]
        assert period.days_count == 3
        assert period.average == pytest.approx(2.0)
        assert period.total_scores == 12
        assert period.achieved is True
        assert period.name == "3-day"
        assert period.days == 3

    def test_short_history(self):
        entries = [make_entry(d, 1, 2, 1, 2) for d in days_back(TODAY, 2)]
        config = make_config(periods=[Period(days=6, name="6-day")])
        period = aggregate(make_child(entries), config).periods[0]
        assert period.days_count == 2
        assert period.total_scores == 8

    def test_window_counts_evaluation_dates_not_calendar_days(self):
        # Dates spread over a month; a 2-day period still takes the last two.
        entries = [
            make_entry(date(2026, 3, 1), 0, 0, 0, 0),
            make_entry(date(2026, 3, 10), 2, 2, 2, 2),
            make_entry(date(2026, 3, 30), 2, 2, 2, 2),
        ]
        config = make_config(periods=[Period(days=2, name="2-day")])
        period = aggregate(make_child(entries), config).periods[0]
        assert period.days_count == 2
        assert period.average == pytest.approx(2.0)

    def test_order_of_entries_irrelevant(self):
        dates = days_back(TODAY, 4)
        newest_first = [make_entry(d, i % 3, 2, 1, 0) for i, d in enumerate(dates)]
        config = make_config(periods=[Period(days=2, name="2-day")])
        a = aggregate(make_child(newest_first), config)
        b = aggregate(make_child(list(reversed(newest_first))), config)
        assert a == b

    def test_periods_in_config_order(self):
        entries = [make_entry(d, 2, 2, 2, 2) for d in days_back(TODAY, 12)]
        config = make_config(periods=[
            Period(days=12, name="12-day"),
            Period(days=6, name="6-day"),
        ])
        periods = aggregate(make_child(entries), config).periods
        assert [p.name for p in periods] == ["12-day", "6-day"]
        assert [p.days_count for p in periods] == [12, 6]

    def test_duplicate_dates_all_counted(self):
        entries = [make_entry(TODAY, 2, 2), make_entry(TODAY, 0, 0)]
        config = make_config(periods=[Period(days=1, name="1-day")])
        period = aggregate(make_child(entries), config).periods[0]
        assert period.days_count == 1
        assert period.total_scores == 4

    def test_period_vetoed_not_achieved(self):
        entries = [make_entry(d, 2, 2, 0, 0) for d in days_back(TODAY, 3)]
        config = make_config(
            threshold=0,
            veto=VetoRule(enabled=True, zero_count=2),
            periods=[Period(days=3, name="3-day")],
        )
        period = aggregate(make_child(entries), config).periods[0]
        assert period.veto_applied is True
        assert period.achieved is False

    def test_period_none_when_entries_have_no_scores(self):
        entries = [make_entry(TODAY)]
        config = make_config(periods=[Period(days=3, name="3-day")])
        assert aggregate(make_child(entries), config).periods == [None]

    def test_period_none_when_everything_cancelled(self):
        entries = [make_entry(TODAY, 2, 0)]
        cancel = CancelRule(enabled=True, high_score=2, high_count=1, low_score=0, low_count=1)
        config = make_config(cancel=cancel, periods=[Period(days=3, name="3-day")])
        assert aggregate(make_child(entries), config).periods == [None]

    @pytest.mark.parametrize("history,days", [(1, 6), (5, 3), (12, 12), (20, 6)])
    def test_days_count_bounded(self, history, days):
        entries = [make_entry(d, 1, 1) for d in days_back(TODAY, history)]
        config = make_config(periods=[Period(days=days, name="p")])
        period = aggregate(make_child(entries), config).periods[0]
        assert period.days_count == min(days, history)
        assert period.days_count <= days


class TestHelpers:
    def test_flatten_scores(self):
        entries = [make_entry(TODAY, 2, 1), make_entry(TODAY, 0)]
        assert sorted(flatten_scores(entries)) == [0, 1, 2]

    def test_distinct_dates_desc(self):
        d1, d2 = date(2026, 1, 1), date(2026, 1, 2)
        entries = [make_entry(d1, 1), make_entry(d2, 1), make_entry(d1, 2)]
        assert distinct_dates_desc(entries) == [d2, d1]


class TestCohortSummary:
    def _children(self):
        dates = days_back(TODAY, 3)
        return [
            make_child([make_entry(d, 2, 2, 2, 2) for d in dates], id="a", name="A"),
            make_child([make_entry(d, 0, 1, 1, 1) for d in dates], id="b", name="B"),
            make_child([], id="c", name="C"),
            make_child([make_entry(d, 2, 2, 2, 2) for d in dates], id="d", name="D", archived=True),
        ]

    def test_achievement_counts(self):
        config = make_config(periods=[Period(days=3, name="3-day")])
        [summary] = summarize_achievement(self._children(), config)
        assert summary.total == 2          # C has no data, D archived
        assert summary.achieved == 1
        assert summary.not_achieved == 1
        assert summary.percentage == 50

    def test_achievement_including_archived(self):
        config = make_config(periods=[Period(days=3, name="3-day")])
        [summary] = summarize_achievement(self._children(), config, include_archived=True)
        assert summary.total == 3
        assert summary.achieved == 2
        assert summary.percentage == 67

    def test_percentage_rounds_half_up(self):
        dates = days_back(TODAY, 3)
        children = [make_child([make_entry(d, 2, 2, 2, 2) for d in dates], id="a")]
        children += [
            make_child([make_entry(d, 0, 1, 1, 1) for d in dates], id=f"n{i}")
            for i in range(7)
        ]
        config = make_config(periods=[Period(days=3, name="3-day")])
        [summary] = summarize_achievement(children, config)
        assert (summary.achieved, summary.total) == (1, 8)
        assert summary.percentage == 13

    def test_achievement_no_data(self):
        config = make_config(periods=[Period(days=3, name="3-day")])
        [summary] = summarize_achievement([], config)
        assert summary.total == 0
        assert summary.percentage == 0

    def test_category_averages(self):
        averages = category_averages(self._children(), make_config())
        assert [a.name for a in averages] == [
            "Personal Tasks", "Shared Space", "Education", "General Attitude",
        ]
        assert averages[0].average == pytest.approx(1.0)
        assert averages[0].count == 6
        assert averages[1].average == pytest.approx(1.5)

    def test_category_without_scores_is_zero(self):
        child = make_child([make_entry(TODAY, 2)])
        averages = category_averages([child], make_config())
        assert averages[0].average == 2.0
        assert averages[3].average == 0.0
        assert averages[3].count == 0
