"""Tests for day grouping, category summaries, search and the hours histogram."""

from datetime import date

import pytest

from exocortex.intervals import resolve_intervals
from exocortex.summary import category_histogram, group_days, search_events, summarize_categories
from shared.exceptions import InvalidDateRangeError
from tests.conftest import NEW_YORK, UTC_TZ, at, make_event


@pytest.fixture
def week_events():
    return [
        make_event(at("2024-03-11", 7), "Sleep", notes="restless"),
        make_event(at("2024-03-11", 18), "Work", notes="Shipped the release"),
        make_event(at("2024-03-13", 7), "Sleep"),
        make_event(at("2024-03-13", 9), "Gym", notes="leg day"),
        make_event(at("2024-03-13", 17), "work"),
    ]


class TestGroupDays:
    def test_includes_empty_days_by_default(self, week_events):
        days = group_days(week_events, date(2024, 3, 10), date(2024, 3, 13), UTC_TZ)
        assert [d.date_key for d in days] == [
            "2024-03-10",
            "2024-03-11",
            "2024-03-12",
            "2024-03-13",
        ]
        assert [len(d.events) for d in days] == [0, 2, 0, 3]

    def test_skip_empty_days(self, week_events):
        days = group_days(
            week_events, date(2024, 3, 10), date(2024, 3, 13), UTC_TZ, include_empty=False
        )
        assert [d.date_key for d in days] == ["2024-03-11", "2024-03-13"]

    def test_events_outside_range_ignored(self, week_events):
        (day,) = group_days(week_events, date(2024, 3, 13), date(2024, 3, 13), UTC_TZ)
        assert [e.category for e in day.events] == ["Sleep", "Gym", "work"]

    def test_local_dates(self):
        # 02:00 UTC on the 12th is the evening of the 11th in New York
        events = [make_event(at("2024-03-12", 2))]
        days = group_days(events, date(2024, 3, 11), date(2024, 3, 12), NEW_YORK)
        assert [len(d.events) for d in days] == [1, 0]

    def test_reversed_range_rejected(self, week_events):
        with pytest.raises(InvalidDateRangeError):
            group_days(week_events, date(2024, 3, 13), date(2024, 3, 10), UTC_TZ)


class TestSummarizeCategories:
    def test_split_by_notes_in_first_seen_order(self):
        events = [
            make_event(at("2024-03-14", 8), "Sleep"),
            make_event(at("2024-03-14", 12), "Work", notes="planning"),
            make_event(at("2024-03-14", 13), "Lunch"),
            make_event(at("2024-03-14", 17), " Work"),
        ]
        summaries = summarize_categories(resolve_intervals(events, UTC_TZ))

        assert [s.category for s in summaries] == ["Sleep", "Work", "Lunch"]
        work = summaries[1]
        assert work.count == 2
        assert [iv.event.notes for iv in work.with_notes] == ["planning"]
        assert len(work.without_notes) == 1


class TestSearch:
    def test_matches_notes_and_category_newest_first(self, week_events):
        results = search_events(week_events, "WORK")
        assert [e.category for e in results] == ["work", "Work"]

    def test_matches_inside_notes(self, week_events):
        results = search_events(week_events, "release")
        assert [e.notes for e in results] == ["Shipped the release"]

    def test_blank_query_matches_nothing(self, week_events):
        assert search_events(week_events, "   ") == []

    def test_no_match(self, week_events):
        assert search_events(week_events, "swimming") == []


class TestCategoryHistogram:
    def test_hours_and_counts_largest_first(self):
        events = [
            make_event(at("2024-03-14", 8), "Sleep"),
            make_event(at("2024-03-14", 12), "Work"),
            make_event(at("2024-03-14", 13), "Lunch"),
            make_event(at("2024-03-14", 17), "Work "),
        ]
        totals = category_histogram(resolve_intervals(events, UTC_TZ))

        assert [(t.category, t.hours, t.count) for t in totals] == [
            ("Sleep", 8.0, 1),
            ("Work", 8.0, 2),
            ("Lunch", 1.0, 1),
        ]

    def test_limit(self):
        events = [make_event(at("2024-03-14", h), f"Cat{h}") for h in range(1, 6)]
        totals = category_histogram(resolve_intervals(events, UTC_TZ), limit=2)
        assert len(totals) == 2
