"""Tests for mood trend sampling and the stats window."""

from datetime import date

import pytest

from exocortex.intervals import resolve_intervals
from exocortex.mood import mood_series, parse_window, shift_window, window_end
from shared.exceptions import InvalidDateRangeError, InvalidWindowError
from tests.conftest import NEW_YORK, UTC_TZ, at, make_event


@pytest.fixture
def morning_events():
    return [
        make_event(at("2024-03-14", 6), happiness=0.2, wakefulness=0.1, health=0.3),
        make_event(at("2024-03-14", 12), happiness=0.8, wakefulness=0.9, health=0.7),
    ]


class TestMoodSeries:
    def test_hourly_samples_across_one_day(self, morning_events):
        intervals = resolve_intervals(morning_events, UTC_TZ)
        samples = mood_series(intervals, date(2024, 3, 14), date(2024, 3, 14), UTC_TZ)

        assert len(samples) == 24
        assert samples[0].bin_start == at("2024-03-14")
        assert samples[0].sample_time == at("2024-03-14", 1)
        assert samples[0].label == "Mar 14 00:00"
        assert samples[0].date_key == "2024-03-14"

    def test_backward_persistence(self, morning_events):
        intervals = resolve_intervals(morning_events, UTC_TZ)
        samples = mood_series(intervals, date(2024, 3, 14), date(2024, 3, 14), UTC_TZ)

        # Sample at exactly 06:00 belongs to the event ending then
        assert samples[5].sample_time == at("2024-03-14", 6)
        assert samples[5].happiness == 0.2
        assert samples[6].happiness == 0.8
        assert samples[11].sample_time == at("2024-03-14", 12)
        assert (samples[11].happiness, samples[11].wakefulness, samples[11].health) == (
            0.8,
            0.9,
            0.7,
        )

    def test_after_last_event_is_null_not_carried_forward(self, morning_events):
        intervals = resolve_intervals(morning_events, UTC_TZ)
        samples = mood_series(intervals, date(2024, 3, 14), date(2024, 3, 14), UTC_TZ)
        assert all(not s.has_data for s in samples[12:])
        assert samples[12].wakefulness is None and samples[12].health is None

    def test_before_first_interval_is_null(self, morning_events):
        intervals = resolve_intervals(morning_events, UTC_TZ)
        samples = mood_series(intervals, date(2024, 3, 13), date(2024, 3, 14), UTC_TZ)
        assert len(samples) == 48
        assert all(not s.has_data for s in samples[:24])
        assert samples[24].has_data

    def test_no_events(self):
        samples = mood_series([], date(2024, 3, 14), date(2024, 3, 15), UTC_TZ)
        assert len(samples) == 48
        assert not any(s.has_data for s in samples)

    def test_custom_sample_width(self, morning_events):
        intervals = resolve_intervals(morning_events, UTC_TZ)
        samples = mood_series(
            intervals, date(2024, 3, 14), date(2024, 3, 14), UTC_TZ, sample_minutes=15
        )
        assert len(samples) == 96

    def test_dst_day_has_23_hourly_samples(self):
        samples = mood_series([], date(2024, 3, 10), date(2024, 3, 10), NEW_YORK)
        assert len(samples) == 23

    def test_reversed_range_rejected(self):
        with pytest.raises(InvalidDateRangeError):
            mood_series([], date(2024, 3, 15), date(2024, 3, 14), UTC_TZ)


class TestStatsWindow:
    @pytest.mark.parametrize(
        "start, window, expected",
        [
            (date(2024, 3, 1), 1, date(2024, 3, 1)),
            (date(2024, 3, 1), 7, date(2024, 3, 7)),
            (date(2024, 3, 1), 28, date(2024, 3, 28)),
            (date(2024, 1, 15), "month", date(2024, 2, 14)),
            (date(2024, 1, 31), "month", date(2024, 2, 28)),
        ],
        ids=["one_day", "week", "four_weeks", "month", "month_from_31st"],
    )
    def test_window_end(self, start, window, expected):
        assert window_end(start, window) == expected

    def test_shift_month_window(self):
        assert shift_window(date(2024, 3, 31), "month", -1) == date(2024, 2, 29)

    def test_shift_day_window(self):
        assert shift_window(date(2024, 3, 1), 14, 1) == date(2024, 3, 15)

    def test_parse_window_accepts_strings(self):
        assert parse_window("7") == 7
        assert parse_window("month") == "month"

    @pytest.mark.parametrize("window", [0, 8, 30, "year", True, 7.5, None])
    def test_unsupported_window(self, window):
        with pytest.raises(InvalidWindowError):
            parse_window(window)
