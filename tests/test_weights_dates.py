"""Tests für Gewichts-Normalisierung und Datums-/Uhrzeit-Prüfungen."""

from datetime import date, timedelta

import pytest

from models.module import Assessment
from planner.dates import (
    clamp_horizon,
    is_valid_time,
    iter_days,
    parse_iso_date,
    time_to_minutes,
    week_monday,
    weeks_between,
)
from planner.weights import normalize_assessments, normalize_weights


# ─── GEWICHTE ─────────────────────────────────────────────────────────────────

class TestNormalizeWeights:
    def test_exact_100_unchanged(self):
        assert normalize_weights([60, 40]) == [60, 40]

    def test_sum_99_gets_one_point(self):
        """33/33/33: Rest geht bei Gleichstand an die erste Position."""
        assert normalize_weights([33, 33, 33]) == [34, 33, 33]

    def test_sum_101_scaled_down(self):
        result = normalize_weights([34, 34, 33])
        assert sum(result) == 100
        assert result == [34, 33, 33]

    def test_largest_remainder_wins(self):
        """50/30/19 → 50.5/30.3/19.19: der größte Bruchteil bekommt den Punkt."""
        result = normalize_weights([50, 30, 19])
        assert sum(result) == 100
        assert result == [51, 30, 19]

    def test_single_item_always_100(self):
        assert normalize_weights([70]) == [100]
        assert normalize_weights([0]) == [100]
        assert normalize_weights([250]) == [100]

    def test_zero_sum_split_evenly(self):
        """Summe 0: 100 gleichmäßig, die ersten 100 % n bekommen +1."""
        assert normalize_weights([0, 0, 0]) == [34, 33, 33]
        assert normalize_weights([0, 0, 0, 0, 0, 0]) == [17, 17, 17, 17, 16, 16]

    def test_negative_weights_clamped(self):
        result = normalize_weights([-20, 50])
        assert result == [0, 100]

    def test_all_negative_treated_as_zero_sum(self):
        assert normalize_weights([-5, -5]) == [50, 50]

    def test_empty_input(self):
        assert normalize_weights([]) == []

    def test_order_and_count_preserved(self):
        weights = [10, 80, 5, 7]
        result = normalize_weights(weights)
        assert len(result) == 4
        assert sum(result) == 100
        assert result[1] > result[0] > result[3] > result[2]

    @pytest.mark.parametrize("weights", [
        [1, 1, 1], [99, 2], [7, 13, 29, 51], [200, 100, 50], [3], [0, 1],
    ])
    def test_always_sums_to_100(self, weights):
        result = normalize_weights(weights)
        assert sum(result) == 100
        assert all(w >= 0 for w in result)


class TestNormalizeAssessments:
    def test_returns_new_instances_with_weights(self):
        a = Assessment(type="Klausur", weight=50)
        b = Assessment(type="Projekt", weight=49)
        result = normalize_assessments([a, b])
        assert [x.weight for x in result] == [51, 49]
        assert result[0].id == a.id
        assert a.weight == 50   # Original unverändert

    def test_unchanged_weights_keep_objects(self):
        a = Assessment(type="Klausur", weight=100)
        assert normalize_assessments([a])[0] is a


# ─── WOCHEN / UHRZEITEN ───────────────────────────────────────────────────────

class TestWeeksBetween:
    def test_exact_weeks(self):
        assert weeks_between(date(2026, 1, 5), date(2026, 1, 19)) == 2

    def test_partial_week_rounds_up(self):
        assert weeks_between(date(2026, 1, 5), date(2026, 1, 6)) == 1

    def test_same_day_is_zero(self):
        assert weeks_between(date(2026, 1, 5), date(2026, 1, 5)) == 0

    def test_end_before_start_is_zero(self, caplog):
        assert weeks_between(date(2026, 2, 1), date(2026, 1, 1)) == 0
        assert "vor Startdatum" in caplog.text


class TestTimeFormat:
    @pytest.mark.parametrize("value", ["00:00", "09:30", "23:59", "12:05"])
    def test_valid(self, value):
        assert is_valid_time(value)

    @pytest.mark.parametrize("value", [
        "24:00", "9:30", "09:60", "09-30", "", None, 930, "09:30:00", " 09:30", "09:00\n",
    ])
    def test_invalid(self, value):
        assert not is_valid_time(value)

    def test_time_to_minutes(self):
        assert time_to_minutes("09:30") == 570
        assert time_to_minutes("00:00") == 0


class TestParseIsoDate:
    def test_valid(self):
        assert parse_iso_date("2026-03-15") == date(2026, 3, 15)

    def test_date_passthrough(self):
        assert parse_iso_date(date(2026, 3, 15)) == date(2026, 3, 15)

    @pytest.mark.parametrize("value", [
        "15.03.2026", "2026-02-30", "2026-3-5", "", None, 20260315, "morgen",
    ])
    def test_invalid(self, value):
        assert parse_iso_date(value) is None


# ─── HORIZONT ─────────────────────────────────────────────────────────────────

class TestClampHorizon:
    START = date(2026, 10, 19)

    def test_normal_horizon_unchanged(self):
        end = self.START + timedelta(days=100)
        assert clamp_horizon(self.START, end) == end

    def test_short_horizon_extended_by_21_days(self):
        end = self.START + timedelta(days=3)
        assert clamp_horizon(self.START, end) == end + timedelta(days=21)

    def test_end_before_start_extended_from_start(self):
        end = self.START - timedelta(days=10)
        assert clamp_horizon(self.START, end) == self.START + timedelta(days=21)

    def test_exactly_7_days_unchanged(self):
        end = self.START + timedelta(days=7)
        assert clamp_horizon(self.START, end) == end

    def test_long_horizon_clamped_to_365(self):
        end = self.START + timedelta(days=500)
        assert clamp_horizon(self.START, end) == self.START + timedelta(days=365)

    def test_exactly_365_unchanged(self):
        end = self.START + timedelta(days=365)
        assert clamp_horizon(self.START, end) == end


class TestDayHelpers:
    def test_iter_days_inclusive(self):
        days = list(iter_days(date(2026, 1, 1), date(2026, 1, 3)))
        assert days == [date(2026, 1, 1), date(2026, 1, 2), date(2026, 1, 3)]

    def test_iter_days_empty_when_reversed(self):
        assert list(iter_days(date(2026, 1, 3), date(2026, 1, 1))) == []

    def test_week_monday(self):
        assert week_monday(date(2026, 10, 22)) == date(2026, 10, 19)   # Donnerstag
        assert week_monday(date(2026, 10, 19)) == date(2026, 10, 19)
