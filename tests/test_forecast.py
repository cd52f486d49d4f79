"""
tests/test_forecast.py
───────────────────────
Tests for brush replacement forecasting.
"""
from datetime import date, timedelta

import pytest

from src.analytics.forecast import (
    WearPoint,
    forecast_for_records,
    forecast_replacement,
    history_from_records,
)


def _points(start: date, values: list[float], every_days: int = 30) -> list[WearPoint]:
    return [WearPoint(date=start + timedelta(days=i * every_days), value=v) for i, v in enumerate(values)]


class TestForecastReplacement:
    def test_two_point_projection(self):
        d1 = date(2024, 1, 1)
        d2 = d1 + timedelta(days=7)
        f = forecast_replacement([WearPoint(d1, 40.0), WearPoint(d2, 38.0)])
        assert f is not None
        assert f.wear_rate_per_day == pytest.approx(2.0 / 7.0)
        assert f.days_remaining == pytest.approx(45.5)
        assert f.predicted_date == d2 + timedelta(days=45)
        assert f.current_value == 38.0
        assert f.confidence == pytest.approx(100.0)

    def test_unsorted_input(self):
        d1 = date(2024, 1, 1)
        d2 = d1 + timedelta(days=7)
        a = forecast_replacement([WearPoint(d2, 38.0), WearPoint(d1, 40.0)])
        b = forecast_replacement([WearPoint(d1, 40.0), WearPoint(d2, 38.0)])
        assert a == b

    def test_monthly_wear_rate(self):
        f = forecast_replacement(_points(date(2024, 1, 1), [45.0, 44.0, 43.0]))
        assert f.wear_rate_per_month == pytest.approx(1.0)

    def test_noisy_history_confidence_below_100(self, rng):
        values = [45.0 - 0.8 * i + float(rng.normal(0, 0.5)) for i in range(8)]
        f = forecast_replacement(_points(date(2024, 1, 1), values))
        assert f is not None
        assert 0.0 <= f.confidence < 100.0

    def test_already_below_threshold(self):
        pts = _points(date(2024, 1, 1), [27.0, 24.0])
        f = forecast_replacement(pts)
        assert f.days_remaining == 0.0
        assert f.predicted_date == pts[-1].date

    def test_custom_threshold(self):
        f = forecast_replacement(_points(date(2024, 1, 1), [40.0, 37.0]), critical_threshold=30.0)
        assert f.days_remaining == pytest.approx(70.0)


class TestNoForecast:
    def test_single_point(self):
        assert forecast_replacement([WearPoint(date(2024, 1, 1), 40.0)]) is None

    def test_empty(self):
        assert forecast_replacement([]) is None

    def test_same_date(self):
        d = date(2024, 1, 1)
        assert forecast_replacement([WearPoint(d, 40.0), WearPoint(d, 38.0)]) is None

    def test_flat(self):
        assert forecast_replacement(_points(date(2024, 1, 1), [40.0, 40.0, 40.0])) is None

    def test_rising(self):
        # new brushes fitted
        assert forecast_replacement(_points(date(2024, 1, 1), [30.0, 48.0])) is None

    def test_near_flat_wear_beyond_calendar(self):
        d1 = date(2024, 1, 1)
        history = [WearPoint(d1, 40.0), WearPoint(d1 + timedelta(days=10), 39.99999)]
        assert forecast_replacement(history) is None

    def test_slow_wear_within_calendar_still_forecast(self):
        d1 = date(2024, 1, 1)
        f = forecast_replacement([WearPoint(d1, 40.0), WearPoint(d1 + timedelta(days=100), 39.9)])
        assert f is not None
        assert f.predicted_date.year > 2060


class TestFromRecords:
    def test_history_uses_worst_brush_and_sorts(self, brush_record, today):
        older = brush_record.model_copy(update={
            "inspection_date": today - timedelta(days=30),
            "measurements": {"1A_inner": 31.0, "1A_center": 33.0},
        })
        history = history_from_records([brush_record, older])
        assert [p.date for p in history] == [older.inspection_date, today]
        assert [p.value for p in history] == [31.0, 28.5]

    def test_records_without_measurements_skipped(self, brush_record, today):
        empty = brush_record.model_copy(update={"measurements": {}, "inspection_date": today - timedelta(days=10)})
        assert len(history_from_records([brush_record, empty])) == 1

    def test_forecast_for_records(self, brush_record, today):
        older = brush_record.model_copy(update={
            "inspection_date": today - timedelta(days=30),
            "measurements": {"1A_inner": 31.5},
        })
        f = forecast_for_records([brush_record, older])
        # 3 mm over 30 days, 3.5 mm left above the limit
        assert f.days_remaining == pytest.approx(35.0)
        assert abs((f.predicted_date - today).days - 35) <= 1

