"""
Chart pipeline and configuration tests.
Run with: python3 -m pytest tests/
"""

from datetime import date, timedelta

import pytest

from healthcharts.config import DEFAULT_CHARTS, ChartConfig, EngineConfig
from healthcharts.models import MetricSpec, RawRecord, RecordKind, Reduction, Series
from healthcharts.pipeline import build_chart, build_charts, sample

START = date(2025, 1, 1)


def daily_runs(n, start=START):
    return [
        RawRecord(date=start + timedelta(days=i), activity_type='Run',
                  distance_km=5.0, duration_min=30, heart_rate=140 + i % 10, calories_burned=400)
        for i in range(n)
    ]


class TestSample:
    def test_labels_follow_sampled_length(self):
        dates = [START + timedelta(days=i) for i in range(100)]
        series = Series(dates=dates, values={'fat': list(range(100))})
        sampled = sample(series, 25)
        assert len(sampled.labels) == len(sampled.dates) <= 25
        assert sampled.indices[0] == 0 and sampled.indices[-1] == 99
        assert sampled.dates == [dates[i] for i in sampled.indices]

    def test_short_series_keeps_all_indices(self):
        series = Series(dates=[START, START + timedelta(days=1)], values={'fat': [1, 2]})
        sampled = sample(series, 30)
        assert sampled.indices == [0, 1]
        assert sampled.labels == ['Wed', 'Thu']


class TestBuildChart:
    def test_run_heart_rate_chart(self):
        chart = EngineConfig().chart('run_heart_rate')
        records = daily_runs(60) + [
            RawRecord(date=START, activity_type='WeightTraining', heart_rate=100),
        ]
        payload = build_chart(records, chart)
        assert payload.original_points == 60
        assert len(payload.series) <= chart.max_points
        assert payload.series.values['heart_rate'][0] == 140
        assert payload.tooltips[0] == 'Wednesday, January 1, 2025'
        assert payload.dataset_labels == {'heart_rate': 'Run Heart Rate'}

    def test_windowed_chart_ends_at_today(self):
        chart = ChartConfig(
            name='calories', title='Calories',
            metric_specs=(MetricSpec('calories_burned', Reduction.SUM),),
            max_points=30, window_days=10,
        )
        records = daily_runs(3, start=date(2025, 1, 5))
        payload = build_chart(records, chart, today=date(2025, 1, 10))
        assert payload.original_points == 10
        assert payload.series.dates[0] == date(2025, 1, 1)
        assert payload.series.dates[-1] == date(2025, 1, 10)
        assert payload.series.values['calories_burned'] == [0, 0, 0, 0, 400, 400, 400, 0, 0, 0]

    def test_windowed_chart_without_data_or_today_is_empty(self):
        chart = EngineConfig().chart('calories_burned')
        payload = build_chart([], chart)
        assert len(payload.series) == 0
        assert payload.original_points == 0

    def test_chart_ignores_other_record_kinds(self):
        chart = EngineConfig().chart('distance')
        records = daily_runs(2) + [RawRecord(date=date(2025, 2, 1), kind=RecordKind.NUTRITION, protein=90)]
        payload = build_chart(records, chart)
        assert payload.series.dates == [START, START + timedelta(days=1)]

    def test_skipped_records_reported(self):
        chart = EngineConfig().chart('distance')
        payload = build_chart(daily_runs(2) + [RawRecord(date=None, distance_km=3.0)], chart)
        assert payload.skipped == 1


class TestBuildCharts:
    def test_every_default_chart_built(self):
        charts = build_charts(daily_runs(40), EngineConfig(), today=date(2025, 2, 9))
        assert list(charts) == [chart.name for chart in DEFAULT_CHARTS]
        assert charts['sleep'].original_points == 0
        assert charts['macros'].original_points == 30
        assert all(len(c.series) <= cfg.max_points for c, cfg in zip(charts.values(), DEFAULT_CHARTS))


class TestOverallChart:
    def test_reads_every_record_kind(self):
        records = daily_runs(2) + [
            RawRecord(date=START, kind=RecordKind.NUTRITION, calories_consumed=2100, fiber=30, protein=120),
            RawRecord(date=START, kind=RecordKind.SLEEP, sleep_score=80),
        ]
        chart = EngineConfig().chart('overall')
        payload = build_chart(records, chart, today=START + timedelta(days=1))
        assert chart.window_days == 30
        assert chart.kinds == ()
        assert payload.original_points == 30
        values = payload.series.values
        assert values['calories_consumed'][-2:] == [2100, 0]
        assert values['fiber'][-2:] == [30, 0]
        assert values['protein'][-2:] == [120, 0]
        assert values['calories_burned'][-2:] == [400, 400]

    def test_heart_rate_ignores_sleep_records(self):
        records = daily_runs(1) + [RawRecord(date=START, kind=RecordKind.SLEEP, heart_rate=52)]
        payload = build_chart(records, EngineConfig().chart('overall'), today=START)
        assert payload.series.values['heart_rate'][-1] == 140


class TestSleepChart:
    def test_heart_rate_from_sleep_records_only(self):
        records = daily_runs(1) + [
            RawRecord(date=START, kind=RecordKind.SLEEP, sleep_score=80, sleep_hours=7.5, heart_rate=52),
            RawRecord(date=START, kind=RecordKind.SLEEP, heart_rate=56),
        ]
        payload = build_chart(records, EngineConfig().chart('sleep'))
        assert payload.series.values['heart_rate'] == [54]
        assert payload.series.values['sleep_score'] == [80]
        assert payload.dataset_labels['heart_rate'] == 'Sleep Heart Rate'


class TestEngineConfig:
    def test_invalid_timezone(self):
        with pytest.raises(ValueError, match="Invalid timezone"):
            EngineConfig(reporting_timezone='Mars/Olympus')

    def test_select_and_overrides(self):
        config = EngineConfig().select(['distance', 'sleep']).with_overrides(max_points=10)
        assert [c.name for c in config.charts] == ['distance', 'sleep']
        assert all(c.max_points == 10 for c in config.charts)

    def test_unknown_chart(self):
        with pytest.raises(KeyError):
            EngineConfig().chart('steps')

    def test_record_kinds(self):
        assert {kind.value for kind in RecordKind} == {'activity', 'nutrition', 'sleep'}
        assert all(set(chart.kinds) <= set(RecordKind) for chart in DEFAULT_CHARTS)

    def test_chart_validation(self):
        with pytest.raises(ValueError, match="at least one metric"):
            ChartConfig(name='empty', title='Empty', metric_specs=())
        with pytest.raises(ValueError, match="window"):
            ChartConfig(name='x', title='X', metric_specs=(MetricSpec('fat'),), window_days=0)
