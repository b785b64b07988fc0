"""
Chart configuration module.

Every chart is described by a ChartConfig: which metrics to aggregate and
how, how many points it may plot, and an optional trailing day window.
DEFAULT_CHARTS holds the dashboard's built-in charts.
"""

from dataclasses import dataclass, field, replace
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from healthcharts.models import MetricSpec, RawRecord, RecordKind, Reduction


DEFAULT_MAX_POINTS = 30
DEFAULT_WINDOW_DAYS = 30
DEFAULT_TIMEZONE = 'UTC'


def is_run(record: RawRecord) -> bool:
    return record.is_run


def is_weight_training(record: RawRecord) -> bool:
    return (record.activity_type or '').lower() == 'weighttraining'


def is_activity(record: RawRecord) -> bool:
    return record.kind is RecordKind.ACTIVITY


@dataclass(frozen=True)
class ChartConfig:
    """Aggregation and sampling settings for one chart."""
    name: str
    title: str
    metric_specs: tuple
    max_points: int = DEFAULT_MAX_POINTS
    window_days: Optional[int] = None  # None plots only days that have records
    kinds: tuple = ()  # record kinds the chart reads; empty reads all

    def __post_init__(self):
        object.__setattr__(self, 'metric_specs', tuple(self.metric_specs))
        object.__setattr__(self, 'kinds', tuple(RecordKind(k) for k in self.kinds))
        if not self.metric_specs:
            raise ValueError(f"Chart '{self.name}' needs at least one metric")
        names = [spec.name for spec in self.metric_specs]
        if len(set(names)) != len(names):
            raise ValueError(f"Chart '{self.name}' lists a metric more than once: {names}")
        if self.window_days is not None and self.window_days <= 0:
            raise ValueError(
                f"Chart '{self.name}': window must be a positive number of days, got {self.window_days}"
            )

    def reads(self, record: RawRecord) -> bool:
        return not self.kinds or record.kind in self.kinds

    @property
    def metric_names(self) -> list[str]:
        return [spec.name for spec in self.metric_specs]


@dataclass(frozen=True)
class EngineConfig:
    """Settings shared by every chart in one run."""
    reporting_timezone: str = DEFAULT_TIMEZONE
    charts: tuple = field(default_factory=lambda: DEFAULT_CHARTS)

    def __post_init__(self):
        try:
            ZoneInfo(self.reporting_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"Invalid timezone '{self.reporting_timezone}'. Use IANA timezone identifiers."
            )
        object.__setattr__(self, 'charts', tuple(self.charts))

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.reporting_timezone)

    def chart(self, name: str) -> ChartConfig:
        for chart in self.charts:
            if chart.name == name:
                return chart
        raise KeyError(f"Unknown chart '{name}'. Available: {', '.join(c.name for c in self.charts)}")

    def select(self, names) -> 'EngineConfig':
        """Copy of this config restricted to the named charts."""
        return replace(self, charts=tuple(self.chart(name) for name in names))

    def with_overrides(
        self,
        max_points: Optional[int] = None,
        window_days: Optional[int] = None
    ) -> 'EngineConfig':
        """Copy with the point budget and/or window applied to every chart."""
        charts = []
        for chart in self.charts:
            changes = {}
            if max_points is not None:
                changes['max_points'] = max_points
            if window_days is not None:
                changes['window_days'] = window_days
            charts.append(replace(chart, **changes))
        return replace(self, charts=tuple(charts))


DEFAULT_CHARTS = (
    ChartConfig(
        name='run_heart_rate',
        title='Run Heart Rate (bpm)',
        metric_specs=(
            MetricSpec('heart_rate', Reduction.MEAN, predicate=is_run, label='Run Heart Rate'),
        ),
        max_points=30,
        kinds=(RecordKind.ACTIVITY,),
    ),
    ChartConfig(
        name='distance',
        title='Distance (km)',
        metric_specs=(MetricSpec('distance_km', Reduction.SUM, label='Distance'),),
        max_points=30,
        kinds=(RecordKind.ACTIVITY,),
    ),
    ChartConfig(
        name='weight_training',
        title='Weight Training (minutes)',
        metric_specs=(
            MetricSpec('duration_min', Reduction.SUM, predicate=is_weight_training,
                       label='Weight Training'),
        ),
        max_points=25,
        window_days=DEFAULT_WINDOW_DAYS,
        kinds=(RecordKind.ACTIVITY,),
    ),
    ChartConfig(
        name='calories_burned',
        title='Calories Burned',
        metric_specs=(MetricSpec('calories_burned', Reduction.SUM, label='Calories Burned'),),
        max_points=25,
        window_days=DEFAULT_WINDOW_DAYS,
        kinds=(RecordKind.ACTIVITY,),
    ),
    ChartConfig(
        name='macros',
        title='Macronutrients (g)',
        metric_specs=(
            MetricSpec('protein', Reduction.SUM, label='Protein'),
            MetricSpec('carbs', Reduction.SUM, label='Carbs'),
            MetricSpec('fat', Reduction.SUM, label='Fat'),
        ),
        max_points=30,
        window_days=DEFAULT_WINDOW_DAYS,
        kinds=(RecordKind.NUTRITION,),
    ),
    ChartConfig(
        name='sleep',
        title='Sleep',
        metric_specs=(
            MetricSpec('sleep_score', Reduction.MEAN, label='Sleep Score'),
            MetricSpec('sleep_hours', Reduction.MEAN, label='Sleep Hours'),
            MetricSpec('heart_rate', Reduction.MEAN, label='Sleep Heart Rate'),
        ),
        max_points=30,
        kinds=(RecordKind.SLEEP,),
    ),
    ChartConfig(
        name='overall',
        title='Overall (30 days)',
        metric_specs=(
            MetricSpec('heart_rate', Reduction.MEAN, predicate=is_activity, label='Heart Rate'),
            MetricSpec('calories_burned', Reduction.SUM, label='Calories Burned'),
            MetricSpec('calories_consumed', Reduction.SUM, label='Calories Consumed'),
            MetricSpec('protein', Reduction.SUM, label='Protein'),
            MetricSpec('carbs', Reduction.SUM, label='Carbs'),
            MetricSpec('fat', Reduction.SUM, label='Fat'),
            MetricSpec('fiber', Reduction.SUM, label='Fiber'),
        ),
        max_points=30,
        window_days=DEFAULT_WINDOW_DAYS,
    ),
)
