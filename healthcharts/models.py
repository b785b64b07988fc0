"""
Data models for the Health Chart Data Engine.

This module defines the data structures used throughout the engine:
- RawRecord: One observed event (workout, nutrition log, sleep night)
- MetricSpec: How a named metric is reduced within a day
- DailyBucket: Per-metric sums and running means for one calendar date
- AggregationResult: Buckets plus the count of skipped records
- Series / SampledSeries: Date-aligned chart data
- ChartPayload: Everything a renderer needs for one chart
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, Optional


class RecordKind(str, Enum):
    """Source family a raw record came from."""
    ACTIVITY = 'activity'
    NUTRITION = 'nutrition'
    SLEEP = 'sleep'


class Reduction(str, Enum):
    """How same-day values of a metric are combined."""
    SUM = 'sum'
    MEAN = 'mean'


# Every metric a RawRecord can carry
METRIC_NAMES = (
    'calories_burned',
    'distance_km',
    'duration_min',
    'heart_rate',
    'calories_consumed',
    'protein',
    'carbs',
    'fat',
    'fiber',
    'sleep_score',
    'sleep_hours',
)


@dataclass(frozen=True)
class RawRecord:
    """One observed event, normalized to a calendar date."""
    date: Optional[date]  # None when the source date was missing or unparseable
    kind: RecordKind = RecordKind.ACTIVITY
    activity_type: Optional[str] = None
    calories_burned: Optional[float] = None
    distance_km: Optional[float] = None
    duration_min: Optional[float] = None
    heart_rate: Optional[float] = None
    calories_consumed: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    fiber: Optional[float] = None
    sleep_score: Optional[float] = None
    sleep_hours: Optional[float] = None

    def metric(self, name: str) -> Optional[float]:
        """Return the value of a named metric, or None when absent."""
        if name not in METRIC_NAMES:
            raise KeyError(f"Unknown metric '{name}'. Known: {', '.join(METRIC_NAMES)}")
        return getattr(self, name)

    @property
    def is_run(self) -> bool:
        return (self.activity_type or '').lower() == 'run'


RecordPredicate = Callable[[RawRecord], bool]


@dataclass(frozen=True)
class MetricSpec:
    """Reduction rule for one metric."""
    name: str
    reduction: Reduction = Reduction.SUM
    predicate: Optional[RecordPredicate] = None
    label: Optional[str] = None  # dataset name shown by the renderer

    def __post_init__(self):
        if self.name not in METRIC_NAMES:
            raise ValueError(
                f"Unknown metric '{self.name}'. Known: {', '.join(METRIC_NAMES)}"
            )
        try:
            object.__setattr__(self, 'reduction', Reduction(self.reduction))
        except ValueError:
            raise ValueError(
                f"Invalid reduction '{self.reduction}' for metric '{self.name}'. "
                f"Use 'sum' or 'mean'"
            )

    @property
    def display_name(self) -> str:
        return self.label or self.name

    def applies_to(self, record: RawRecord) -> bool:
        return self.predicate is None or bool(self.predicate(record))


@dataclass
class DailyBucket:
    """Aggregated values for a single calendar date."""
    date: date
    sums: dict = field(default_factory=dict)
    means: dict = field(default_factory=dict)
    counts: dict = field(default_factory=dict)
    activity_types: list = field(default_factory=list)

    def add_to_sum(self, name: str, value: float) -> None:
        self.sums[name] = self.sums.get(name, 0) + value
        self.counts[name] = self.counts.get(name, 0) + 1

    def add_to_mean(self, name: str, value: float) -> None:
        # Running mean so a bucket never needs a second pass
        old_count = self.counts.get(name, 0)
        old_mean = self.means.get(name, 0.0)
        self.means[name] = (old_mean * old_count + value) / (old_count + 1)
        self.counts[name] = old_count + 1

    def value(self, name: str, reduction: Reduction = Reduction.SUM) -> Optional[float]:
        """Sum (default 0) or mean (default None) for a metric."""
        if Reduction(reduction) is Reduction.MEAN:
            return self.means.get(name)
        return self.sums.get(name, 0)

    def count(self, name: str) -> int:
        return self.counts.get(name, 0)


@dataclass
class AggregationResult:
    """Daily buckets plus the number of records that could not be bucketed."""
    buckets: dict
    skipped: int = 0
    specs: tuple = ()

    def __len__(self):
        return len(self.buckets)

    def values(self, name: str) -> dict:
        """Map of date -> reduced value for one metric."""
        spec = self.spec(name)
        return {day: bucket.value(name, spec.reduction) for day, bucket in self.buckets.items()}

    def spec(self, name: str) -> MetricSpec:
        for spec in self.specs:
            if spec.name == name:
                return spec
        raise KeyError(f"Metric '{name}' was not aggregated")


@dataclass
class Series:
    """Chronologically ordered dates with one parallel value list per metric."""
    dates: list
    values: dict = field(default_factory=dict)

    def __post_init__(self):
        self.dates = list(self.dates)
        self.values = {name: list(vals) for name, vals in self.values.items()}
        for name, vals in self.values.items():
            if len(vals) != len(self.dates):
                raise ValueError(
                    f"Series metric '{name}' has {len(vals)} values for {len(self.dates)} dates"
                )
        for prev, cur in zip(self.dates, self.dates[1:]):
            if not prev < cur:
                raise ValueError(f"Series dates must be strictly increasing: {prev} then {cur}")

    def __len__(self):
        return len(self.dates)

    @property
    def metrics(self) -> list:
        return list(self.values)

    def take(self, indices: list) -> 'Series':
        """New series holding only the given positions, for every metric."""
        return Series(
            dates=[self.dates[i] for i in indices],
            values={name: [vals[i] for i in indices] for name, vals in self.values.items()},
        )


@dataclass
class SampledSeries(Series):
    """A downsampled series with one axis label per retained point."""
    labels: list = field(default_factory=list)
    indices: list = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        if len(self.labels) != len(self.dates):
            raise ValueError(
                f"SampledSeries has {len(self.labels)} labels for {len(self.dates)} dates"
            )


@dataclass
class ActivitySummary:
    """Summary-card numbers for a list of activities."""
    total_distance: float = 0.0
    total_duration: int = 0
    avg_heart_rate: int = 0
    activity_count: int = 0


@dataclass
class ChartPayload:
    """Renderer-ready output for one chart."""
    name: str
    title: str
    series: SampledSeries
    tooltips: list
    original_points: int
    tick_count: int
    skipped: int = 0
    dataset_labels: dict = field(default_factory=dict)
