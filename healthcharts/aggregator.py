"""
Daily bucketing module.

This module handles:
- Grouping raw records by calendar date
- Reducing each day to per-metric sums or running means
- Counting records that could not be attributed to a date
- Turning buckets into an ordered, date-aligned Series
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from healthcharts.models import (
    AggregationResult,
    DailyBucket,
    MetricSpec,
    RawRecord,
    Reduction,
    Series,
)

logger = logging.getLogger(__name__)


def coerce_date(value) -> Optional[date]:
    """
    Normalize a record date to a datetime.date.

    Accepts date objects (datetimes are truncated as-is) and ISO 8601 strings;
    anything else, including None, yields None.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
        except ValueError:
            return None
    return None


def _validate_specs(metric_specs: Iterable[MetricSpec]) -> tuple:
    specs = tuple(metric_specs)
    seen = set()
    for spec in specs:
        if not isinstance(spec, MetricSpec):
            raise TypeError(f"Expected MetricSpec, got {type(spec).__name__}")
        if spec.name in seen:
            raise ValueError(f"Metric '{spec.name}' is specified more than once")
        seen.add(spec.name)
    return specs


def aggregate(
    records: Iterable[RawRecord],
    metric_specs: Iterable[MetricSpec]
) -> AggregationResult:
    """
    Group records by calendar date and reduce each metric per day.

    Summed metrics add up every record that defines them. Averaged metrics
    keep a running mean and a count, so a record without the metric leaves
    the day's mean untouched. A spec's predicate is checked before a record
    is folded into that metric.

    Records without a usable date are skipped and counted, never raised.
    """
    specs = _validate_specs(metric_specs)
    buckets: dict[date, DailyBucket] = {}
    skipped = 0

    for idx, record in enumerate(records):
        day = coerce_date(record.date)
        if day is None:
            skipped += 1
            logger.debug("Skipping record %d: missing or invalid date %r", idx, record.date)
            continue

        bucket = buckets.get(day)
        if bucket is None:
            bucket = buckets[day] = DailyBucket(date=day)

        if record.activity_type and record.activity_type not in bucket.activity_types:
            bucket.activity_types.append(record.activity_type)

        for spec in specs:
            value = record.metric(spec.name)
            if value is None or not spec.applies_to(record):
                continue
            if spec.reduction is Reduction.MEAN:
                bucket.add_to_mean(spec.name, value)
            else:
                bucket.add_to_sum(spec.name, value)

    if skipped:
        logger.warning("Skipped %d record(s) with missing or invalid dates", skipped)

    return AggregationResult(buckets=buckets, skipped=skipped, specs=specs)


def trailing_window(end: date, days: int) -> tuple:
    """Inclusive (start, end) covering the last `days` calendar days."""
    if days <= 0:
        raise ValueError(f"Window must cover at least one day, got {days}")
    return end - timedelta(days=days - 1), end


def to_series(
    result: AggregationResult,
    metrics: Optional[Iterable[str]] = None,
    start: Optional[date] = None,
    end: Optional[date] = None
) -> Series:
    """
    Build an ordered Series from aggregated buckets.

    Without a window the dates are exactly the days that had records. With a
    window every calendar day in [start, end] gets a point: summed metrics
    read 0 on empty days, averaged metrics read None.
    """
    names = list(metrics) if metrics is not None else [spec.name for spec in result.specs]
    specs = [result.spec(name) for name in names]

    if start is None and end is None:
        days = sorted(result.buckets)
    else:
        if not result.buckets and (start is None or end is None):
            return Series(dates=[], values={name: [] for name in names})
        start = start or min(result.buckets)
        end = end or max(result.buckets)
        if start > end:
            raise ValueError(f"Window start {start} is after end {end}")
        days = [start + timedelta(days=i) for i in range((end - start).days + 1)]

    values = {}
    for spec in specs:
        column = []
        for day in days:
            bucket = result.buckets.get(day)
            if bucket is None:
                column.append(None if spec.reduction is Reduction.MEAN else 0)
            else:
                column.append(bucket.value(spec.name, spec.reduction))
        values[spec.name] = column

    return Series(dates=days, values=values)
