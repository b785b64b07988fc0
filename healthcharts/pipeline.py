"""
Chart building pipeline.

Runs raw records through aggregation, series building, downsampling and
label formatting for each configured chart.
"""

import logging
from datetime import date
from typing import Iterable, Optional

from healthcharts.aggregator import aggregate, to_series, trailing_window
from healthcharts.config import ChartConfig, EngineConfig
from healthcharts.downsampler import downsample, sampling_indices
from healthcharts.labels import format_labels, format_tooltip_label, tick_count
from healthcharts.models import ChartPayload, RawRecord, SampledSeries, Series

logger = logging.getLogger(__name__)


def sample(series: Series, max_points: int) -> SampledSeries:
    """Downsample a series and label the points that were kept."""
    reduced = downsample(series, max_points)
    if len(reduced) == len(series):
        indices = list(range(len(series)))
    else:
        indices = sampling_indices(len(series), max_points)
    return SampledSeries(
        dates=reduced.dates,
        values=reduced.values,
        labels=format_labels(reduced.dates),
        indices=indices,
    )


def build_chart(
    records: Iterable[RawRecord],
    chart: ChartConfig,
    today: Optional[date] = None
) -> ChartPayload:
    """
    Build the renderer payload for one chart.

    Windowed charts end at `today` when given, otherwise at the latest day
    that has data.
    """
    relevant = [r for r in records if chart.reads(r)]
    result = aggregate(relevant, chart.metric_specs)

    if chart.window_days is not None and (today is not None or result.buckets):
        end = today or max(result.buckets)
        start, end = trailing_window(end, chart.window_days)
        series = to_series(result, chart.metric_names, start=start, end=end)
    else:
        series = to_series(result, chart.metric_names)

    sampled = sample(series, chart.max_points)
    logger.info("Chart %s: %d records, %d days, %d points plotted",
                chart.name, len(relevant), len(series), len(sampled))

    return ChartPayload(
        name=chart.name,
        title=chart.title,
        series=sampled,
        tooltips=[format_tooltip_label(day) for day in sampled.dates],
        original_points=len(series),
        tick_count=tick_count(len(sampled)),
        skipped=result.skipped,
        dataset_labels={spec.name: spec.display_name for spec in chart.metric_specs},
    )


def build_charts(
    records: Iterable[RawRecord],
    config: EngineConfig,
    today: Optional[date] = None
) -> dict[str, ChartPayload]:
    """Build every chart in `config` from the same records."""
    records = list(records)
    return {chart.name: build_chart(records, chart, today) for chart in config.charts}
