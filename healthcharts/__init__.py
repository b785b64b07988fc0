"""Health Chart Data Engine.

This package contains the core modules: models, config, data_loader,
aggregator, downsampler, labels, summary, pipeline, reporter.
"""

from healthcharts.aggregator import aggregate, to_series, trailing_window
from healthcharts.downsampler import downsample, sampling_indices
from healthcharts.labels import format_labels, format_tooltip_label
from healthcharts.pipeline import build_chart, build_charts, sample

__all__ = [
    'aggregate',
    'to_series',
    'trailing_window',
    'downsample',
    'sampling_indices',
    'format_labels',
    'format_tooltip_label',
    'sample',
    'build_chart',
    'build_charts',
]
