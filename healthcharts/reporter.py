"""
Reporting and output functions module.

This module handles all display and output operations:
- Printing activity summary cards
- Printing per-chart sampling results
- Generating the JSON chart payload
- Saving JSON to file
"""

import json
from datetime import datetime
from zoneinfo import ZoneInfo

from healthcharts.models import ActivitySummary, ChartPayload


def print_activity_summary(summary: ActivitySummary, type_counts: dict):
    """Print the dashboard's summary cards."""
    print("\n" + "=" * 70)
    print("ACTIVITY SUMMARY")
    print("=" * 70)

    print(f"\n  Activities:     {summary.activity_count}")
    print(f"  Distance:       {summary.total_distance:.1f} km")
    print(f"  Duration:       {summary.total_duration} min")
    if summary.avg_heart_rate:
        print(f"  Avg heart rate: {summary.avg_heart_rate} bpm")
    else:
        print("  Avg heart rate: No data")

    if type_counts:
        total = sum(type_counts.values())
        print("\n  By type:")
        for activity_type, count in type_counts.items():
            print(f"      - {activity_type}: {count} ({round(count / total * 100)}%)")


def print_charts(charts: dict):
    """Print one block per chart: points kept, labels and values."""
    print("\n" + "=" * 70)
    print("CHART DATA")
    print("=" * 70)

    for chart in charts.values():
        series = chart.series
        print(f"\n{chart.title} [{chart.name}]")
        print("-" * 40)

        if not series.dates:
            print("  No data")
            continue

        print(f"  Points: {len(series)} of {chart.original_points} "
              f"({series.dates[0]} to {series.dates[-1]})")
        if chart.skipped:
            print(f"  Skipped records: {chart.skipped} (missing or invalid date)")

        for i, day in enumerate(series.dates):
            values = ", ".join(
                f"{chart.dataset_labels.get(name, name)}={_format_value(vals[i])}"
                for name, vals in series.values.items()
            )
            label = series.labels[i] or '.'
            print(f"      {day}  {label:>7}  {values}")


def _format_value(value) -> str:
    if value is None:
        return '-'
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.1f}"
    return f"{value:.0f}"


def chart_to_dict(chart: ChartPayload) -> dict:
    """JSON-serializable form of one chart payload."""
    series = chart.series
    return {
        "title": chart.title,
        "dates": [day.isoformat() for day in series.dates],
        "labels": series.labels,
        "tooltips": chart.tooltips,
        "datasets": [
            {
                "metric": name,
                "label": chart.dataset_labels.get(name, name),
                "data": values,
            }
            for name, values in series.values.items()
        ],
        "original_points": chart.original_points,
        "tick_count": chart.tick_count,
        "skipped_records": chart.skipped,
    }


def generate_json_output(
    charts: dict,
    record_counts: dict,
    reporting_timezone: str
) -> dict:
    """
    Generate the chart payload document handed to the rendering layer.
    """
    return {
        "metadata": {
            "generated_at": datetime.now(ZoneInfo('UTC')).isoformat(),
            "reporting_timezone": reporting_timezone,
            "records": record_counts,
            "skipped_records": sum(chart.skipped for chart in charts.values()),
        },
        "charts": {name: chart_to_dict(chart) for name, chart in charts.items()},
    }


def save_json_output(output: dict, filepath: str = 'chart_data.json'):
    """
    Save the chart payload to a JSON file.
    """
    with open(filepath, 'w') as f:
        json.dump(output, f, indent=2)
    print(f"JSON output saved to: {filepath}")
