"""
Health Chart Data Engine - Main Module
======================================

Turns exported activity, nutrition and sleep records into chart-ready data.

Key Design Decisions:
1. Every timestamp is truncated to a calendar date in ONE reporting timezone
2. Days are aggregated with sums (calories, distance, minutes, macros) or
   running means (heart rate, sleep score)
3. Each chart is downsampled to its own point budget, always keeping the
   first and last day
4. Axis labels adapt to how many points are plotted

This module serves as the CLI entry point and orchestrates the workflow by
importing functions and classes from the healthcharts package.
"""

import argparse
import logging
from datetime import date

from healthcharts.config import DEFAULT_CHARTS, DEFAULT_TIMEZONE, EngineConfig
from healthcharts.data_loader import load_activity_data, load_nutrition_data, load_sleep_data
from healthcharts.pipeline import build_charts
from healthcharts.reporter import (
    generate_json_output,
    print_activity_summary,
    print_charts,
    save_json_output,
)
from healthcharts.summary import activity_summary, activity_type_counts


# =============================================================================
# CLI INTERFACE
# =============================================================================

def create_parser():
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='health-charts',
        description='Aggregates health records by day and prepares downsampled, labelled chart data.',
        epilog='Example: python main.py --activities data/activities.json --sleep data/sleep.json --output chart_data.json --show-charts',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--activities',
        type=str,
        help='Path to activity data JSON file'
    )

    parser.add_argument(
        '--nutrition',
        type=str,
        help='Path to nutrition log JSON file'
    )

    parser.add_argument(
        '--sleep',
        type=str,
        help='Path to sleep data JSON file'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='chart_data.json',
        help='Output file path for chart JSON data (default: chart_data.json)'
    )

    parser.add_argument(
        '--timezone',
        type=str,
        default=DEFAULT_TIMEZONE,
        help=f'IANA timezone used to assign records to calendar days (default: {DEFAULT_TIMEZONE})'
    )

    parser.add_argument(
        '--chart',
        action='append',
        choices=[chart.name for chart in DEFAULT_CHARTS],
        help='Only build this chart (repeatable; default: all charts)'
    )

    parser.add_argument(
        '--max-points',
        type=int,
        help='Override the point budget of every chart'
    )

    parser.add_argument(
        '--window-days',
        type=int,
        help='Plot every day of the trailing N-day window for every chart'
    )

    parser.add_argument(
        '--today',
        type=date.fromisoformat,
        help='End date (YYYY-MM-DD) of windowed charts (default: latest day with data)'
    )

    parser.add_argument(
        '--show-summary',
        action='store_true',
        help='Print activity summary cards (default: False)'
    )

    parser.add_argument(
        '--show-charts',
        action='store_true',
        help='Print the sampled points and labels of each chart (default: False)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show all outputs (summary, charts) and informational logging'
    )

    parser.add_argument(
        '--log-level',
        type=str.upper,
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level for data-quality messages (default: WARNING)'
    )

    return parser


def main(argv=None):
    """Main entry point for the application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level='INFO' if args.verbose and args.log_level == 'WARNING' else args.log_level,
        format='  %(levelname)s %(name)s: %(message)s'
    )

    print("\nHealth Chart Data Engine")
    print("=" * 70)

    if not (args.activities or args.nutrition or args.sleep):
        print("\nNo input files given. Use --activities, --nutrition and/or --sleep.\n", flush=True)
        return 1

    try:
        config = EngineConfig(reporting_timezone=args.timezone)
        if args.chart:
            config = config.select(args.chart)
        config = config.with_overrides(max_points=args.max_points, window_days=args.window_days)

        # Load data
        print(f"\nLoading data (calendar days in {config.reporting_timezone})...")
        records = []
        record_counts = {}
        loaders = (
            ('activities', args.activities, load_activity_data),
            ('nutrition', args.nutrition, load_nutrition_data),
            ('sleep', args.sleep, load_sleep_data),
        )
        for label, path, loader in loaders:
            if not path:
                continue
            loaded = loader(path, config.tz)
            record_counts[label] = len(loaded)
            records.extend(loaded)
            print(f"  Loaded {len(loaded)} {label} records")

        # Show summary if requested
        if args.verbose or args.show_summary:
            print_activity_summary(activity_summary(records), activity_type_counts(records))

        # Build charts
        print("\nBuilding charts...")
        charts = build_charts(records, config, today=args.today)
        for chart in charts.values():
            print(f"  {chart.name}: {len(chart.series)} of {chart.original_points} points")

        # Show chart data if requested
        if args.verbose or args.show_charts:
            print_charts(charts)

        # Generate and save JSON output
        print("\nGenerating JSON output...")
        json_output = generate_json_output(charts, record_counts, config.reporting_timezone)
        save_json_output(json_output, args.output)

        print("\n" + "=" * 70)
        print("Chart data ready!")
        print("=" * 70 + "\n")

    except FileNotFoundError as e:
        print(f"\nFile Error: {e}", flush=True)
        print("   Check that the input files exist and paths are correct.\n", flush=True)
        return 1
    except (KeyError, TypeError) as e:
        print(f"\nData Structure Error: {e}", flush=True)
        print("   The JSON file structure is invalid.", flush=True)
        print("   Activity data must contain 'activities', nutrition data 'logs', sleep data 'records'.\n", flush=True)
        return 1
    except ValueError as e:
        print(f"\nData Validation Error: {e}", flush=True)
        print("   Check your input data and options for invalid values or formats.\n", flush=True)
        return 1

    return 0


if __name__ == '__main__':
    exit(main())
