"""
Data loading and normalization module.

This module handles:
- Loading activity, nutrition and sleep exports from JSON
- Truncating timestamps to calendar dates in one reporting timezone
- Converting source units (metres, seconds) to chart units (km, minutes, hours)
- Skipping malformed entries without aborting the whole file
"""

import json
import logging
import math
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from healthcharts.models import RawRecord, RecordKind

logger = logging.getLogger(__name__)

UTC = ZoneInfo('UTC')

# Calories per active minute used when an activity carries no calorie figure
ESTIMATED_CALORIES_PER_MINUTE = 7

NUTRITION_TOTAL_FIELDS = {
    'calories': 'calories_consumed',
    'protein': 'protein',
    'carbs': 'carbs',
    'fat': 'fat',
    'fiber': 'fiber',
}


def truncate_to_date(value, tz: ZoneInfo = UTC) -> Optional[date]:
    """
    Calendar date of a timestamp in the reporting timezone.

    Plain 'YYYY-MM-DD' strings are already calendar dates and are returned
    unchanged. Aware timestamps are converted to `tz` before truncation;
    naive ones are taken to be in `tz` already. Returns None when the value
    is missing or cannot be parsed.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if len(text) == 10:
            try:
                return date.fromisoformat(text)
            except ValueError:
                return None
        try:
            dt = datetime.fromisoformat(text.replace('Z', '+00:00'))
        except ValueError:
            return None
    else:
        return None

    if dt.tzinfo is None:
        return dt.date()
    return dt.astimezone(tz).date()


def _optional_float(entry: dict, key: str) -> Optional[float]:
    value = entry.get(key)
    if value is None or value == '':
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{key}' must be numeric, got {value!r}")
    if not math.isfinite(number):
        raise ValueError(f"'{key}' must be a finite number, got {value!r}")
    return number


def _load_json_list(filepath: str, key: str, label: str) -> list:
    """Read `filepath` and return the list stored under `key`."""
    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"{label.capitalize()} data file not found: {filepath}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {label} data file: {e}")

    if not isinstance(data, dict) or key not in data:
        raise KeyError(f"{label.capitalize()} data JSON must contain '{key}' key")

    if not isinstance(data[key], list):
        raise TypeError(f"'{key}' must be a list, got {type(data[key]).__name__}")

    return data[key]


def _report_skipped(label: str, skipped: list) -> None:
    if skipped:
        logger.warning("Skipped %d invalid %s record(s)", len(skipped), label)
        for idx, error in skipped:
            logger.warning("  - Record %d: %s", idx, error)


def parse_activity(entry: dict, tz: ZoneInfo = UTC) -> RawRecord:
    """Build a RawRecord from one activity export entry."""
    if not isinstance(entry, dict):
        raise TypeError(f"Activity entry must be an object, got {type(entry).__name__}")

    distance_m = _optional_float(entry, 'distance')
    moving_time_s = _optional_float(entry, 'moving_time')
    heart_rate = _optional_float(entry, 'average_heartrate')
    calories = _optional_float(entry, 'calories')

    if entry.get('has_heartrate') is False:
        heart_rate = None
    if calories is None and moving_time_s is not None:
        calories = round(moving_time_s / 60 * ESTIMATED_CALORIES_PER_MINUTE)

    return RawRecord(
        date=truncate_to_date(entry.get('start_date') or entry.get('date'), tz),
        kind=RecordKind.ACTIVITY,
        activity_type=str(entry['type']) if entry.get('type') else None,
        distance_km=distance_m / 1000 if distance_m is not None else None,
        duration_min=round(moving_time_s / 60) if moving_time_s is not None else None,
        heart_rate=heart_rate,
        calories_burned=calories,
    )


def parse_nutrition_log(entry: dict, tz: ZoneInfo = UTC) -> RawRecord:
    """Build a RawRecord from one daily nutrition log."""
    if not isinstance(entry, dict):
        raise TypeError(f"Nutrition entry must be an object, got {type(entry).__name__}")

    totals = entry.get('totals') or {}
    if not isinstance(totals, dict):
        raise TypeError(f"'totals' must be an object, got {type(totals).__name__}")

    metrics = {
        metric: _optional_float(totals, source)
        for source, metric in NUTRITION_TOTAL_FIELDS.items()
    }
    return RawRecord(
        date=truncate_to_date(entry.get('date'), tz),
        kind=RecordKind.NUTRITION,
        **metrics,
    )


def parse_sleep_record(entry: dict, tz: ZoneInfo = UTC) -> RawRecord:
    """Build a RawRecord from one night of sleep."""
    if not isinstance(entry, dict):
        raise TypeError(f"Sleep entry must be an object, got {type(entry).__name__}")

    score = _optional_float(entry, 'sleep_score')
    duration_s = _optional_float(entry, 'total_sleep_duration')
    heart_rate = _optional_float(entry, 'average_heart_rate')
    if score is not None and (score < 0 or score > 100):
        raise ValueError(f"Sleep score must be between 0 and 100, got {score}")

    return RawRecord(
        date=truncate_to_date(entry.get('date') or entry.get('day'), tz),
        kind=RecordKind.SLEEP,
        sleep_score=score,
        sleep_hours=round(duration_s / 3600, 2) if duration_s is not None else None,
        heart_rate=heart_rate,
    )


def _load_records(filepath: str, key: str, label: str, parse, tz: ZoneInfo) -> list[RawRecord]:
    records = []
    skipped = []
    for idx, entry in enumerate(_load_json_list(filepath, key, label)):
        try:
            records.append(parse(entry, tz))
        except (KeyError, ValueError, TypeError) as e:
            skipped.append((idx, str(e)))

    _report_skipped(label, skipped)
    return records


def load_activity_data(filepath: str, tz: ZoneInfo = UTC) -> list[RawRecord]:
    """
    Load activities from a JSON export with an 'activities' list.
    Entries with malformed numbers are skipped with a warning; entries with
    an unusable date are kept with date=None so aggregation can count them.
    """
    return _load_records(filepath, 'activities', 'activity', parse_activity, tz)


def load_nutrition_data(filepath: str, tz: ZoneInfo = UTC) -> list[RawRecord]:
    """Load daily nutrition logs from a JSON export with a 'logs' list."""
    return _load_records(filepath, 'logs', 'nutrition', parse_nutrition_log, tz)


def load_sleep_data(filepath: str, tz: ZoneInfo = UTC) -> list[RawRecord]:
    """Load nightly sleep records from a JSON export with a 'records' list."""
    return _load_records(filepath, 'records', 'sleep', parse_sleep_record, tz)
