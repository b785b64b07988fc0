"""
Summary card tests.
Run with: python3 -m pytest tests/
"""

from datetime import date

from healthcharts.models import RawRecord, RecordKind
from healthcharts.summary import activity_summary, activity_type_counts, average_nonzero

D1 = date(2025, 1, 1)


class TestAverageNonzero:
    def test_ignores_none_and_zero(self):
        assert average_nonzero([None, 0, 100, 200, 0]) == 150

    def test_rounds(self):
        assert average_nonzero([140, 160, 130]) == 143

    def test_no_valid_values(self):
        assert average_nonzero([None, 0]) == 0
        assert average_nonzero([]) == 0


class TestActivitySummary:
    def test_totals_and_heart_rate(self):
        records = [
            RawRecord(date=D1, activity_type='Run', distance_km=5.26, duration_min=30, heart_rate=150),
            RawRecord(date=D1, activity_type='WeightTraining', duration_min=45),
            RawRecord(date=D1, activity_type='Run', distance_km=3.0, duration_min=20, heart_rate=141),
            RawRecord(date=D1, kind=RecordKind.NUTRITION, protein=100),
        ]
        summary = activity_summary(records)
        assert summary.activity_count == 3
        assert summary.total_distance == 8.3
        assert summary.total_duration == 95
        assert summary.avg_heart_rate == 146

    def test_empty(self):
        summary = activity_summary([])
        assert summary.activity_count == 0
        assert summary.avg_heart_rate == 0


class TestActivityTypeCounts:
    def test_counts_in_first_seen_order(self):
        records = [
            RawRecord(date=D1, activity_type='Run'),
            RawRecord(date=D1, activity_type='Ride'),
            RawRecord(date=D1, activity_type='Run'),
            RawRecord(date=D1),
            RawRecord(date=D1, kind=RecordKind.SLEEP, sleep_score=80),
        ]
        assert activity_type_counts(records) == {'Run': 2, 'Ride': 1, 'Unknown': 1}
