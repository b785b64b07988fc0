"""
Command-line tests.
Run with: python3 -m pytest tests/
"""

import json

from main import main


def write_inputs(tmp_path):
    activities = tmp_path / "activities.json"
    activities.write_text(json.dumps({"activities": [
        {"start_date": f"2025-01-{day:02d}T07:00:00Z", "type": "Run",
         "distance": 5000, "moving_time": 1800, "average_heartrate": 150, "calories": 400}
        for day in range(1, 21)
    ] + [{"start_date": "garbage", "type": "Run", "distance": 1000, "moving_time": 300}]}))

    sleep = tmp_path / "sleep.json"
    sleep.write_text(json.dumps({"records": [
        {"day": "2025-01-01", "sleep_score": 80, "total_sleep_duration": 28800},
        {"day": "2025-01-02", "sleep_score": 70, "total_sleep_duration": 25200},
    ]}))
    return str(activities), str(sleep)


class TestMain:
    def test_writes_chart_payload(self, tmp_path, capsys):
        activities, sleep = write_inputs(tmp_path)
        output = tmp_path / "charts.json"

        code = main([
            "--activities", activities, "--sleep", sleep,
            "--output", str(output), "--verbose", "--today", "2025-01-20",
        ])

        assert code == 0
        data = json.loads(output.read_text())
        assert data["metadata"]["records"] == {"activities": 21, "sleep": 2}
        assert data["metadata"]["reporting_timezone"] == "UTC"

        distance = data["charts"]["distance"]
        assert distance["original_points"] == 20
        assert distance["dates"][0] == "2025-01-01"
        assert distance["dates"][-1] == "2025-01-20"
        assert distance["skipped_records"] == 1
        assert distance["datasets"][0]["data"][0] == 5.0

        sleep_chart = data["charts"]["sleep"]
        assert sleep_chart["labels"] == ["Wed", "Thu"]
        assert sleep_chart["datasets"][1]["data"] == [8.0, 7.0]

        assert "ACTIVITY SUMMARY" in capsys.readouterr().out

    def test_chart_selection_and_budget(self, tmp_path):
        activities, _ = write_inputs(tmp_path)
        output = tmp_path / "charts.json"

        code = main([
            "--activities", activities, "--output", str(output),
            "--chart", "distance", "--max-points", "5",
        ])

        assert code == 0
        charts = json.loads(output.read_text())["charts"]
        assert list(charts) == ["distance"]
        assert len(charts["distance"]["dates"]) <= 5

    def test_no_inputs(self, capsys):
        assert main([]) == 1
        assert "No input files" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--sleep", str(tmp_path / "nope.json")]) == 1
        assert "File Error" in capsys.readouterr().out

    def test_invalid_timezone(self, tmp_path, capsys):
        _, sleep = write_inputs(tmp_path)
        assert main(["--sleep", sleep, "--timezone", "Nowhere/Land"]) == 1
        assert "Data Validation Error" in capsys.readouterr().out
