"""Pytest configuration and fixtures."""

import json
from datetime import datetime

import pytest

from activity_report.models import RawEvent

T0 = datetime(2024, 1, 15, 9, 0, 0)
T1 = datetime(2024, 1, 15, 9, 0, 30)
T2 = datetime(2024, 1, 15, 9, 2, 0)


@pytest.fixture
def sample_records():
    """Tracker records where the final record repeats the first."""
    return [
        {"ApplicationName": "A", "TimeStarted": "2024-01-15T09:00:00", "KeyStrokes": 5, "MouseClicks": 1},
        {"ApplicationName": "B", "TimeStarted": "2024-01-15T09:00:30", "KeyStrokes": 3, "MouseClicks": 0},
        {"ApplicationName": "A", "TimeStarted": "2024-01-15T09:02:00", "KeyStrokes": 2, "MouseClicks": 2},
        {"ApplicationName": "A", "TimeStarted": "2024-01-15T09:00:00", "KeyStrokes": 5, "MouseClicks": 1},
    ]


@pytest.fixture
def sample_events():
    return [
        RawEvent("A", T0, 5, 1),
        RawEvent("B", T1, 3, 0),
        RawEvent("A", T2, 2, 2),
        RawEvent("A", T0, 5, 1),
    ]


@pytest.fixture
def log_file(tmp_path, sample_records):
    """Write the sample records to a JSON log inside a temp directory."""
    path = tmp_path / "activity.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path
