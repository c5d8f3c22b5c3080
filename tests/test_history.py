"""Tests for workout history analytics."""

from __future__ import annotations

from datetime import datetime, timezone

import numpy as np
import pytest

from workout_engine.history import (
    HISTORY_COLUMNS,
    HistoryTotals,
    history_totals,
    summarize_logs,
    weekly_volume,
)
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.session import WorkoutLogRecord


def _make_record(log_id: str, day: int | None, **overrides) -> WorkoutLogRecord:
    defaults = dict(id=log_id, workout_name=f"Workout {log_id}")
    if day is not None:
        defaults["started_at"] = datetime(2025, 3, day, 17, 0, tzinfo=timezone.utc)
        defaults["completed_at"] = datetime(2025, 3, day, 18, 0, tzinfo=timezone.utc)
    defaults.update(overrides)
    return WorkoutLogRecord(**defaults)


def _make_set(log_id: str, weight: float, reps: int) -> LoggedSet:
    return LoggedSet(
        id=f"{log_id}-{weight}-{reps}",
        block_id="b1",
        workout_log_id=log_id,
        exercise_id="ex-squat",
        weight=weight,
        reps=reps,
    )


@pytest.fixture
def frame():
    records = [
        _make_record("a", 10),
        _make_record("b", 12, total_sets_completed=10, total_weight_lifted=4000.0),
        _make_record("c", 24),
    ]
    sets = {
        "a": [_make_set("a", 100, 5), _make_set("a", 100, 3)],
        "c": [_make_set("c", 50, 10)],
    }
    return summarize_logs(records, sets)


class TestSummarizeLogs:
    def test_columns_and_order(self, frame):
        assert list(frame.columns) == HISTORY_COLUMNS
        assert list(frame["workout_log_id"]) == ["c", "b", "a"]

    def test_totals_recomputed_from_sets(self, frame):
        row = frame.set_index("workout_log_id").loc["a"]
        assert row["total_sets"] == 2
        assert row["total_reps"] == 8
        assert row["total_weight_volume"] == 800.0
        assert row["duration_minutes"] == 60.0

    def test_stored_totals_win(self, frame):
        row = frame.set_index("workout_log_id").loc["b"]
        assert row["total_sets"] == 10
        assert row["total_weight_volume"] == 4000.0

    def test_undated_session_sorted_last(self):
        frame = summarize_logs([_make_record("x", None), _make_record("y", 10)])
        assert list(frame["workout_log_id"]) == ["y", "x"]
        assert np.isnan(frame.loc[1, "duration_minutes"])

    def test_empty(self):
        frame = summarize_logs([])
        assert frame.empty
        assert list(frame.columns) == HISTORY_COLUMNS


class TestHistoryTotals:
    def test_sums(self, frame):
        totals = history_totals(frame)
        assert totals.workouts == 3
        assert totals.total_sets == 13
        assert totals.total_weight_volume == 5300.0
        assert totals.average_duration_minutes == 60

    def test_missing_duration_counts_as_zero(self):
        frame = summarize_logs([_make_record("x", None), _make_record("y", 10)])
        assert history_totals(frame).average_duration_minutes == 30

    def test_empty(self):
        assert history_totals(summarize_logs([])) == HistoryTotals()


class TestWeeklyVolume:
    def test_weeks_end_on_sunday(self, frame):
        weekly = weekly_volume(frame)
        assert list(weekly.index.strftime("%Y-%m-%d")) == ["2025-03-16", "2025-03-23", "2025-03-30"]
        assert list(weekly["workouts"]) == [2, 0, 1]
        assert list(weekly["total_weight_volume"]) == [4800.0, 0.0, 500.0]
        assert weekly.index.name == "week"

    def test_no_dated_sessions(self):
        weekly = weekly_volume(summarize_logs([_make_record("x", None)]))
        assert weekly.empty
        assert list(weekly.columns) == ["workouts", "total_sets", "total_weight_volume"]
