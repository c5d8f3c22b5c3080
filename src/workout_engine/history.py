"""Workout history analytics — the workout-log list and progress summaries.

Turns a client's workout-log records (plus their logged sets) into a
pandas DataFrame with one row per session, then derives overall totals and
a weekly volume series from it.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

from workout_engine.aggregation import aggregate, resolve_workout_totals
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.session import WorkoutLogRecord

HISTORY_COLUMNS = [
    "workout_log_id",
    "workout_name",
    "date",
    "duration_minutes",
    "total_sets",
    "total_reps",
    "total_weight_volume",
    "unique_exercises",
]


@dataclass(frozen=True)
class HistoryTotals:
    """Summary cards of the workout-log list."""

    workouts: int = 0
    total_sets: int = 0
    total_reps: int = 0
    total_weight_volume: float = 0.0
    average_duration_minutes: int = 0


def summarize_logs(
    records: Sequence[WorkoutLogRecord],
    sets_by_log: Mapping[str, Sequence[LoggedSet]] | None = None,
) -> pd.DataFrame:
    """One row per workout session, newest first.

    Totals follow ``resolve_workout_totals``: stored session totals win,
    sets recompute them when stored values are missing. ``duration_minutes``
    is NaN when neither a stored duration nor start/end times exist.
    """
    sets_by_log = sets_by_log or {}
    rows = []
    for record in records:
        totals = resolve_workout_totals(record, aggregate(sets_by_log.get(record.id, ())))
        duration = record.duration_minutes()
        rows.append({
            "workout_log_id": record.id,
            "workout_name": record.workout_name,
            "date": record.display_date,
            "duration_minutes": np.nan if duration is None else float(duration),
            "total_sets": totals.total_sets,
            "total_reps": totals.total_reps,
            "total_weight_volume": float(totals.total_weight_volume),
            "unique_exercises": totals.unique_exercises,
        })

    frame = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    frame["date"] = pd.to_datetime(frame["date"], utc=True)
    frame["duration_minutes"] = frame["duration_minutes"].astype(np.float64)
    return frame.sort_values("date", ascending=False, na_position="last").reset_index(drop=True)


def history_totals(frame: pd.DataFrame) -> HistoryTotals:
    """Overall totals; sessions without a duration count as 0 minutes in the average."""
    if frame.empty:
        return HistoryTotals()
    durations = frame["duration_minutes"].fillna(0.0).to_numpy(dtype=np.float64)
    return HistoryTotals(
        workouts=int(len(frame)),
        total_sets=int(frame["total_sets"].sum()),
        total_reps=int(frame["total_reps"].sum()),
        total_weight_volume=float(frame["total_weight_volume"].sum()),
        average_duration_minutes=int(round(float(np.mean(durations)))),
    )


def weekly_volume(frame: pd.DataFrame) -> pd.DataFrame:
    """Per-week session count, sets and weight-volume (weeks end on Sunday).

    Sessions without a date are left out. Weeks with no sessions appear
    with zeros so the series is continuous.
    """
    dated = frame.dropna(subset=["date"])
    if dated.empty:
        return pd.DataFrame(
            columns=["workouts", "total_sets", "total_weight_volume"],
            index=pd.DatetimeIndex([], name="week"),
        )

    weekly = (
        dated.set_index("date")
        .sort_index()
        .resample("W-SUN")
        .agg({
            "workout_log_id": "count",
            "total_sets": "sum",
            "total_weight_volume": "sum",
        })
        .rename(columns={"workout_log_id": "workouts"})
    )
    weekly.index.name = "week"
    return weekly
