"""Workout session record — the ``workout_logs`` row a set log belongs to."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class WorkoutLogRecord:
    """Session header with the totals stored when the workout was completed.

    The ``total_*`` fields are authoritative when present; see
    ``aggregation.resolve_workout_totals``.
    """

    id: str
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration_minutes: float | None = None
    total_sets_completed: int | None = None
    total_reps_completed: int | None = None
    total_weight_lifted: float | None = None
    workout_assignment_id: str | None = None
    workout_name: str = "Workout"

    @property
    def display_date(self) -> datetime | None:
        """Completion time, else start time."""
        return self.completed_at or self.started_at

    def duration_minutes(self) -> int | None:
        """Stored duration rounded, else the started→completed span."""
        if self.total_duration_minutes:
            return round(self.total_duration_minutes)
        if self.started_at is not None and self.completed_at is not None:
            elapsed = self.completed_at - self.started_at
            return round(elapsed.total_seconds() / 60)
        return None
