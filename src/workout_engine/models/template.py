"""Workout template models — coach-authored, not-yet-performed structure.

A ``TemplateBlock`` groups ``TemplateExercise`` slots sharing one variant
tag. Time-based blocks (AMRAP, EMOM, for-time, tabata, circuit) carry their
planned parameters as ``TimeProtocol`` rows, one per exercise.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Union

from workout_engine.models.enums import EmomMode, VariantTag


# ---------------------------------------------------------------------------
# Load: percentage XOR absolute weight
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ByPercentage:
    """Load as a percentage of the client's max (e.g. 75 → 75 %)."""

    value: float

    def label(self) -> str:
        return f"{_num(self.value)}%"


@dataclass(frozen=True)
class ByWeight:
    """Absolute load in kilograms."""

    value: float

    def label(self) -> str:
        return f"{_num(self.value)} kg"


Load = Union[ByPercentage, ByWeight]


def load_from_columns(
    load_percentage: float | None, weight_kg: float | None
) -> Load | None:
    """Build a Load from the two nullable storage columns.

    Percentage wins when both are populated, matching how the details view
    has always displayed such rows.
    """
    if load_percentage is not None:
        return ByPercentage(float(load_percentage))
    if weight_kg is not None:
        return ByWeight(float(weight_kg))
    return None


def _num(value: float) -> str:
    return f"{value:g}"


# ---------------------------------------------------------------------------
# Special-table sub-records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PartnerPlan:
    """Second exercise of a superset, or the compound of a pre-exhaustion pair."""

    exercise_id: str | None = None
    reps: str | None = None
    load: Load | None = None


@dataclass(frozen=True)
class DropSetPlan:
    drop_order: int = 1
    weight_kg: float | None = None
    reps: str | None = None
    rest_seconds: int | None = None
    load_percentage: float | None = None


@dataclass(frozen=True)
class ClusterSetPlan:
    reps_per_cluster: int | None = None
    clusters_per_set: int | None = None
    intra_cluster_rest: int | None = None
    load: Load | None = None


@dataclass(frozen=True)
class RestPausePlan:
    weight_kg: float | None = None
    rest_pause_duration: int | None = None
    max_rest_pauses: int | None = None
    load: Load | None = None


@dataclass(frozen=True)
class TimeProtocol:
    """One row of ``workout_time_protocols``."""

    protocol_type: VariantTag
    exercise_id: str | None = None
    exercise_order: int | None = None
    set: int | None = None
    rounds: int | None = None
    work_seconds: int | None = None
    rest_seconds: int | None = None
    rest_after_set: int | None = None
    total_duration_minutes: int | None = None
    time_cap_minutes: int | None = None
    target_reps: int | None = None
    reps_per_round: int | None = None
    emom_mode: EmomMode | None = None
    load: Load | None = None


# ---------------------------------------------------------------------------
# Exercises and blocks
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateExercise:
    """A planned exercise slot inside a template block."""

    id: str
    exercise_id: str | None = None
    exercise_name: str | None = None
    exercise_order: int | None = None
    exercise_letter: str | None = None
    sets: int | None = None
    reps: str | None = None
    load: Load | None = None
    rir: int | None = None
    tempo: str | None = None
    rest_seconds: int | None = None
    notes: str | None = None
    partner: PartnerPlan | None = None
    drop_sets: tuple[DropSetPlan, ...] = field(default_factory=tuple)
    cluster_sets: tuple[ClusterSetPlan, ...] = field(default_factory=tuple)
    rest_pause_sets: tuple[RestPausePlan, ...] = field(default_factory=tuple)

    def with_percentage(self, value: float) -> TemplateExercise:
        """Switch the slot to a percentage load (clears any absolute weight)."""
        return dataclasses.replace(self, load=ByPercentage(float(value)))

    def with_weight(self, value: float) -> TemplateExercise:
        """Switch the slot to an absolute weight (clears any percentage)."""
        return dataclasses.replace(self, load=ByWeight(float(value)))


@dataclass(frozen=True)
class TemplateBlock:
    """A named, ordered block of a workout template."""

    id: str
    block_type: VariantTag = VariantTag.STRAIGHT_SET
    block_name: str | None = None
    block_order: int | None = None
    notes: str | None = None
    total_sets: int | None = None
    reps_per_set: str | None = None
    rest_seconds: int | None = None
    duration_seconds: int | None = None
    exercises: tuple[TemplateExercise, ...] = field(default_factory=tuple)
    time_protocols: tuple[TimeProtocol, ...] = field(default_factory=tuple)

    def ordered_exercises(self) -> list[TemplateExercise]:
        """Exercises sorted by declared order; undeclared keep their position."""
        indexed = list(enumerate(self.exercises))
        indexed.sort(key=lambda pair: (
            pair[1].exercise_order if pair[1].exercise_order is not None else pair[0] + 1,
            pair[0],
        ))
        return [exercise for _, exercise in indexed]

    def letter_map(self) -> dict[str, str]:
        """Map exercise id → letter, from declared letters else template order."""
        from workout_engine.naming import position_letter

        letters: dict[str, str] = {}
        for index, exercise in enumerate(self.ordered_exercises()):
            if not exercise.exercise_id or exercise.exercise_id in letters:
                continue
            letters[exercise.exercise_id] = (
                exercise.exercise_letter or position_letter(index)
            )
        return letters
