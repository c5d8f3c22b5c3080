"""Set aggregation — totals per block and per workout, grouping by exercise.

A single stateless fold over an already-fetched list of logged sets.
Missing weight or reps count as 0 in every sum, so totals are independent
of input order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from workout_engine.models.enums import MULTI_EXERCISE_TAGS, VariantTag
from workout_engine.models.logged_set import LoggedSet, sort_sets
from workout_engine.models.session import WorkoutLogRecord
from workout_engine.models.view import BlockTotals, WorkoutTotals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExerciseGroup:
    """Sets of one exercise within one block, sorted for display."""

    exercise_id: str | None
    sets: tuple[LoggedSet, ...]
    total_reps: int
    total_weight_volume: float


@dataclass(frozen=True)
class SetAggregate:
    """Result of ``aggregate``.

    ``per_exercise_groups`` is empty for blocks of a multi-exercise tag
    (giant set, superset, pre-exhaustion); those blocks are read from
    ``flat_sets`` instead.
    """

    total_sets: int = 0
    total_reps: int = 0
    total_weight_volume: float = 0.0
    unique_exercise_count: int = 0
    per_block_totals: dict[str | None, BlockTotals] = field(default_factory=dict)
    per_exercise_groups: dict[str | None, tuple[ExerciseGroup, ...]] = field(default_factory=dict)
    flat_sets: dict[str | None, tuple[LoggedSet, ...]] = field(default_factory=dict)


def set_volume(logged: LoggedSet) -> float:
    """weight × reps with missing values as 0."""
    return float(logged.weight or 0) * (logged.reps or 0)


def aggregate(
    sets: Sequence[LoggedSet],
    block_tags: Mapping[str, VariantTag] | None = None,
) -> SetAggregate:
    """Fold *sets* into workout, block and exercise totals.

    Args:
        sets: Logged sets of one workout, in any order.
        block_tags: Tag of each block by id. Blocks missing from the map
            use the tag of their first set.

    Returns:
        A SetAggregate.
    """
    block_tags = block_tags or {}

    by_block: dict[str | None, list[LoggedSet]] = {}
    for logged in sets:
        by_block.setdefault(logged.block_id, []).append(logged)

    per_block_totals: dict[str | None, BlockTotals] = {}
    per_exercise_groups: dict[str | None, tuple[ExerciseGroup, ...]] = {}
    flat_sets: dict[str | None, tuple[LoggedSet, ...]] = {}

    for block_id, block_sets in by_block.items():
        tag = block_tags.get(block_id) if block_id is not None else None
        if tag is None:
            tag = block_sets[0].block_type

        per_block_totals[block_id] = _totals(block_sets)
        flat_sets[block_id] = tuple(sort_sets(block_sets))
        if tag in MULTI_EXERCISE_TAGS:
            per_exercise_groups[block_id] = ()
        else:
            per_exercise_groups[block_id] = group_by_exercise(block_sets)

    totals = _totals(sets)
    unique = {s.exercise_id for s in sets if s.exercise_id is not None}

    return SetAggregate(
        total_sets=totals.total_sets,
        total_reps=totals.total_reps,
        total_weight_volume=totals.total_weight_volume,
        unique_exercise_count=len(unique),
        per_block_totals=per_block_totals,
        per_exercise_groups=per_exercise_groups,
        flat_sets=flat_sets,
    )


def group_by_exercise(sets: Sequence[LoggedSet]) -> tuple[ExerciseGroup, ...]:
    """Group *sets* by ``exercise_id`` in first-seen order."""
    grouped: dict[str | None, list[LoggedSet]] = {}
    for logged in sets:
        grouped.setdefault(logged.exercise_id, []).append(logged)

    groups = []
    for exercise_id, members in grouped.items():
        totals = _totals(members)
        groups.append(ExerciseGroup(
            exercise_id=exercise_id,
            sets=tuple(sort_sets(members)),
            total_reps=totals.total_reps,
            total_weight_volume=totals.total_weight_volume,
        ))
    return tuple(groups)


def resolve_workout_totals(
    record: WorkoutLogRecord | None, agg: SetAggregate
) -> WorkoutTotals:
    """Workout-level totals, preferring the session's stored values.

    A stored total is used when it is truthy; a missing or zero stored
    total falls back to the recomputed one. The two are never reconciled.
    """
    if record is None:
        return WorkoutTotals(
            total_sets=agg.total_sets,
            total_reps=agg.total_reps,
            total_weight_volume=agg.total_weight_volume,
            unique_exercises=agg.unique_exercise_count,
        )

    stored_volume = record.total_weight_lifted
    if stored_volume and agg.total_weight_volume and stored_volume != agg.total_weight_volume:
        logger.debug(
            "Workout log %s stores %.1f kg volume, sets sum to %.1f kg",
            record.id, stored_volume, agg.total_weight_volume,
        )

    return WorkoutTotals(
        total_sets=record.total_sets_completed or agg.total_sets,
        total_reps=record.total_reps_completed or agg.total_reps,
        total_weight_volume=float(stored_volume or agg.total_weight_volume),
        unique_exercises=agg.unique_exercise_count,
        duration_minutes=record.duration_minutes() or 0,
    )


def _totals(sets: Sequence[LoggedSet]) -> BlockTotals:
    return BlockTotals(
        total_sets=len(sets),
        total_reps=sum(s.reps or 0 for s in sets),
        total_weight_volume=sum(set_volume(s) for s in sets),
    )
