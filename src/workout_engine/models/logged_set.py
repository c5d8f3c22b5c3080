"""A logged set: one completed performance unit within a workout session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from workout_engine.models.enums import VariantTag
from workout_engine.models.variants import (
    Circuit,
    GiantSet,
    PreExhaustion,
    StraightSet,
    Superset,
    Variant,
)


@dataclass(frozen=True)
class LoggedSet:
    """A row of ``workout_set_logs`` after classification.

    ``weight`` and ``reps`` are the generic columns every set carries and
    are the only values used for volume arithmetic. Tag-specific values
    live on ``variant``.
    """

    id: str
    block_id: str | None
    block_type: VariantTag = VariantTag.STRAIGHT_SET
    workout_log_id: str | None = None
    exercise_id: str | None = None
    weight: float | None = None
    reps: int | None = None
    set_number: int | None = None
    completed_at: datetime | None = None
    exercise_name: str | None = None    # from the exercises join, if any
    variant: Variant = field(default_factory=StraightSet)

    def sort_key(self) -> tuple[int, float, float]:
        """Set number first; rows without one follow, ordered by completion time."""
        completed = (
            self.completed_at.timestamp()
            if self.completed_at is not None
            else float("inf")
        )
        if self.set_number is not None:
            return (0, float(self.set_number), completed)
        return (1, 0.0, completed)

    def referenced_exercise_ids(self) -> tuple[str, ...]:
        """Every exercise id this row references, in any role."""
        ids: list[str] = []
        if self.exercise_id:
            ids.append(self.exercise_id)

        variant = self.variant
        if isinstance(variant, Superset):
            ids.extend(filter(None, (variant.exercise_a_id, variant.exercise_b_id)))
        elif isinstance(variant, PreExhaustion):
            ids.extend(filter(None, (
                variant.isolation_exercise_id,
                variant.compound_exercise_id,
            )))
        elif isinstance(variant, (GiantSet, Circuit)):
            ids.extend(m.exercise_id for m in variant.members if m.exercise_id)

        return tuple(dict.fromkeys(ids))


def sort_sets(sets: list[LoggedSet] | tuple[LoggedSet, ...]) -> list[LoggedSet]:
    """Return *sets* ordered by set number, then completion time."""
    return sorted(sets, key=LoggedSet.sort_key)
