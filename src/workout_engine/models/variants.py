"""Exercise-variant sum type — one frozen record per exercise-type tag.

Each record carries only the columns its tag actually uses. Rows are
turned into variants exactly once, by ``classification.build_variant``;
downstream code switches on ``variant.tag`` and never reads columns that
belong to another tag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Union

from workout_engine.models.enums import VariantTag


@dataclass(frozen=True)
class StraightSet:
    """Plain weight × reps set; uses the row's generic weight/reps."""

    tag: ClassVar[VariantTag] = VariantTag.STRAIGHT_SET


@dataclass(frozen=True)
class DropSet:
    tag: ClassVar[VariantTag] = VariantTag.DROP_SET

    initial_weight: float | None = None
    initial_reps: int | None = None
    final_weight: float | None = None
    final_reps: int | None = None
    drop_percentage: float | None = None


@dataclass(frozen=True)
class Superset:
    tag: ClassVar[VariantTag] = VariantTag.SUPERSET

    exercise_a_id: str | None = None
    weight_a: float | None = None
    reps_a: int | None = None
    exercise_b_id: str | None = None
    weight_b: float | None = None
    reps_b: int | None = None


@dataclass(frozen=True)
class GiantSetMember:
    """One exercise performed within a giant-set round."""

    exercise_id: str | None = None
    weight: float | None = None
    reps: int | None = None
    letter: str | None = None


@dataclass(frozen=True)
class GiantSet:
    tag: ClassVar[VariantTag] = VariantTag.GIANT_SET

    members: tuple[GiantSetMember, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ClusterSet:
    tag: ClassVar[VariantTag] = VariantTag.CLUSTER_SET

    cluster_number: int | None = None


@dataclass(frozen=True)
class RestPause:
    tag: ClassVar[VariantTag] = VariantTag.REST_PAUSE

    initial_weight: float | None = None
    initial_reps: int | None = None
    reps_after: int | None = None
    rest_pause_number: int | None = None


@dataclass(frozen=True)
class PreExhaustion:
    """Isolation exercise immediately followed by a compound exercise."""

    tag: ClassVar[VariantTag] = VariantTag.PRE_EXHAUSTION

    isolation_exercise_id: str | None = None
    isolation_weight: float | None = None
    isolation_reps: int | None = None
    compound_exercise_id: str | None = None
    compound_weight: float | None = None
    compound_reps: int | None = None


@dataclass(frozen=True)
class Amrap:
    tag: ClassVar[VariantTag] = VariantTag.AMRAP

    total_reps: int | None = None
    duration_seconds: int | None = None
    target_reps: int | None = None


@dataclass(frozen=True)
class ForTime:
    tag: ClassVar[VariantTag] = VariantTag.FOR_TIME

    total_reps: int | None = None
    time_taken_seconds: int | None = None
    time_cap_seconds: int | None = None
    target_reps: int | None = None


@dataclass(frozen=True)
class Emom:
    tag: ClassVar[VariantTag] = VariantTag.EMOM

    minute_number: int | None = None
    reps_this_minute: int | None = None
    total_duration_seconds: int | None = None


@dataclass(frozen=True)
class Tabata:
    tag: ClassVar[VariantTag] = VariantTag.TABATA

    rounds_completed: int | None = None
    total_duration_seconds: int | None = None


@dataclass(frozen=True)
class CircuitMember:
    """One station of a logged circuit set."""

    exercise_id: str | None = None
    work_seconds: int | None = None
    rest_after_seconds: int | None = None
    set_index: int | None = None


@dataclass(frozen=True)
class Circuit:
    tag: ClassVar[VariantTag] = VariantTag.CIRCUIT

    members: tuple[CircuitMember, ...] = field(default_factory=tuple)


Variant = Union[
    StraightSet,
    DropSet,
    Superset,
    GiantSet,
    ClusterSet,
    RestPause,
    PreExhaustion,
    Amrap,
    ForTime,
    Emom,
    Tabata,
    Circuit,
]
