"""Per-variant display formatting for logged sets.

``format_set`` maps (tag, logged set, names, letters) to a DisplayLine.
One private function per tag; unknown tags use the straight-set layout.

Core values (weight, reps) render as ``0`` when missing. Optional values
(drop percentage, target reps, durations, time caps) drop their annotation
entirely when missing.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, TypeVar

from workout_engine.formatting.durations import (
    format_mm_ss,
    format_number,
    format_reps,
    format_seconds,
    format_weight_reps,
)
from workout_engine.models.enums import (
    PLACEHOLDER_COMPOUND,
    PLACEHOLDER_EXERCISE,
    PLACEHOLDER_EXERCISE_A,
    PLACEHOLDER_EXERCISE_B,
    PLACEHOLDER_ISOLATION,
    VariantTag,
)
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.variants import (
    Amrap,
    Circuit,
    ClusterSet,
    DropSet,
    Emom,
    ForTime,
    GiantSet,
    PreExhaustion,
    RestPause,
    Superset,
    Tabata,
)
from workout_engine.models.view import DisplayLine
from workout_engine.naming import ExerciseNameTable, placeholder_for, position_letter

logger = logging.getLogger(__name__)

_V = TypeVar("_V")

Formatter = Callable[[LoggedSet, ExerciseNameTable, Mapping[str, str]], DisplayLine]


def format_set(
    tag: VariantTag,
    logged: LoggedSet,
    names: ExerciseNameTable,
    letters: Mapping[str, str] | None = None,
) -> DisplayLine:
    """Format one logged set as it should appear under a block of type *tag*.

    Args:
        tag: Tag of the block the set is displayed in.
        logged: The logged set.
        names: Resolved exercise names.
        letters: Exercise id → letter map of the owning block, used for
            giant-set members that declare no letter of their own.
    """
    formatter = _FORMATTERS.get(tag, _format_straight_set)
    return formatter(logged, names, letters or {})


def drop_percentage(variant: DropSet, fallback_weight: float | None = None) -> float | None:
    """Stored drop percentage, else derived from initial and final weight."""
    if variant.drop_percentage is not None:
        return variant.drop_percentage
    initial = variant.initial_weight if variant.initial_weight is not None else fallback_weight
    if not initial or variant.final_weight is None:
        return None
    return (initial - variant.final_weight) / initial * 100


# ---------------------------------------------------------------------------
# Per-tag formatters
# ---------------------------------------------------------------------------


def _format_straight_set(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    return DisplayLine(
        title=f"Set {_set_number(logged)}",
        summary=format_weight_reps(logged.weight, logged.reps),
        exercise_name=_primary_name(logged, names),
    )


def _format_drop_set(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, DropSet)
    initial_weight = _coalesce(variant.initial_weight, logged.weight)
    initial_reps = _coalesce(variant.initial_reps, logged.reps)
    summary = (
        f"{format_weight_reps(initial_weight, initial_reps)}"
        f" → {format_weight_reps(variant.final_weight, variant.final_reps)}"
    )

    annotations: list[str] = []
    pct = drop_percentage(variant, fallback_weight=logged.weight)
    if pct is not None:
        annotations.append(f"{round(pct)}% drop")

    return DisplayLine(
        title=f"Set {_set_number(logged)}",
        summary=summary,
        exercise_name=_primary_name(logged, names),
        annotations=tuple(annotations),
    )


def _format_superset(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, Superset)
    name_a = names.name_for(
        variant.exercise_a_id or logged.exercise_id, PLACEHOLDER_EXERCISE_A
    )
    name_b = names.name_for(variant.exercise_b_id, PLACEHOLDER_EXERCISE_B)
    weight_a = _coalesce(variant.weight_a, logged.weight)
    reps_a = _coalesce(variant.reps_a, logged.reps)
    summary = (
        f"A: {name_a} {format_weight_reps(weight_a, reps_a)}"
        f" + B: {name_b} {format_weight_reps(variant.weight_b, variant.reps_b)}"
    )
    return DisplayLine(title=f"Set {_set_number(logged)}", summary=summary)


def _format_giant_set(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, GiantSet)
    title = f"Round {_set_number(logged)}"
    if not variant.members:
        return DisplayLine(
            title=title,
            summary=format_weight_reps(logged.weight, logged.reps),
            exercise_name=_primary_name(logged, names),
        )

    parts = []
    for index, member in enumerate(variant.members):
        letter = (
            member.letter
            or (letters.get(member.exercise_id) if member.exercise_id else None)
            or position_letter(index)
        )
        name = names.name_for(member.exercise_id, f"{PLACEHOLDER_EXERCISE} {letter}")
        parts.append(f"{letter}: {name} {format_weight_reps(member.weight, member.reps)}")
    return DisplayLine(title=title, summary=" + ".join(parts))


def _format_cluster_set(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, ClusterSet)
    title = f"Set {_set_number(logged)}"
    if variant.cluster_number is not None:
        title = f"Cluster {variant.cluster_number}, {title}"
    return DisplayLine(
        title=title,
        summary=format_weight_reps(logged.weight, logged.reps),
        exercise_name=_primary_name(logged, names),
    )


def _format_rest_pause(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, RestPause)
    weight = _coalesce(variant.initial_weight, logged.weight)
    initial_reps = _coalesce(variant.initial_reps, logged.reps)
    summary = (
        f"{format_weight_reps(weight, initial_reps)}"
        f" → {format_weight_reps(weight, variant.reps_after)}"
    )
    annotations: tuple[str, ...] = ()
    if variant.rest_pause_number is not None:
        annotations = (f"after rest-pause #{variant.rest_pause_number}",)
    return DisplayLine(
        title=f"Set {_set_number(logged)}",
        summary=summary,
        exercise_name=_primary_name(logged, names),
        annotations=annotations,
    )


def _format_pre_exhaustion(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, PreExhaustion)
    isolation = names.name_for(variant.isolation_exercise_id, PLACEHOLDER_ISOLATION)
    compound = names.name_for(variant.compound_exercise_id, PLACEHOLDER_COMPOUND)
    summary = (
        f"A: {isolation} "
        f"{format_weight_reps(variant.isolation_weight, variant.isolation_reps)}"
        f" → B: {compound} "
        f"{format_weight_reps(variant.compound_weight, variant.compound_reps)}"
    )
    return DisplayLine(title=f"Set {_set_number(logged)}", summary=summary)


def _format_amrap(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, Amrap)
    annotations = []
    if variant.target_reps is not None:
        annotations.append(f"target: {variant.target_reps} reps")
    if variant.duration_seconds is not None:
        annotations.append(f"duration: {format_mm_ss(variant.duration_seconds)}")
    return DisplayLine(
        title=f"Set {_set_number(logged)}",
        summary=format_weight_reps(logged.weight, variant.total_reps or logged.reps),
        exercise_name=_primary_name(logged, names),
        annotations=tuple(annotations),
    )


def _format_for_time(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, ForTime)
    annotations = []
    cap = (
        f"cap: {format_mm_ss(variant.time_cap_seconds)}"
        if variant.time_cap_seconds is not None
        else None
    )
    if variant.time_taken_seconds is not None:
        elapsed = f"completed in {format_mm_ss(variant.time_taken_seconds)}"
        annotations.append(f"{elapsed} / {cap}" if cap else elapsed)
    elif cap:
        annotations.append(cap)
    if variant.target_reps is not None:
        annotations.append(f"target: {variant.target_reps} reps")
    return DisplayLine(
        title=f"Set {_set_number(logged)}",
        summary=format_weight_reps(logged.weight, variant.total_reps or logged.reps),
        exercise_name=_primary_name(logged, names),
        annotations=tuple(annotations),
    )


def _format_emom(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, Emom)
    minute = variant.minute_number or _set_number(logged)
    annotations: tuple[str, ...] = ()
    if variant.total_duration_seconds is not None:
        annotations = (f"duration: {format_mm_ss(variant.total_duration_seconds)}",)
    return DisplayLine(
        title=f"Minute {minute}",
        summary=format_reps(_coalesce(variant.reps_this_minute, logged.reps)),
        exercise_name=_primary_name(logged, names),
        annotations=annotations,
    )


def _format_tabata(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, Tabata)
    annotations: tuple[str, ...] = ()
    if variant.total_duration_seconds is not None:
        annotations = (f"duration: {format_mm_ss(variant.total_duration_seconds)}",)
    return DisplayLine(
        title=f"Round {_set_number(logged)}",
        summary=(
            f"{format_number(variant.rounds_completed)} rounds completed"
            if variant.rounds_completed is not None
            else ""
        ),
        exercise_name=_primary_name(logged, names),
        annotations=annotations,
    )


def _format_circuit(
    logged: LoggedSet, names: ExerciseNameTable, letters: Mapping[str, str]
) -> DisplayLine:
    variant = _variant_as(logged, Circuit)
    title = f"Set {_set_number(logged)}"
    if not variant.members:
        return DisplayLine(
            title=title,
            summary=format_weight_reps(logged.weight, logged.reps),
            exercise_name=_primary_name(logged, names),
        )

    by_set: dict[int, list[str]] = {}
    for index, member in enumerate(variant.members):
        name = names.name_for(member.exercise_id, placeholder_for(index))
        station = f"{name} {format_seconds(member.work_seconds)} work"
        if member.rest_after_seconds is not None:
            station += f", {format_seconds(member.rest_after_seconds)} rest"
        set_index = member.set_index if member.set_index is not None else 1
        by_set.setdefault(set_index, []).append(station)

    if len(by_set) == 1:
        summary = " | ".join(next(iter(by_set.values())))
    else:
        summary = "; ".join(
            f"Set {set_index}: " + " | ".join(stations)
            for set_index, stations in sorted(by_set.items())
        )
    return DisplayLine(title=title, summary=summary)


_FORMATTERS: dict[VariantTag, Formatter] = {
    VariantTag.STRAIGHT_SET: _format_straight_set,
    VariantTag.DROP_SET: _format_drop_set,
    VariantTag.SUPERSET: _format_superset,
    VariantTag.GIANT_SET: _format_giant_set,
    VariantTag.CLUSTER_SET: _format_cluster_set,
    VariantTag.REST_PAUSE: _format_rest_pause,
    VariantTag.PRE_EXHAUSTION: _format_pre_exhaustion,
    VariantTag.AMRAP: _format_amrap,
    VariantTag.FOR_TIME: _format_for_time,
    VariantTag.EMOM: _format_emom,
    VariantTag.TABATA: _format_tabata,
    VariantTag.CIRCUIT: _format_circuit,
}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _variant_as(logged: LoggedSet, cls: type[_V]) -> _V:
    """The set's variant when it is a *cls*, else an empty *cls*.

    A row filed under a block of a different tag keeps its generic
    weight/reps but contributes none of its own tag-specific fields.
    """
    if isinstance(logged.variant, cls):
        return logged.variant
    logger.debug(
        "Set %s is %s but displayed as %s",
        logged.id, type(logged.variant).__name__, cls.__name__,
    )
    return cls()


def _set_number(logged: LoggedSet) -> int:
    return logged.set_number or 1


def _primary_name(logged: LoggedSet, names: ExerciseNameTable) -> str | None:
    if not logged.exercise_id:
        return None
    return names.name_for(logged.exercise_id)


def _coalesce(*values):
    for value in values:
        if value is not None:
            return value
    return None
