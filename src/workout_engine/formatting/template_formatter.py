"""Template (planned workout) formatting.

Two consumers:

* the workout-log page, which falls back to the planned structure for any
  block that has no logged sets (``render_template_fallback``);
* the workout-details page, which shows per-exercise cards and per-block
  parameter rows (``describe_template_exercise``, ``describe_partner``,
  ``describe_block_parameters``).

A block is never rendered blank: with nothing planned it yields an explicit
"no exercises configured" line.
"""

from __future__ import annotations

from workout_engine.formatting.durations import format_number, format_seconds
from workout_engine.models.enums import (
    MULTI_EXERCISE_TAGS,
    NO_EXERCISES_CONFIGURED,
    NO_TABATA_EXERCISES_CONFIGURED,
    PLACEHOLDER_COMPOUND,
    PLACEHOLDER_EXERCISE_B,
    TABATA_DEFAULT_REST_S,
    TABATA_DEFAULT_ROUNDS,
    TABATA_DEFAULT_WORK_S,
    TIME_BASED_TAGS,
    EmomMode,
    VariantTag,
)
from workout_engine.models.template import (
    ByPercentage,
    Load,
    TemplateBlock,
    TemplateExercise,
    TimeProtocol,
)
from workout_engine.models.view import DisplayField, DisplayLine
from workout_engine.naming import ExerciseNameTable, placeholder_for

_REST_LABELS = {
    VariantTag.STRAIGHT_SET: "Rest between sets",
    VariantTag.SUPERSET: "Rest after set",
    VariantTag.GIANT_SET: "Rest after set",
    VariantTag.PRE_EXHAUSTION: "Rest after set",
    VariantTag.CLUSTER_SET: "Rest after set",
    VariantTag.DROP_SET: "Rest after set",
    VariantTag.CIRCUIT: "Rest between rounds",
}

_NO_SET_COUNT_TAGS = frozenset({VariantTag.AMRAP, VariantTag.EMOM, VariantTag.FOR_TIME})
_ROUND_COUNT_TAGS = frozenset({VariantTag.TABATA, VariantTag.CIRCUIT})
_BLOCK_REPS_TAGS = frozenset({VariantTag.STRAIGHT_SET, VariantTag.DROP_SET})


# ---------------------------------------------------------------------------
# Workout-log fallback (block with zero logged sets)
# ---------------------------------------------------------------------------


def render_template_fallback(
    block: TemplateBlock, names: ExerciseNameTable
) -> tuple[DisplayLine, ...]:
    """Display lines for a block that has no logged sets."""
    if block.block_type == VariantTag.TABATA:
        return _render_tabata_fallback(block, names)

    exercises = block.ordered_exercises()
    if exercises:
        lines: list[DisplayLine] = []
        for index, exercise in enumerate(exercises):
            name = names.name_for(exercise.exercise_id, placeholder_for(index))
            lines.append(_planned_line(name, exercise.reps, exercise.load))
            partner = exercise.partner
            if partner is not None and partner.exercise_id:
                placeholder = (
                    PLACEHOLDER_COMPOUND
                    if block.block_type == VariantTag.PRE_EXHAUSTION
                    else PLACEHOLDER_EXERCISE_B
                )
                partner_name = names.name_for(partner.exercise_id, placeholder)
                lines.append(_planned_line(partner_name, partner.reps, partner.load))
        return tuple(lines)

    protocols = _ordered_protocols(block.time_protocols)
    if protocols:
        return tuple(
            DisplayLine(
                title="Planned",
                summary=_join(_protocol_fields(block.block_type, protocol)),
                exercise_name=names.name_for(protocol.exercise_id, placeholder_for(index)),
            )
            for index, protocol in enumerate(protocols)
        )

    return (DisplayLine(title=NO_EXERCISES_CONFIGURED),)


def _render_tabata_fallback(
    block: TemplateBlock, names: ExerciseNameTable
) -> tuple[DisplayLine, ...]:
    protocols = _ordered_protocols(block.time_protocols)
    if not protocols:
        # No protocol rows: plan each exercise with the classic 20/10 split.
        protocols = [
            TimeProtocol(
                protocol_type=VariantTag.TABATA,
                exercise_id=exercise.exercise_id,
                exercise_order=exercise.exercise_order,
            )
            for exercise in block.ordered_exercises()
        ]
    if not protocols:
        return (DisplayLine(title=NO_TABATA_EXERCISES_CONFIGURED),)

    rounds = block.total_sets or _first_value(p.rounds for p in protocols) or TABATA_DEFAULT_ROUNDS
    lines = [DisplayLine(title="Rounds", summary=format_number(rounds))]

    by_set: dict[int, list[TimeProtocol]] = {}
    for protocol in protocols:
        by_set.setdefault(protocol.set or 1, []).append(protocol)

    position = 0
    for set_number in sorted(by_set):
        for protocol in by_set[set_number]:
            work = protocol.work_seconds if protocol.work_seconds is not None else TABATA_DEFAULT_WORK_S
            rest = protocol.rest_seconds if protocol.rest_seconds is not None else TABATA_DEFAULT_REST_S
            lines.append(DisplayLine(
                title=f"Set {set_number}",
                summary=f"Work: {format_seconds(work)} • Rest: {format_seconds(rest)}",
                exercise_name=names.name_for(protocol.exercise_id, placeholder_for(position)),
            ))
            position += 1

    rest_after = tabata_rest_after_set(block)
    if rest_after:
        lines.append(DisplayLine(title="Rest after set", summary=format_seconds(rest_after)))
    return tuple(lines)


def tabata_rest_after_set(block: TemplateBlock) -> int | None:
    """First positive ``rest_after_set`` of the protocols, else the block rest."""
    for protocol in block.time_protocols:
        if protocol.rest_after_set and protocol.rest_after_set > 0:
            return protocol.rest_after_set
    return block.rest_seconds


def _planned_line(name: str, reps: str | None, load: Load | None) -> DisplayLine:
    fields = []
    if reps:
        fields.append(DisplayField("Reps", reps))
    fields.extend(_load_fields(load))
    return DisplayLine(
        title="Planned",
        summary=_join(fields),
        exercise_name=name,
        fields=tuple(fields),
    )


# ---------------------------------------------------------------------------
# Workout-details cards
# ---------------------------------------------------------------------------


def describe_template_exercise(
    block: TemplateBlock, exercise: TemplateExercise, position: int = 0
) -> tuple[DisplayField, ...]:
    """Card fields for *exercise* shown at *position* within *block*."""
    tag = block.block_type
    fields: list[DisplayField] = []

    if tag == VariantTag.STRAIGHT_SET:
        fields += _sets_reps(block, exercise)
        fields += _opt("Rest", _seconds(_first_value((exercise.rest_seconds, block.rest_seconds))))
        fields += _load_fields(exercise.load)
    elif tag in MULTI_EXERCISE_TAGS:
        fields += _sets_reps(block, exercise)
        fields += _load_fields(exercise.load)
    elif tag == VariantTag.DROP_SET:
        fields += _drop_set_fields(exercise)
    elif tag == VariantTag.CLUSTER_SET:
        fields += _cluster_set_fields(exercise)
    elif tag == VariantTag.REST_PAUSE:
        fields += _rest_pause_fields(block, exercise)
    elif tag in TIME_BASED_TAGS:
        protocol = _protocol_for(block, exercise)
        if protocol is not None:
            fields += _protocol_fields(tag, protocol)
        if protocol is None or protocol.load is None:
            fields += _load_fields(exercise.load)
    else:
        fields += _sets_reps(block, exercise)
        fields += _load_fields(exercise.load)

    if tag != VariantTag.SUPERSET or position == 0:
        fields += _opt("RIR", _text(exercise.rir))
        fields += _opt("Tempo", exercise.tempo)
        fields += _opt("Notes", exercise.notes)
    return tuple(fields)


def describe_partner(
    block: TemplateBlock, exercise: TemplateExercise
) -> tuple[DisplayField, ...]:
    """Card fields for the partner (B / compound) of a paired exercise."""
    partner = exercise.partner
    if partner is None:
        return ()
    fields = list(_opt("Sets", _text(exercise.sets or block.total_sets)))
    fields += _opt("Reps", partner.reps)
    fields += _load_fields(partner.load)
    return tuple(fields)


def describe_block_parameters(block: TemplateBlock) -> tuple[DisplayField, ...]:
    """Header row for a details-page block: set/round count, reps, rest, duration."""
    tag = block.block_type
    fields: list[DisplayField] = []

    if tag in _ROUND_COUNT_TAGS:
        rounds = block.total_sets or _first_value(p.rounds for p in block.time_protocols)
        if tag == VariantTag.TABATA:
            rounds = rounds or TABATA_DEFAULT_ROUNDS
        fields += _opt("Rounds", _text(rounds))
    elif tag not in _NO_SET_COUNT_TAGS:
        fields += _opt("Sets", _text(block.total_sets))

    if tag in _BLOCK_REPS_TAGS:
        fields += _opt("Reps", block.reps_per_set)

    if tag == VariantTag.TABATA:
        fields += _opt("Rest after set", _seconds(tabata_rest_after_set(block)))
    elif tag in _REST_LABELS:
        fields += _opt(_REST_LABELS[tag], _seconds(block.rest_seconds))

    if tag in (VariantTag.AMRAP, VariantTag.EMOM):
        minutes = None
        if block.duration_seconds:
            minutes = block.duration_seconds // 60
        else:
            minutes = _first_value(p.total_duration_minutes for p in block.time_protocols)
        fields += _opt("Duration", f"{minutes} min" if minutes else None)
    elif tag == VariantTag.FOR_TIME:
        cap = _first_value(p.time_cap_minutes for p in block.time_protocols)
        fields += _opt("Time cap", f"{cap} min" if cap else None)

    return tuple(fields)


# ---------------------------------------------------------------------------
# Per-tag card fields
# ---------------------------------------------------------------------------


def _drop_set_fields(exercise: TemplateExercise) -> list[DisplayField]:
    fields: list[DisplayField] = []
    drop = min(exercise.drop_sets, key=lambda d: d.drop_order) if exercise.drop_sets else None
    if drop is not None:
        pct = drop.load_percentage
        fields += _opt("Drop %", f"{format_number(pct)}%" if pct is not None else None)
        fields += _opt("Drop reps", drop.reps)
        fields += _opt("Rest", _seconds(_first_value((drop.rest_seconds, exercise.rest_seconds))))
    else:
        fields += _opt("Rest", _seconds(exercise.rest_seconds))
    fields += _load_fields(exercise.load)
    return fields


def _cluster_set_fields(exercise: TemplateExercise) -> list[DisplayField]:
    cluster = exercise.cluster_sets[0] if exercise.cluster_sets else None
    if cluster is None:
        return _load_fields(exercise.load)
    fields: list[DisplayField] = []
    fields += _opt("Reps/cluster", _text(cluster.reps_per_cluster))
    fields += _opt("Clusters/set", _text(cluster.clusters_per_set))
    fields += _opt("Intra-cluster rest", _seconds(cluster.intra_cluster_rest))
    fields += _load_fields(cluster.load or exercise.load)
    return fields


def _rest_pause_fields(block: TemplateBlock, exercise: TemplateExercise) -> list[DisplayField]:
    rest_pause = exercise.rest_pause_sets[0] if exercise.rest_pause_sets else None
    fields: list[DisplayField] = []
    if rest_pause is not None and rest_pause.weight_kg is not None:
        fields.append(DisplayField("Initial weight", f"{format_number(rest_pause.weight_kg)} kg"))
    fields += _opt("Initial reps", block.reps_per_set or exercise.reps)
    if rest_pause is not None:
        fields += _opt("Rest-pause", _seconds(rest_pause.rest_pause_duration))
        fields += _opt("Max pauses", _text(rest_pause.max_rest_pauses))
        # An absolute load is already shown as the initial weight.
        if isinstance(rest_pause.load, ByPercentage):
            fields += _load_fields(rest_pause.load)
        elif rest_pause.load is None:
            fields += _load_fields(exercise.load)
    else:
        fields += _load_fields(exercise.load)
    return fields


def _protocol_fields(tag: VariantTag, protocol: TimeProtocol) -> list[DisplayField]:
    fields: list[DisplayField] = []
    if tag == VariantTag.AMRAP:
        fields += _opt("Duration", _minutes(protocol.total_duration_minutes))
        fields += _opt("Target reps", _text(protocol.target_reps))
    elif tag == VariantTag.EMOM:
        fields += _opt("Duration", _minutes(protocol.total_duration_minutes))
        if protocol.emom_mode == EmomMode.REP_BASED:
            fields.append(DisplayField("Mode", "Rep-based"))
            fields += _opt("Reps per minute", _text(protocol.reps_per_round))
        elif protocol.emom_mode == EmomMode.TIME_BASED:
            fields.append(DisplayField("Mode", "Time-based"))
            fields += _opt("Work interval", _seconds(protocol.work_seconds))
            fields += _opt("Rest interval", _seconds(protocol.rest_seconds))
        else:
            fields += _opt("Work interval", _seconds(protocol.work_seconds))
    elif tag == VariantTag.FOR_TIME:
        fields += _opt("Time cap", _minutes(protocol.time_cap_minutes))
        fields += _opt("Target reps", _text(protocol.target_reps))
    else:
        fields += _opt("Work time", _seconds(protocol.work_seconds))
        fields += _opt("Rest time", _seconds(protocol.rest_seconds))
        fields += _opt("Rounds", _text(protocol.rounds))
        fields += _opt("Set", _text(protocol.set))
    fields += _load_fields(protocol.load)
    return fields


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _sets_reps(block: TemplateBlock, exercise: TemplateExercise) -> list[DisplayField]:
    fields = _opt("Sets", _text(exercise.sets or block.total_sets))
    fields += _opt("Reps", exercise.reps or block.reps_per_set)
    return fields


def _load_fields(load: Load | None) -> list[DisplayField]:
    if load is None:
        return []
    if isinstance(load, ByPercentage):
        return [DisplayField("Load", load.label())]
    return [DisplayField("Weight", load.label())]


def _protocol_for(block: TemplateBlock, exercise: TemplateExercise) -> TimeProtocol | None:
    for protocol in block.time_protocols:
        if protocol.exercise_id and protocol.exercise_id == exercise.exercise_id:
            return protocol
    return None


def _ordered_protocols(protocols) -> list[TimeProtocol]:
    indexed = list(enumerate(protocols))
    indexed.sort(key=lambda pair: (
        pair[1].exercise_order if pair[1].exercise_order is not None else pair[0] + 1,
        pair[0],
    ))
    return [protocol for _, protocol in indexed]


def _opt(label: str, value: str | None) -> list[DisplayField]:
    return [DisplayField(label, value)] if value else []


def _text(value) -> str | None:
    return None if value is None else format_number(value)


def _seconds(value: int | None) -> str | None:
    return None if value is None else format_seconds(value)


def _minutes(value: int | None) -> str | None:
    return None if value is None else f"{format_number(value)} min"


def _first_value(values):
    for value in values:
        if value is not None:
            return value
    return None


def _join(fields) -> str:
    return " • ".join(f"{f.label}: {f.value}" for f in fields)
