"""Variant classification — the single boundary where raw rows become models.

Pure functions, no I/O. Every downstream component branches on the
``VariantTag`` produced here, and every tag-specific column is read here
and nowhere else. Malformed input degrades to defaults; nothing in this
module raises for bad data.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from workout_engine.models.enums import TAG_ALIASES, EmomMode, VariantTag
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.session import WorkoutLogRecord
from workout_engine.models.template import (
    ClusterSetPlan,
    DropSetPlan,
    PartnerPlan,
    RestPausePlan,
    TemplateBlock,
    TemplateExercise,
    TimeProtocol,
    load_from_columns,
)
from workout_engine.models.variants import (
    Amrap,
    Circuit,
    CircuitMember,
    ClusterSet,
    DropSet,
    Emom,
    ForTime,
    GiantSet,
    GiantSetMember,
    PreExhaustion,
    RestPause,
    StraightSet,
    Superset,
    Tabata,
    Variant,
)

logger = logging.getLogger(__name__)

_TAG_VALUES = {tag.value: tag for tag in VariantTag}


def classify(row: Mapping[str, Any]) -> VariantTag:
    """Classify a row by its ``block_type`` (or ``exercise_type``) column.

    Unknown or missing tags classify as STRAIGHT_SET.
    """
    raw = row.get("block_type") or row.get("exercise_type")
    return normalize_tag(raw)


def normalize_tag(raw: Any) -> VariantTag:
    """Map a raw tag string to a VariantTag, resolving legacy aliases."""
    if isinstance(raw, VariantTag):
        return raw
    if not isinstance(raw, str):
        return VariantTag.STRAIGHT_SET

    key = raw.strip().lower().replace("-", "_").replace(" ", "_")
    if key in _TAG_VALUES:
        return _TAG_VALUES[key]
    if key in TAG_ALIASES:
        return TAG_ALIASES[key]
    if key:
        logger.debug("Unrecognised variant tag %r, using straight_set", raw)
    return VariantTag.STRAIGHT_SET


def build_variant(tag: VariantTag, row: Mapping[str, Any]) -> Variant:
    """Build the variant record for *tag*, reading only that tag's columns."""
    builder = _VARIANT_BUILDERS.get(tag, _build_straight_set)
    return builder(row)


# ---------------------------------------------------------------------------
# Row → model parsers
# ---------------------------------------------------------------------------


def parse_logged_set(row: Mapping[str, Any]) -> LoggedSet:
    """Parse a ``workout_set_logs`` row into a LoggedSet."""
    tag = classify(row)
    return LoggedSet(
        id=str(row.get("id") or ""),
        block_id=_to_str(row.get("block_id")),
        block_type=tag,
        workout_log_id=_to_str(row.get("workout_log_id")),
        exercise_id=_to_str(row.get("exercise_id")),
        weight=_to_float(row.get("weight")),
        reps=_to_int(row.get("reps")),
        set_number=_to_int(row.get("set_number")),
        completed_at=parse_datetime(row.get("completed_at")),
        exercise_name=_joined_name(row),
        variant=build_variant(tag, row),
    )


def parse_template_block(row: Mapping[str, Any]) -> TemplateBlock:
    """Parse a ``workout_blocks`` row with its exercises and time protocols."""
    tag = classify(row)
    exercises = tuple(
        parse_template_exercise(ex, tag)
        for ex in _as_list(row.get("exercises"))
    )
    protocols = tuple(
        _parse_time_protocol(tp, tag)
        for tp in _as_list(row.get("time_protocols"))
    )
    return TemplateBlock(
        id=str(row.get("id") or ""),
        block_type=tag,
        block_name=_to_str(row.get("block_name")),
        block_order=_to_int(row.get("block_order")),
        notes=_to_str(row.get("block_notes")),
        total_sets=_to_int(row.get("total_sets")),
        reps_per_set=_to_str(row.get("reps_per_set")),
        rest_seconds=_to_int(row.get("rest_seconds")),
        duration_seconds=_to_int(row.get("duration_seconds")),
        exercises=exercises,
        time_protocols=protocols,
    )


def parse_template_exercise(
    row: Mapping[str, Any], block_tag: VariantTag
) -> TemplateExercise:
    """Parse a ``workout_block_exercises`` row belonging to a *block_tag* block."""
    partner: PartnerPlan | None = None
    if block_tag == VariantTag.SUPERSET:
        partner = _parse_partner(row, "superset")
    elif block_tag == VariantTag.PRE_EXHAUSTION:
        partner = _parse_partner(row, "compound")

    return TemplateExercise(
        id=str(row.get("id") or ""),
        exercise_id=_to_str(row.get("exercise_id")),
        exercise_name=_joined_name(row),
        exercise_order=_to_int(row.get("exercise_order")),
        exercise_letter=_to_str(row.get("exercise_letter")),
        sets=_to_int(row.get("sets")),
        reps=_to_str(row.get("reps")),
        load=load_from_columns(
            _to_float(row.get("load_percentage")),
            _to_float(row.get("weight_kg")),
        ),
        rir=_to_int(row.get("rir")),
        tempo=_to_str(row.get("tempo")),
        rest_seconds=_to_int(row.get("rest_seconds")),
        notes=_to_str(row.get("notes")),
        partner=partner,
        drop_sets=tuple(
            DropSetPlan(
                drop_order=_to_int(ds.get("drop_order")) or 1,
                weight_kg=_to_float(ds.get("weight_kg")),
                reps=_to_str(ds.get("reps")),
                rest_seconds=_to_int(ds.get("rest_seconds")),
                load_percentage=_to_float(ds.get("load_percentage")),
            )
            for ds in _as_list(row.get("drop_sets"))
        ),
        cluster_sets=tuple(
            ClusterSetPlan(
                reps_per_cluster=_to_int(cs.get("reps_per_cluster")),
                clusters_per_set=_to_int(cs.get("clusters_per_set")),
                intra_cluster_rest=_to_int(cs.get("intra_cluster_rest")),
                load=load_from_columns(
                    _to_float(cs.get("load_percentage")),
                    _to_float(cs.get("weight_kg")),
                ),
            )
            for cs in _as_list(row.get("cluster_sets"))
        ),
        rest_pause_sets=tuple(
            RestPausePlan(
                weight_kg=_to_float(rp.get("weight_kg")),
                rest_pause_duration=_to_int(rp.get("rest_pause_duration")),
                max_rest_pauses=_to_int(rp.get("max_rest_pauses")),
                load=load_from_columns(
                    _to_float(rp.get("load_percentage")),
                    _to_float(rp.get("weight_kg")),
                ),
            )
            for rp in _as_list(row.get("rest_pause_sets"))
        ),
    )


def parse_workout_log(
    row: Mapping[str, Any], workout_name: str | None = None
) -> WorkoutLogRecord:
    """Parse a ``workout_logs`` row."""
    return WorkoutLogRecord(
        id=str(row.get("id") or ""),
        started_at=parse_datetime(row.get("started_at")),
        completed_at=parse_datetime(row.get("completed_at")),
        total_duration_minutes=_to_float(row.get("total_duration_minutes")),
        total_sets_completed=_to_int(row.get("total_sets_completed")),
        total_reps_completed=_to_int(row.get("total_reps_completed")),
        total_weight_lifted=_to_float(row.get("total_weight_lifted")),
        workout_assignment_id=_to_str(row.get("workout_assignment_id")),
        workout_name=(workout_name or "").strip() or "Workout",
    )


# ---------------------------------------------------------------------------
# Per-tag variant builders
# ---------------------------------------------------------------------------


def _build_straight_set(row: Mapping[str, Any]) -> Variant:
    return StraightSet()


def _build_drop_set(row: Mapping[str, Any]) -> Variant:
    return DropSet(
        initial_weight=_to_float(row.get("dropset_initial_weight")),
        initial_reps=_to_int(row.get("dropset_initial_reps")),
        final_weight=_to_float(row.get("dropset_final_weight")),
        final_reps=_to_int(row.get("dropset_final_reps")),
        drop_percentage=_to_float(row.get("dropset_percentage")),
    )


def _build_superset(row: Mapping[str, Any]) -> Variant:
    return Superset(
        exercise_a_id=_to_str(row.get("superset_exercise_a_id")),
        weight_a=_to_float(row.get("superset_weight_a")),
        reps_a=_to_int(row.get("superset_reps_a")),
        exercise_b_id=_to_str(row.get("superset_exercise_b_id")),
        weight_b=_to_float(row.get("superset_weight_b")),
        reps_b=_to_int(row.get("superset_reps_b")),
    )


def _build_giant_set(row: Mapping[str, Any]) -> Variant:
    members = tuple(
        GiantSetMember(
            exercise_id=_to_str(entry.get("exercise_id")),
            weight=_to_float(entry.get("weight")),
            reps=_to_int(entry.get("reps")),
            letter=_to_str(entry.get("exercise_letter") or entry.get("letter")),
        )
        for entry in decode_json_list(row.get("giant_set_exercises"))
    )
    return GiantSet(members=members)


def _build_cluster_set(row: Mapping[str, Any]) -> Variant:
    return ClusterSet(cluster_number=_to_int(row.get("cluster_number")))


def _build_rest_pause(row: Mapping[str, Any]) -> Variant:
    return RestPause(
        initial_weight=_to_float(row.get("rest_pause_initial_weight")),
        initial_reps=_to_int(row.get("rest_pause_initial_reps")),
        reps_after=_to_int(row.get("rest_pause_reps_after")),
        rest_pause_number=_to_int(row.get("rest_pause_number")),
    )


def _build_pre_exhaustion(row: Mapping[str, Any]) -> Variant:
    return PreExhaustion(
        isolation_exercise_id=_to_str(row.get("preexhaust_isolation_exercise_id")),
        isolation_weight=_to_float(row.get("preexhaust_isolation_weight")),
        isolation_reps=_to_int(row.get("preexhaust_isolation_reps")),
        compound_exercise_id=_to_str(row.get("preexhaust_compound_exercise_id")),
        compound_weight=_to_float(row.get("preexhaust_compound_weight")),
        compound_reps=_to_int(row.get("preexhaust_compound_reps")),
    )


def _build_amrap(row: Mapping[str, Any]) -> Variant:
    return Amrap(
        total_reps=_to_int(row.get("amrap_total_reps")),
        duration_seconds=_to_int(row.get("amrap_duration_seconds")),
        target_reps=_to_int(row.get("amrap_target_reps")),
    )


def _build_for_time(row: Mapping[str, Any]) -> Variant:
    return ForTime(
        total_reps=_to_int(row.get("fortime_total_reps")),
        time_taken_seconds=_to_int(row.get("fortime_time_taken_sec")),
        time_cap_seconds=_to_int(row.get("fortime_time_cap_sec")),
        target_reps=_to_int(row.get("fortime_target_reps")),
    )


def _build_emom(row: Mapping[str, Any]) -> Variant:
    return Emom(
        minute_number=_to_int(row.get("emom_minute_number")),
        reps_this_minute=_to_int(row.get("emom_total_reps_this_min")),
        total_duration_seconds=_to_int(row.get("emom_total_duration_sec")),
    )


def _build_tabata(row: Mapping[str, Any]) -> Variant:
    return Tabata(
        rounds_completed=_to_int(row.get("tabata_rounds_completed")),
        total_duration_seconds=_to_int(row.get("tabata_total_duration_sec")),
    )


def _build_circuit(row: Mapping[str, Any]) -> Variant:
    members = tuple(
        CircuitMember(
            exercise_id=_to_str(entry.get("exercise_id")),
            work_seconds=_to_int(entry.get("work_seconds")),
            rest_after_seconds=_to_int(
                _first_present(entry, "rest_after_seconds", "rest_after", "rest_seconds")
            ),
            set_index=_to_int(_first_present(entry, "set_index", "set")),
        )
        for entry in decode_json_list(row.get("circuit_exercises"))
    )
    return Circuit(members=members)


_VARIANT_BUILDERS: dict[VariantTag, Callable[[Mapping[str, Any]], Variant]] = {
    VariantTag.STRAIGHT_SET: _build_straight_set,
    VariantTag.DROP_SET: _build_drop_set,
    VariantTag.SUPERSET: _build_superset,
    VariantTag.GIANT_SET: _build_giant_set,
    VariantTag.CLUSTER_SET: _build_cluster_set,
    VariantTag.REST_PAUSE: _build_rest_pause,
    VariantTag.PRE_EXHAUSTION: _build_pre_exhaustion,
    VariantTag.AMRAP: _build_amrap,
    VariantTag.FOR_TIME: _build_for_time,
    VariantTag.EMOM: _build_emom,
    VariantTag.TABATA: _build_tabata,
    VariantTag.CIRCUIT: _build_circuit,
}


# ---------------------------------------------------------------------------
# Internal helpers, None-tolerant
# ---------------------------------------------------------------------------


def _parse_partner(row: Mapping[str, Any], prefix: str) -> PartnerPlan | None:
    exercise_id = _to_str(row.get(f"{prefix}_exercise_id"))
    reps = _to_str(row.get(f"{prefix}_reps"))
    load = load_from_columns(
        _to_float(row.get(f"{prefix}_load_percentage")),
        _to_float(row.get(f"{prefix}_weight_kg")),
    )
    if exercise_id is None and reps is None and load is None:
        return None
    return PartnerPlan(exercise_id=exercise_id, reps=reps, load=load)


def _parse_time_protocol(row: Mapping[str, Any], block_tag: VariantTag) -> TimeProtocol:
    raw_type = row.get("protocol_type")
    protocol_type = normalize_tag(raw_type) if raw_type else block_tag

    mode_raw = _to_str(row.get("emom_mode"))
    emom_mode: EmomMode | None = None
    if mode_raw == "rep_based":
        emom_mode = EmomMode.REP_BASED
    elif mode_raw == "time_based":
        emom_mode = EmomMode.TIME_BASED

    return TimeProtocol(
        protocol_type=protocol_type,
        exercise_id=_to_str(row.get("exercise_id")),
        exercise_order=_to_int(row.get("exercise_order")),
        set=_to_int(row.get("set")),
        rounds=_to_int(row.get("rounds")),
        work_seconds=_to_int(row.get("work_seconds")),
        rest_seconds=_to_int(row.get("rest_seconds")),
        rest_after_set=_to_int(row.get("rest_after_set")),
        total_duration_minutes=_to_int(row.get("total_duration_minutes")),
        time_cap_minutes=_to_int(row.get("time_cap_minutes")),
        target_reps=_to_int(row.get("target_reps")),
        reps_per_round=_to_int(row.get("reps_per_round")),
        emom_mode=emom_mode,
        load=load_from_columns(
            _to_float(row.get("load_percentage")),
            _to_float(row.get("weight_kg")),
        ),
    )


def decode_json_list(value: Any) -> list[Mapping[str, Any]]:
    """Decode a JSON column that should hold a list of objects.

    Accepts an already-decoded list or a JSON string. Anything else,
    including malformed JSON, yields an empty list.
    """
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if not text.startswith("["):
            return []
        try:
            value = json.loads(text)
        except ValueError:
            logger.warning("Failed to decode JSON list column: %.80s", text)
            return []
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp (PostgREST emits a trailing 'Z' or offset)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable timestamp %r", value)
        return None


def _joined_name(row: Mapping[str, Any]) -> Optional[str]:
    name = row.get("exercise_name")
    if not name:
        joined = row.get("exercises") or row.get("exercise")
        if isinstance(joined, Mapping):
            name = joined.get("name")
    return _to_str(name)


def _as_list(value: Any) -> list[Mapping[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [entry for entry in value if isinstance(entry, Mapping)]


def _first_present(entry: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    if number is None or not math.isfinite(number):
        return None
    return int(number)
