"""Pure functions flattening PostgREST responses into engine-ready rows.

No I/O. Takes the raw dicts returned by CoachStoreClient queries (with
their nested embedded resources) and returns flat dicts whose keys match
what ``workout_engine.classification`` parses.
"""

from __future__ import annotations

from typing import Any, Optional

# Embedded resource name → key expected by the classification parsers.
_EXERCISE_CHILDREN = {
    "workout_drop_sets": "drop_sets",
    "workout_cluster_sets": "cluster_sets",
    "workout_rest_pause_sets": "rest_pause_sets",
}


def map_template_block(raw: dict[str, Any]) -> dict[str, Any]:
    """Flatten a ``workout_blocks`` row with its embedded exercises and protocols."""
    row = {
        k: v for k, v in raw.items()
        if k not in ("workout_block_exercises", "workout_time_protocols")
    }
    row["exercises"] = [
        map_template_exercise(ex) for ex in _rows(raw.get("workout_block_exercises"))
    ]
    row["time_protocols"] = _rows(raw.get("workout_time_protocols"))
    return row


def map_template_exercise(raw: dict[str, Any]) -> dict[str, Any]:
    """Flatten a ``workout_block_exercises`` row."""
    row = {
        k: v for k, v in raw.items()
        if k != "exercises" and k not in _EXERCISE_CHILDREN
    }
    row["exercise_name"] = raw.get("exercise_name") or _embedded_name(raw.get("exercises"))
    for source, target in _EXERCISE_CHILDREN.items():
        row[target] = _rows(raw.get(source))
    return row


def map_set_log(raw: dict[str, Any]) -> dict[str, Any]:
    """Flatten a ``workout_set_logs`` row, lifting the joined exercise name."""
    row = {k: v for k, v in raw.items() if k != "exercises"}
    row["exercise_name"] = raw.get("exercise_name") or _embedded_name(raw.get("exercises"))
    return row


def map_assignment(raw: Optional[dict[str, Any]]) -> dict[str, Any]:
    """Extract template id and workout name from a ``workout_assignments`` row.

    Returns a dict with keys ``workout_template_id`` and ``workout_name``;
    values are None when unavailable.
    """
    if not raw:
        return {"workout_template_id": None, "workout_name": None}
    return {
        "workout_template_id": raw.get("workout_template_id"),
        "workout_name": _embedded_name(raw.get("workout_templates")),
    }


# ---------------------------------------------------------------------------
# Internal extractors, None-tolerant
# ---------------------------------------------------------------------------


def _embedded_name(data: Any) -> Optional[str]:
    """``name`` of a to-one embed, which PostgREST may return as a dict or a 1-item list."""
    if isinstance(data, list):
        data = data[0] if data else None
    if isinstance(data, dict):
        name = data.get("name")
        return str(name) if name else None
    return None


def _rows(data: Any) -> list[dict[str, Any]]:
    if isinstance(data, list):
        return [r for r in data if isinstance(r, dict)]
    if isinstance(data, dict):
        return [data]
    return []
