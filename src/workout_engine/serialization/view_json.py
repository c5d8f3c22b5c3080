"""JSON serialization of view models for the presentation layer.

Produces camelCase dicts. Each workout-log block has the shape
``{blockId, blockType, blockLabel, displayLines[], totals}`` plus a few
optional extras (exercise groups, parameters, expand state).

All functions are pure (no I/O, no network calls).
"""

from __future__ import annotations

import json
from datetime import datetime

from workout_engine.models.view import (
    BlockTotals,
    BlockView,
    DisplayField,
    DisplayLine,
    ExerciseGroupView,
    TemplateBlockView,
    TemplateExerciseView,
    TemplateView,
    WorkoutTotals,
    WorkoutView,
)


def to_view_dict(view: WorkoutView | TemplateView) -> dict:
    """Convert a WorkoutView or TemplateView to a JSON-ready dict."""
    if isinstance(view, TemplateView):
        return _template_view(view)
    return {
        "workoutLogId": view.workout_log_id,
        "workoutName": view.workout_name,
        "completedAt": _iso(view.completed_at),
        "totals": _workout_totals(view.totals),
        "blocks": [_block(block) for block in view.blocks],
    }


def to_view_json(view: WorkoutView | TemplateView, indent: int = 2) -> str:
    """Convert a view to a JSON string."""
    return json.dumps(to_view_dict(view), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _block(block: BlockView) -> dict:
    return {
        "blockId": block.block_id,
        "blockType": block.block_type.value,
        "blockLabel": block.block_label,
        "blockName": block.block_name,
        "blockOrder": block.block_order,
        "displayLines": [_line(line) for line in block.display_lines],
        "totals": _block_totals(block.totals),
        "exerciseGroups": [_group(group) for group in block.exercise_groups],
        "parameters": [_field(f) for f in block.parameters],
        "hasSets": block.has_sets,
        "expanded": block.expanded,
    }


def _line(line: DisplayLine) -> dict:
    result = {
        "text": line.text,
        "title": line.title,
        "summary": line.summary,
    }
    if line.exercise_name:
        result["exerciseName"] = line.exercise_name
    if line.annotations:
        result["annotations"] = list(line.annotations)
    if line.fields:
        result["fields"] = [_field(f) for f in line.fields]
    return result


def _group(group: ExerciseGroupView) -> dict:
    return {
        "exerciseId": group.exercise_id,
        "exerciseName": group.exercise_name,
        "displayLines": [_line(line) for line in group.lines],
        "totalReps": group.total_reps,
        "totalWeightVolume": group.total_weight_volume,
    }


def _block_totals(totals: BlockTotals) -> dict:
    return {
        "totalSets": totals.total_sets,
        "totalReps": totals.total_reps,
        "totalWeightVolume": totals.total_weight_volume,
    }


def _workout_totals(totals: WorkoutTotals) -> dict:
    return {
        "totalSets": totals.total_sets,
        "totalReps": totals.total_reps,
        "totalWeightVolume": totals.total_weight_volume,
        "uniqueExercises": totals.unique_exercises,
        "durationMinutes": totals.duration_minutes,
    }


def _field(f: DisplayField) -> dict:
    return {"label": f.label, "value": f.value}


def _template_view(view: TemplateView) -> dict:
    return {
        "workoutName": view.workout_name,
        "totalSets": view.total_sets,
        "totalExercises": view.total_exercises,
        "blocks": [_template_block(block) for block in view.blocks],
    }


def _template_block(block: TemplateBlockView) -> dict:
    return {
        "blockId": block.block_id,
        "blockType": block.block_type.value,
        "blockLabel": block.block_label,
        "blockOrder": block.block_order,
        "notes": block.notes,
        "parameters": [_field(f) for f in block.parameters],
        "exercises": [_template_exercise(ex) for ex in block.exercises],
    }


def _template_exercise(exercise: TemplateExerciseView) -> dict:
    return {
        "exerciseId": exercise.exercise_id,
        "name": exercise.name,
        "typeLabel": exercise.type_label,
        "fields": [_field(f) for f in exercise.fields],
    }


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
