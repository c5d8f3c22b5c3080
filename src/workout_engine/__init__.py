"""Workout engine — exercise-variant classification, formatting and aggregation.

Pure core with no I/O: rows in, render-ready view models out.
"""

from workout_engine.aggregation import aggregate, resolve_workout_totals
from workout_engine.classification import classify
from workout_engine.formatting import format_mm_ss, format_set, render_template_fallback
from workout_engine.naming import ExerciseNameTable, resolve_names
from workout_engine.view_builder import TemplateViewBuilder, WorkoutLogViewBuilder

__all__ = [
    "ExerciseNameTable",
    "TemplateViewBuilder",
    "WorkoutLogViewBuilder",
    "aggregate",
    "classify",
    "format_mm_ss",
    "format_set",
    "render_template_fallback",
    "resolve_names",
    "resolve_workout_totals",
]
