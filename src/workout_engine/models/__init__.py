"""Data models for the workout engine."""

from workout_engine.models.enums import MULTI_EXERCISE_TAGS, VariantTag
from workout_engine.models.logged_set import LoggedSet, sort_sets
from workout_engine.models.session import WorkoutLogRecord
from workout_engine.models.template import (
    ByPercentage,
    ByWeight,
    Load,
    TemplateBlock,
    TemplateExercise,
    TimeProtocol,
)
from workout_engine.models.variants import Variant
from workout_engine.models.view import (
    BlockTotals,
    BlockView,
    DisplayField,
    DisplayLine,
    TemplateView,
    WorkoutTotals,
    WorkoutView,
)

__all__ = [
    "BlockTotals",
    "BlockView",
    "ByPercentage",
    "ByWeight",
    "DisplayField",
    "DisplayLine",
    "Load",
    "LoggedSet",
    "MULTI_EXERCISE_TAGS",
    "TemplateBlock",
    "TemplateExercise",
    "TemplateView",
    "TimeProtocol",
    "Variant",
    "VariantTag",
    "WorkoutLogRecord",
    "WorkoutTotals",
    "WorkoutView",
    "sort_sets",
]
