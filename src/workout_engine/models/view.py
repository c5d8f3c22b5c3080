"""View models handed to the presentation layer.

Everything here is render-ready: labels are formatted, totals computed,
placeholders substituted. No business logic should be needed downstream.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from workout_engine.models.enums import VariantTag


@dataclass(frozen=True)
class DisplayField:
    """A labelled value, e.g. ("Load %", "75%")."""

    label: str
    value: str


@dataclass(frozen=True)
class DisplayLine:
    """One rendered row: a logged set or a template fallback entry.

    ``summary`` holds the core values; ``annotations`` are optional
    parentheticals that are simply absent when their source is missing.
    """

    title: str
    summary: str = ""
    exercise_name: str | None = None
    annotations: tuple[str, ...] = field(default_factory=tuple)
    fields: tuple[DisplayField, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        head = f"{self.exercise_name} - {self.title}" if self.exercise_name else self.title
        body = f"{head}: {self.summary}" if self.summary else head
        if self.annotations:
            body += " " + " ".join(f"({a})" for a in self.annotations)
        return f"• {body}"


@dataclass(frozen=True)
class BlockTotals:
    total_sets: int = 0
    total_reps: int = 0
    total_weight_volume: float = 0.0


@dataclass(frozen=True)
class ExerciseGroupView:
    """Sets of one exercise within a block, with their own subtotals."""

    exercise_id: str
    exercise_name: str
    lines: tuple[DisplayLine, ...]
    total_reps: int
    total_weight_volume: float


@dataclass(frozen=True)
class BlockView:
    block_id: str
    block_type: VariantTag
    block_label: str
    block_name: str | None
    block_order: int
    display_lines: tuple[DisplayLine, ...]
    totals: BlockTotals
    exercise_groups: tuple[ExerciseGroupView, ...] = field(default_factory=tuple)
    parameters: tuple[DisplayField, ...] = field(default_factory=tuple)
    has_sets: bool = False
    expanded: bool = False


@dataclass(frozen=True)
class WorkoutTotals:
    total_sets: int = 0
    total_reps: int = 0
    total_weight_volume: float = 0.0
    unique_exercises: int = 0
    duration_minutes: int = 0


@dataclass(frozen=True)
class WorkoutView:
    """Workout-log detail page: header, totals, and every template block."""

    workout_log_id: str
    workout_name: str
    completed_at: datetime | None
    totals: WorkoutTotals
    blocks: tuple[BlockView, ...]


# ---------------------------------------------------------------------------
# Planned (template) views for the workout-details page
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateExerciseView:
    exercise_id: str | None
    name: str
    type_label: str
    fields: tuple[DisplayField, ...]


@dataclass(frozen=True)
class TemplateBlockView:
    block_id: str
    block_type: VariantTag
    block_label: str
    block_order: int
    notes: str | None
    parameters: tuple[DisplayField, ...]
    exercises: tuple[TemplateExerciseView, ...]


@dataclass(frozen=True)
class TemplateView:
    workout_name: str
    total_sets: int
    total_exercises: int
    blocks: tuple[TemplateBlockView, ...]
