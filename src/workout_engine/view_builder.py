"""View builders — assemble render-ready page models from parsed rows.

``WorkoutLogViewBuilder`` produces the workout-log detail page: one block
per template block (blocks without sets render their planned structure),
logged sets attached by ``block_id``, totals resolved against the stored
session record.

``TemplateViewBuilder`` produces the workout-details page from the template
alone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from workout_engine.aggregation import SetAggregate, aggregate, resolve_workout_totals
from workout_engine.formatting.durations import format_block_type
from workout_engine.formatting.set_formatter import format_set
from workout_engine.formatting.template_formatter import (
    describe_block_parameters,
    describe_partner,
    describe_template_exercise,
    render_template_fallback,
)
from workout_engine.models.enums import (
    PLACEHOLDER_COMPOUND,
    PLACEHOLDER_EXERCISE_B,
    VariantTag,
)
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.session import WorkoutLogRecord
from workout_engine.models.template import TemplateBlock
from workout_engine.models.view import (
    BlockTotals,
    BlockView,
    DisplayLine,
    ExerciseGroupView,
    TemplateBlockView,
    TemplateExerciseView,
    TemplateView,
    WorkoutView,
)
from workout_engine.naming import ExerciseNameTable, placeholder_for

logger = logging.getLogger(__name__)

# Pre-exhaustion is an isolation → compound pair; extra rows are ignored.
_PRE_EXHAUSTION_MAX_EXERCISES = 2


def ordered_blocks(blocks: Sequence[TemplateBlock]) -> list[TemplateBlock]:
    """Blocks by ``block_order``; blocks without one keep their position."""
    indexed = list(enumerate(blocks))
    indexed.sort(key=lambda pair: (
        pair[1].block_order if pair[1].block_order is not None else pair[0] + 1,
        pair[0],
    ))
    return [block for _, block in indexed]


def block_label(block: TemplateBlock, index: int) -> str:
    """``"Block 2 - Drop Set"``; the number is the block order, else position."""
    return f"Block {block.block_order or index + 1} - {format_block_type(block.block_type)}"


class WorkoutLogViewBuilder:
    """Builds the WorkoutView of one logged workout session."""

    def build(
        self,
        record: WorkoutLogRecord,
        template_blocks: Sequence[TemplateBlock],
        sets: Sequence[LoggedSet],
        names: ExerciseNameTable,
    ) -> WorkoutView:
        blocks = ordered_blocks(template_blocks)
        known_ids = {block.id for block in blocks}

        attached: list[LoggedSet] = []
        for logged in sets:
            if not logged.block_id:
                continue
            if logged.block_id not in known_ids:
                logger.warning(
                    "Set %s belongs to block %s which is not in the template",
                    logged.id, logged.block_id,
                )
                continue
            attached.append(logged)

        agg = aggregate(attached, {block.id: block.block_type for block in blocks})
        block_views = tuple(
            self._build_block(block, index, agg, names)
            for index, block in enumerate(blocks)
        )

        # Workout totals cover every set of the session, not only attached ones.
        workout_agg = agg if len(attached) == len(sets) else aggregate(sets)
        return WorkoutView(
            workout_log_id=record.id,
            workout_name=record.workout_name,
            completed_at=record.display_date,
            totals=resolve_workout_totals(record, workout_agg),
            blocks=block_views,
        )

    def _build_block(
        self,
        block: TemplateBlock,
        index: int,
        agg: SetAggregate,
        names: ExerciseNameTable,
    ) -> BlockView:
        tag = block.block_type
        letters = block.letter_map()
        flat = agg.flat_sets.get(block.id, ())
        groups = agg.per_exercise_groups.get(block.id, ())

        group_views: list[ExerciseGroupView] = []
        lines: list[DisplayLine] = []
        if groups:
            for position, group in enumerate(groups):
                group_lines = tuple(format_set(tag, s, names, letters) for s in group.sets)
                group_views.append(ExerciseGroupView(
                    exercise_id=group.exercise_id or "",
                    exercise_name=names.name_for(group.exercise_id, placeholder_for(position)),
                    lines=group_lines,
                    total_reps=group.total_reps,
                    total_weight_volume=group.total_weight_volume,
                ))
                lines.extend(group_lines)
        elif flat:
            lines = [format_set(tag, s, names, letters) for s in flat]
        else:
            lines = list(render_template_fallback(block, names))

        return BlockView(
            block_id=block.id,
            block_type=tag,
            block_label=block_label(block, index),
            block_name=block.block_name,
            block_order=block.block_order or index + 1,
            display_lines=tuple(lines),
            totals=agg.per_block_totals.get(block.id, BlockTotals()),
            exercise_groups=tuple(group_views),
            parameters=describe_block_parameters(block),
            has_sets=bool(flat),
            expanded=index == 0,
        )


class TemplateViewBuilder:
    """Builds the TemplateView (workout-details page) of a workout template."""

    def build(
        self,
        workout_name: str,
        template_blocks: Sequence[TemplateBlock],
        names: ExerciseNameTable,
    ) -> TemplateView:
        block_views = []
        total_sets = 0
        total_exercises = 0
        for index, block in enumerate(ordered_blocks(template_blocks)):
            cards = self._build_cards(block, names)
            total_sets += block.total_sets or 0
            total_exercises += len(cards)
            block_views.append(TemplateBlockView(
                block_id=block.id,
                block_type=block.block_type,
                block_label=block_label(block, index),
                block_order=block.block_order or index + 1,
                notes=block.notes,
                parameters=describe_block_parameters(block),
                exercises=cards,
            ))

        return TemplateView(
            workout_name=workout_name or "Workout",
            total_sets=total_sets,
            total_exercises=total_exercises,
            blocks=tuple(block_views),
        )

    def _build_cards(
        self, block: TemplateBlock, names: ExerciseNameTable
    ) -> tuple[TemplateExerciseView, ...]:
        type_label = format_block_type(block.block_type)
        cards: list[TemplateExerciseView] = []
        for exercise in block.ordered_exercises():
            position = len(cards)
            cards.append(TemplateExerciseView(
                exercise_id=exercise.exercise_id,
                name=names.name_for(
                    exercise.exercise_id,
                    exercise.exercise_name or placeholder_for(position),
                ),
                type_label=type_label,
                fields=describe_template_exercise(block, exercise, position),
            ))
            partner = exercise.partner
            if partner is not None and partner.exercise_id:
                placeholder = (
                    PLACEHOLDER_COMPOUND
                    if block.block_type == VariantTag.PRE_EXHAUSTION
                    else PLACEHOLDER_EXERCISE_B
                )
                cards.append(TemplateExerciseView(
                    exercise_id=partner.exercise_id,
                    name=names.name_for(partner.exercise_id, placeholder),
                    type_label=type_label,
                    fields=describe_partner(block, exercise),
                ))

        if block.block_type == VariantTag.PRE_EXHAUSTION:
            cards = cards[:_PRE_EXHAUSTION_MAX_EXERCISES]
        return tuple(cards)
