"""Shared test fixtures: template blocks, session records, name tables."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from workout_engine.models.enums import VariantTag
from workout_engine.models.session import WorkoutLogRecord
from workout_engine.models.template import (
    ByPercentage,
    ByWeight,
    PartnerPlan,
    TemplateBlock,
    TemplateExercise,
    TimeProtocol,
)
from workout_engine.naming import ExerciseNameTable


def _make_block(**overrides) -> TemplateBlock:
    defaults = dict(
        id="block-1",
        block_type=VariantTag.STRAIGHT_SET,
        block_name="Main lift",
        block_order=1,
        total_sets=3,
        reps_per_set="5",
        rest_seconds=120,
    )
    defaults.update(overrides)
    return TemplateBlock(**defaults)


def _make_exercise(**overrides) -> TemplateExercise:
    defaults = dict(
        id="tex-1",
        exercise_id="ex-squat",
        exercise_name="Squat",
        exercise_order=1,
        sets=3,
        reps="5",
    )
    defaults.update(overrides)
    return TemplateExercise(**defaults)


@pytest.fixture
def names() -> ExerciseNameTable:
    return ExerciseNameTable({
        "ex-squat": "Squat",
        "ex-bench": "Bench Press",
        "ex-row": "Barbell Row",
        "ex-fly": "Pec Fly",
        "ex-burpee": "Burpee",
    })


@pytest.fixture
def record() -> WorkoutLogRecord:
    """Completed 60-minute session with no stored totals."""
    return WorkoutLogRecord(
        id="log-1",
        started_at=datetime(2025, 3, 10, 17, 0, tzinfo=timezone.utc),
        completed_at=datetime(2025, 3, 10, 18, 0, tzinfo=timezone.utc),
        workout_assignment_id="assign-1",
        workout_name="Lower Body A",
    )


@pytest.fixture
def straight_block() -> TemplateBlock:
    return _make_block(exercises=(_make_exercise(load=ByPercentage(75)),))


@pytest.fixture
def superset_block() -> TemplateBlock:
    return _make_block(
        id="block-2",
        block_type=VariantTag.SUPERSET,
        block_name=None,
        block_order=2,
        reps_per_set=None,
        rest_seconds=90,
        exercises=(
            _make_exercise(
                id="tex-2",
                exercise_id="ex-bench",
                exercise_name="Bench Press",
                reps="8",
                load=ByWeight(60),
                rir=2,
                partner=PartnerPlan(exercise_id="ex-row", reps="10", load=ByWeight(50)),
            ),
        ),
    )


@pytest.fixture
def tabata_block() -> TemplateBlock:
    return _make_block(
        id="block-3",
        block_type=VariantTag.TABATA,
        block_name=None,
        block_order=3,
        total_sets=None,
        reps_per_set=None,
        rest_seconds=60,
        time_protocols=(
            TimeProtocol(
                protocol_type=VariantTag.TABATA,
                exercise_id="ex-burpee",
                exercise_order=2,
                set=1,
            ),
            TimeProtocol(
                protocol_type=VariantTag.TABATA,
                exercise_id="ex-squat",
                exercise_order=1,
                set=1,
                work_seconds=30,
                rest_seconds=15,
            ),
        ),
    )
