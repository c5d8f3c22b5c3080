"""Tests for exercise name resolution."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from workout_engine.models.enums import VariantTag
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.template import PartnerPlan, TemplateBlock, TemplateExercise
from workout_engine.models.variants import GiantSet, GiantSetMember, Superset
from workout_engine.naming import (
    ExerciseNameTable,
    collect_exercise_ids,
    placeholder_for,
    position_letter,
    resolve_names,
)


def _make_set(**overrides) -> LoggedSet:
    defaults = dict(id="s1", block_id="b1", exercise_id="E")
    defaults.update(overrides)
    return LoggedSet(**defaults)


def _make_block(*exercises: TemplateExercise, block_order: int = 1) -> TemplateBlock:
    return TemplateBlock(id=f"b{block_order}", block_order=block_order, exercises=exercises)


class TestResolveNames:
    def test_template_name_wins_over_logged_name(self):
        sets = [_make_set(exercise_name="Back Squat")]
        blocks = [_make_block(TemplateExercise(id="t", exercise_id="E", exercise_name="Squat"))]
        names = resolve_names(sets, blocks)
        assert names["E"] == "Squat"

    def test_logged_name_used_without_template(self):
        names = resolve_names([_make_set(exercise_name="Back Squat")])
        assert names.name_for("E") == "Back Squat"

    def test_single_batched_lookup_for_indirect_refs(self):
        sets = [
            _make_set(
                id="s1",
                exercise_id="A",
                exercise_name="Bench",
                block_type=VariantTag.SUPERSET,
                variant=Superset(exercise_a_id="A", exercise_b_id="B"),
            ),
            _make_set(
                id="s2",
                exercise_id=None,
                block_type=VariantTag.GIANT_SET,
                variant=GiantSet(members=(GiantSetMember(exercise_id="C"), GiantSetMember(exercise_id="D"))),
            ),
        ]
        lookup = MagicMock(return_value=[{"id": "B", "name": "Row"}, {"id": "C", "name": "Dip"}])

        names = resolve_names(sets, lookup=lookup)

        lookup.assert_called_once_with(["B", "C", "D"])
        assert names.name_for("B") == "Row"
        assert names.name_for("C") == "Dip"
        assert names.name_for("D", "Exercise D") == "Exercise D"

    def test_no_lookup_when_everything_named(self):
        lookup = MagicMock()
        resolve_names([_make_set(exercise_name="Squat")], lookup=lookup)
        lookup.assert_not_called()

    def test_lookup_failure_is_swallowed(self, caplog):
        lookup = MagicMock(side_effect=RuntimeError("network down"))
        names = resolve_names([_make_set()], lookup=lookup)
        assert names.name_for("E", "Exercise A") == "Exercise A"
        assert "lookup failed" in caplog.text

    def test_template_partner_ids_are_looked_up(self):
        blocks = [_make_block(TemplateExercise(
            id="t", exercise_id="A", exercise_name="Bench",
            partner=PartnerPlan(exercise_id="B"),
        ))]
        lookup = MagicMock(return_value=[{"id": "B", "name": "Row"}])
        names = resolve_names([], blocks, lookup)
        lookup.assert_called_once_with(["B"])
        assert names["B"] == "Row"

    def test_earlier_block_declaration_wins(self):
        blocks = [
            _make_block(TemplateExercise(id="t2", exercise_id="E", exercise_name="Pause Squat"), block_order=2),
            _make_block(TemplateExercise(id="t1", exercise_id="E", exercise_name="Squat"), block_order=1),
        ]
        assert resolve_names([], blocks)["E"] == "Squat"


class TestExerciseNameTable:
    def test_placeholder_for_missing(self):
        table = ExerciseNameTable()
        assert table.name_for("nope", "Isolation") == "Isolation"
        assert table.name_for(None) == "Exercise"

    def test_mapping_protocol(self):
        table = ExerciseNameTable({"a": "Squat"})
        assert len(table) == 1
        assert dict(table) == {"a": "Squat"}


class TestCollectExerciseIds:
    def test_order_and_dedup(self):
        blocks = [_make_block(TemplateExercise(id="t", exercise_id="A"))]
        sets = [_make_set(exercise_id="A"), _make_set(exercise_id="B")]
        assert collect_exercise_ids(sets, blocks) == ["A", "B"]


class TestPositionLetter:
    @pytest.mark.parametrize("index,expected", [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA")])
    def test_letters(self, index, expected):
        assert position_letter(index) == expected

    def test_placeholder_for(self):
        assert placeholder_for(0) == "Exercise 1"
        assert placeholder_for(2) == "Exercise 3"
