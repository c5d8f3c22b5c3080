"""Tests for coach_store.row_mapper (pure functions, no mocking)."""

from __future__ import annotations

from coach_store.row_mapper import (
    map_assignment,
    map_set_log,
    map_template_block,
    map_template_exercise,
)
from workout_engine.classification import parse_logged_set, parse_template_block
from workout_engine.models.enums import VariantTag
from workout_engine.models.variants import DropSet


class TestMapTemplateBlock:
    def test_flattens_embeds(self, raw_block_row):
        row = map_template_block(raw_block_row)
        assert "workout_block_exercises" not in row
        assert "workout_time_protocols" not in row
        assert row["time_protocols"] == []
        (exercise,) = row["exercises"]
        assert exercise["exercise_name"] == "Biceps Curl"
        assert exercise["drop_sets"] == [{"drop_order": 1, "weight_kg": 14, "reps": "8", "rest_seconds": 0}]
        assert exercise["cluster_sets"] == []
        assert exercise["rest_pause_sets"] == []

    def test_missing_embeds(self):
        row = map_template_block({"id": "b", "block_type": "straight_set"})
        assert row["exercises"] == []
        assert row["time_protocols"] == []

    def test_output_parses(self, raw_block_row):
        block = parse_template_block(map_template_block(raw_block_row))
        assert block.block_type == VariantTag.DROP_SET
        assert block.exercises[0].drop_sets[0].weight_kg == 14


class TestMapTemplateExercise:
    def test_single_child_dict_becomes_list(self):
        row = map_template_exercise({"id": "t", "workout_cluster_sets": {"reps_per_cluster": 3}})
        assert row["cluster_sets"] == [{"reps_per_cluster": 3}]

    def test_existing_name_kept(self):
        row = map_template_exercise({"id": "t", "exercise_name": "Curl", "exercises": {"name": "Other"}})
        assert row["exercise_name"] == "Curl"


class TestMapSetLog:
    def test_lifts_joined_name(self, raw_set_log_row):
        row = map_set_log(raw_set_log_row)
        assert row["exercise_name"] == "Biceps Curl"
        assert "exercises" not in row

    def test_no_join(self):
        assert map_set_log({"id": "s"})["exercise_name"] is None

    def test_output_parses(self, raw_set_log_row):
        logged = parse_logged_set(map_set_log(raw_set_log_row))
        assert logged.block_type == VariantTag.DROP_SET
        assert isinstance(logged.variant, DropSet)
        assert logged.variant.final_weight == 14


class TestMapAssignment:
    def test_extracts_template(self, raw_assignment_row):
        assert map_assignment(raw_assignment_row) == {
            "workout_template_id": "tpl-1",
            "workout_name": "Arms Day",
        }

    def test_list_embed(self):
        row = {"workout_template_id": "t", "workout_templates": [{"name": "Legs"}]}
        assert map_assignment(row)["workout_name"] == "Legs"

    def test_none(self):
        assert map_assignment(None) == {"workout_template_id": None, "workout_name": None}
