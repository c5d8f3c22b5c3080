"""Tests for LoggedSet ordering and exercise references."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from workout_engine.models.enums import VariantTag
from workout_engine.models.logged_set import LoggedSet, sort_sets
from workout_engine.models.variants import (
    Circuit,
    CircuitMember,
    GiantSet,
    GiantSetMember,
    PreExhaustion,
    Superset,
)

_T0 = datetime(2025, 3, 10, 18, 0, tzinfo=timezone.utc)


def _make_set(**overrides) -> LoggedSet:
    defaults = dict(id="s", block_id="b1", exercise_id="ex-1", weight=50.0, reps=8)
    defaults.update(overrides)
    return LoggedSet(**defaults)


class TestSortSets:
    def test_by_set_number(self):
        sets = [_make_set(id="c", set_number=3), _make_set(id="a", set_number=1), _make_set(id="b", set_number=2)]
        assert [s.id for s in sort_sets(sets)] == ["a", "b", "c"]

    def test_numbered_before_unnumbered(self):
        sets = [
            _make_set(id="late", completed_at=_T0),
            _make_set(id="numbered", set_number=5, completed_at=_T0 + timedelta(hours=1)),
        ]
        assert [s.id for s in sort_sets(sets)] == ["numbered", "late"]

    def test_unnumbered_by_completion_time(self):
        sets = [
            _make_set(id="second", completed_at=_T0 + timedelta(minutes=2)),
            _make_set(id="first", completed_at=_T0),
        ]
        assert [s.id for s in sort_sets(sets)] == ["first", "second"]

    def test_missing_timestamp_sorts_last(self):
        sets = [_make_set(id="none"), _make_set(id="timed", completed_at=_T0)]
        assert [s.id for s in sort_sets(sets)] == ["timed", "none"]

    def test_does_not_mutate_input(self):
        sets = [_make_set(id="b", set_number=2), _make_set(id="a", set_number=1)]
        sort_sets(sets)
        assert [s.id for s in sets] == ["b", "a"]


class TestReferencedExerciseIds:
    def test_primary_only(self):
        assert _make_set().referenced_exercise_ids() == ("ex-1",)

    def test_superset_partners(self):
        logged = _make_set(
            block_type=VariantTag.SUPERSET,
            variant=Superset(exercise_a_id="ex-1", exercise_b_id="ex-2"),
        )
        assert logged.referenced_exercise_ids() == ("ex-1", "ex-2")

    def test_pre_exhaustion_pair(self):
        logged = _make_set(
            exercise_id=None,
            variant=PreExhaustion(isolation_exercise_id="iso", compound_exercise_id="comp"),
        )
        assert logged.referenced_exercise_ids() == ("iso", "comp")

    def test_giant_set_members_without_primary(self):
        logged = _make_set(
            exercise_id=None,
            variant=GiantSet(members=(
                GiantSetMember(exercise_id="x"),
                GiantSetMember(exercise_id=None),
                GiantSetMember(exercise_id="y"),
            )),
        )
        assert logged.referenced_exercise_ids() == ("x", "y")

    def test_circuit_members_deduplicated(self):
        logged = _make_set(
            exercise_id="x",
            variant=Circuit(members=(CircuitMember(exercise_id="x"), CircuitMember(exercise_id="z"))),
        )
        assert logged.referenced_exercise_ids() == ("x", "z")


class TestImmutability:
    def test_frozen(self):
        logged = _make_set()
        with pytest.raises(dataclasses.FrozenInstanceError):
            logged.reps = 10
