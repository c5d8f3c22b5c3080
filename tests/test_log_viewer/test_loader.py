"""Tests for log_viewer.loader — the store is mocked, parsing and view building are real."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from coach_store import CoachStoreClient, StoreQueryError
from log_viewer.loader import ViewSession, WorkoutLogLoader


@pytest.fixture
def store():
    mock = MagicMock(spec=CoachStoreClient)
    mock.get_workout_log.return_value = {
        "id": "log-1",
        "workout_assignment_id": "assign-1",
        "started_at": "2025-03-10T17:00:00+00:00",
        "completed_at": "2025-03-10T18:00:00+00:00",
        "total_sets_completed": None,
    }
    mock.get_assignment.return_value = {
        "workout_template_id": "tpl-1",
        "workout_name": "Lower Body A",
    }
    mock.get_template_blocks.return_value = [
        {
            "id": "block-1",
            "block_type": "straight_set",
            "block_order": 1,
            "total_sets": 3,
            "reps_per_set": "5",
            "exercises": [{
                "id": "tex-1",
                "exercise_id": "ex-squat",
                "exercise_name": "Squat",
                "exercise_order": 1,
                "reps": "5",
                "load_percentage": 75,
            }],
            "time_protocols": [],
        },
        {
            "id": "block-2",
            "block_type": "amrap",
            "block_order": 2,
            "exercises": [],
            "time_protocols": [],
        },
    ]
    mock.get_set_logs.return_value = [
        {
            "id": "s1",
            "block_id": "block-1",
            "block_type": "straight_set",
            "exercise_id": "ex-squat",
            "weight": 100,
            "reps": 5,
            "set_number": 1,
            "exercise_name": None,
        },
    ]
    mock.get_exercise_names.return_value = []
    return mock


@pytest.fixture
def loader(store):
    return WorkoutLogLoader(store)


# ---------------------------------------------------------------------------
# ViewSession
# ---------------------------------------------------------------------------


class TestViewSession:
    def test_apply_current(self):
        session = ViewSession()
        ticket = session.begin("a")
        assert session.apply(ticket, "view-a")
        assert session.view == "view-a"

    def test_stale_ticket_dropped(self):
        session = ViewSession()
        old = session.begin("a")
        new = session.begin("b")
        assert not session.apply(old, "view-a")
        assert session.view is None
        assert session.apply(new, "view-b")
        assert session.view == "view-b"

    def test_reloading_same_identifier_supersedes(self):
        session = ViewSession()
        first = session.begin("a")
        session.begin("a")
        assert not session.is_current(first)

    def test_begin_resets_view(self):
        session = ViewSession()
        session.apply(session.begin("a"), "view-a")
        session.begin("b")
        assert session.view is None
        assert session.identifier == "b"


# ---------------------------------------------------------------------------
# Workout-log page
# ---------------------------------------------------------------------------


class TestLoadWorkoutLog:
    def test_builds_view(self, loader, store):
        view = loader.load_workout_log("log-1")

        assert view.workout_name == "Lower Body A"
        assert [b.block_label for b in view.blocks] == ["Block 1 - Straight Set", "Block 2 - Amrap"]
        assert view.blocks[0].display_lines[0].text == "• Squat - Set 1: 100 kg × 5 reps"
        assert view.totals.duration_minutes == 60
        store.get_template_blocks.assert_called_once_with("tpl-1")
        store.get_exercise_names.assert_not_called()

    def test_block_without_sets_shows_placeholder(self, loader):
        view = loader.load_workout_log("log-1")
        assert view.blocks[1].display_lines[0].text == "• No exercises configured for this block."

    def test_missing_log(self, loader, store):
        store.get_workout_log.return_value = None
        assert loader.load_workout_log("nope") is None
        store.get_set_logs.assert_not_called()

    def test_log_query_failure(self, loader, store, caplog):
        store.get_workout_log.side_effect = StoreQueryError("timeout", status_code=504)
        with caplog.at_level(logging.ERROR):
            assert loader.load_workout_log("log-1") is None
        assert "Failed to load workout log" in caplog.text

    def test_failing_sets_still_render_blocks(self, loader, store):
        store.get_set_logs.side_effect = StoreQueryError("boom")
        view = loader.load_workout_log("log-1")
        assert len(view.blocks) == 2
        assert not view.blocks[0].has_sets
        assert view.blocks[0].display_lines[0].text.startswith("• Squat - Planned")

    def test_failing_template_still_returns_view(self, loader, store):
        store.get_template_blocks.side_effect = StoreQueryError("boom")
        view = loader.load_workout_log("log-1")
        assert view.blocks == ()
        assert view.totals.total_sets == 1

    def test_failing_assignment_uses_default_name(self, loader, store):
        store.get_assignment.side_effect = StoreQueryError("boom")
        view = loader.load_workout_log("log-1")
        assert view.workout_name == "Workout"
        store.get_template_blocks.assert_not_called()

    def test_failing_name_lookup_uses_placeholders(self, loader, store):
        store.get_template_blocks.return_value = []
        store.get_set_logs.return_value[0]["block_id"] = None
        store.get_exercise_names.side_effect = StoreQueryError("boom")
        view = loader.load_workout_log("log-1")
        store.get_exercise_names.assert_called_once_with(["ex-squat"])
        assert view.totals.total_sets == 1


class TestLoadInto:
    def test_stores_view(self, loader):
        session = ViewSession()
        assert loader.load_into(session, "log-1")
        assert session.view.workout_log_id == "log-1"

    def test_superseded_load_is_discarded(self, loader, store):
        session = ViewSession()
        log_row = store.get_workout_log.return_value

        def navigate_away(workout_log_id, client_id=None):
            session.begin("log-2")
            return log_row

        store.get_workout_log.side_effect = navigate_away
        assert not loader.load_into(session, "log-1")
        assert session.view is None
        assert session.identifier == "log-2"


# ---------------------------------------------------------------------------
# Workout-details page
# ---------------------------------------------------------------------------


class TestLoadTemplateView:
    def test_builds_view(self, loader):
        view = loader.load_template_view("assign-1")
        assert view.workout_name == "Lower Body A"
        assert view.total_sets == 3
        assert [card.name for card in view.blocks[0].exercises] == ["Squat"]

    def test_no_template(self, loader, store):
        store.get_assignment.return_value = {"workout_template_id": None, "workout_name": None}
        assert loader.load_template_view("assign-1") is None


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


class TestLoadHistory:
    def test_frame(self, loader, store):
        store.get_workout_logs.return_value = [
            {"id": "log-2", "workout_assignment_id": "assign-1", "completed_at": "2025-03-12T18:00:00+00:00"},
            {"id": "log-1", "workout_assignment_id": "assign-1", "completed_at": "2025-03-10T18:00:00+00:00",
             "total_sets_completed": 9},
        ]
        store.get_set_logs_for_logs.return_value = [
            {"id": "s1", "workout_log_id": "log-2", "block_id": "b", "weight": 60, "reps": 10},
        ]

        frame = loader.load_history("client-1", limit=10)

        store.get_workout_logs.assert_called_once_with("client-1", limit=10)
        store.get_assignment.assert_called_once_with("assign-1")
        assert list(frame["workout_log_id"]) == ["log-2", "log-1"]
        assert list(frame["workout_name"]) == ["Lower Body A", "Lower Body A"]
        assert list(frame["total_sets"]) == [1, 9]
        assert frame.loc[0, "total_weight_volume"] == 600.0

    def test_failing_sets_fall_back_to_stored_totals(self, loader, store):
        store.get_workout_logs.return_value = [
            {"id": "log-1", "completed_at": "2025-03-10T18:00:00+00:00", "total_sets_completed": 9},
        ]
        store.get_set_logs_for_logs.side_effect = StoreQueryError("boom")
        frame = loader.load_history("client-1")
        assert list(frame["total_sets"]) == [9]
        assert list(frame["workout_name"]) == ["Workout"]

    def test_failing_log_query_returns_empty_frame(self, loader, store):
        store.get_workout_logs.side_effect = StoreQueryError("boom")
        store.get_set_logs_for_logs.return_value = []
        assert loader.load_history("client-1").empty
