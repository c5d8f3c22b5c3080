"""Fixtures with realistic PostgREST response rows for testing."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def raw_block_row() -> dict:
    """``workout_blocks`` row with embedded exercises and time protocols."""
    return {
        "id": "block-1",
        "template_id": "tpl-1",
        "block_type": "drop_set",
        "block_name": "Finisher",
        "block_order": 2,
        "total_sets": 3,
        "reps_per_set": "10",
        "rest_seconds": 90,
        "duration_seconds": None,
        "block_notes": None,
        "workout_block_exercises": [
            {
                "id": "tex-1",
                "exercise_id": "ex-curl",
                "exercise_order": 1,
                "exercise_letter": None,
                "sets": 3,
                "reps": "10",
                "weight_kg": 20,
                "load_percentage": None,
                "exercises": {"id": "ex-curl", "name": "Biceps Curl"},
                "workout_drop_sets": [
                    {"drop_order": 1, "weight_kg": 14, "reps": "8", "rest_seconds": 0},
                ],
                "workout_cluster_sets": [],
                "workout_rest_pause_sets": None,
            },
        ],
        "workout_time_protocols": [],
    }


@pytest.fixture
def raw_set_log_row() -> dict:
    """``workout_set_logs`` row with the joined exercise."""
    return {
        "id": "set-1",
        "workout_log_id": "log-1",
        "block_id": "block-1",
        "block_type": "drop_set",
        "exercise_id": "ex-curl",
        "weight": 20,
        "reps": 10,
        "set_number": 1,
        "completed_at": "2025-03-10T18:05:00+00:00",
        "dropset_initial_weight": 20,
        "dropset_initial_reps": 10,
        "dropset_final_weight": 14,
        "dropset_final_reps": 8,
        "dropset_percentage": None,
        "exercises": [{"id": "ex-curl", "name": "Biceps Curl"}],
    }


@pytest.fixture
def raw_assignment_row() -> dict:
    return {
        "id": "assign-1",
        "workout_template_id": "tpl-1",
        "workout_templates": {"id": "tpl-1", "name": "Arms Day"},
    }


def _make_query(data: list | None = None) -> MagicMock:
    """A PostgREST query builder mock whose filter methods chain to itself."""
    query = MagicMock()
    for method in ("select", "eq", "in_", "is_", "order", "limit"):
        getattr(query, method).return_value = query
    query.not_ = query
    query.execute.return_value = MagicMock(data=data or [])
    return query


@pytest.fixture
def query() -> MagicMock:
    return _make_query()


@pytest.fixture
def mock_supabase(query) -> MagicMock:
    """Supabase client mock whose ``table()`` returns the shared ``query``."""
    mock = MagicMock()
    mock.table.return_value = query
    return mock
