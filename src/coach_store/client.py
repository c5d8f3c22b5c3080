"""High-level coaching backend client facade.

All methods wrap supabase/PostgREST queries with error handling and retry
logic, and return flat row dicts (see ``row_mapper``).
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Optional

from postgrest.exceptions import APIError
from supabase import Client

from coach_store.connection import create_store_client
from coach_store.exceptions import StoreQueryError, StoreRateLimitError
from coach_store.row_mapper import (
    map_assignment,
    map_set_log,
    map_template_block,
)

logger = logging.getLogger(__name__)

_MAX_RETRIES = 3
_BASE_BACKOFF_S = 2

_WORKOUT_LOG_COLUMNS = (
    "id, client_id, workout_assignment_id, started_at, completed_at, "
    "total_duration_minutes, total_sets_completed, total_reps_completed, "
    "total_weight_lifted"
)

_SET_LOG_COLUMNS = (
    "id, workout_log_id, block_id, block_type, exercise_id, weight, reps, "
    "set_number, completed_at, "
    "dropset_initial_weight, dropset_initial_reps, dropset_final_weight, "
    "dropset_final_reps, dropset_percentage, "
    "superset_exercise_a_id, superset_weight_a, superset_reps_a, "
    "superset_exercise_b_id, superset_weight_b, superset_reps_b, "
    "giant_set_exercises, cluster_number, "
    "amrap_total_reps, amrap_duration_seconds, amrap_target_reps, "
    "fortime_total_reps, fortime_time_taken_sec, fortime_time_cap_sec, "
    "fortime_target_reps, "
    "emom_minute_number, emom_total_reps_this_min, emom_total_duration_sec, "
    "tabata_rounds_completed, tabata_total_duration_sec, circuit_exercises, "
    "rest_pause_initial_weight, rest_pause_initial_reps, rest_pause_reps_after, "
    "rest_pause_number, "
    "preexhaust_isolation_exercise_id, preexhaust_isolation_weight, "
    "preexhaust_isolation_reps, preexhaust_compound_exercise_id, "
    "preexhaust_compound_weight, preexhaust_compound_reps, "
    "exercises(id, name)"
)

_BLOCK_COLUMNS = (
    "*, "
    "workout_block_exercises(*, exercises(id, name), workout_drop_sets(*), "
    "workout_cluster_sets(*), workout_rest_pause_sets(*)), "
    "workout_time_protocols(*)"
)


class CoachStoreClient:
    """Facade for workout-log and workout-template queries."""

    def __init__(self, url: str | None = None, key: str | None = None) -> None:
        self._client = create_store_client(url, key)

    @classmethod
    def from_client(cls, client: Client) -> "CoachStoreClient":
        """Construct from an already-created supabase Client."""
        obj = cls.__new__(cls)
        obj._client = client
        return obj

    # ------------------------------------------------------------------
    # Workout logs
    # ------------------------------------------------------------------

    def get_workout_log(
        self, workout_log_id: str, client_id: str | None = None
    ) -> Optional[dict[str, Any]]:
        """Fetch one ``workout_logs`` row, or None when it does not exist."""
        query = (
            self._client.table("workout_logs")
            .select(_WORKOUT_LOG_COLUMNS)
            .eq("id", workout_log_id)
        )
        if client_id:
            query = query.eq("client_id", client_id)
        rows = self._rows(query.limit(1))
        return rows[0] if rows else None

    def get_workout_logs(self, client_id: str, limit: int = 50) -> list[dict[str, Any]]:
        """Completed sessions of a client, newest first."""
        query = (
            self._client.table("workout_logs")
            .select(_WORKOUT_LOG_COLUMNS)
            .eq("client_id", client_id)
            .not_.is_("completed_at", "null")
            .order("completed_at", desc=True)
            .limit(limit)
        )
        return self._rows(query)

    def get_set_logs(
        self, workout_log_id: str, client_id: str | None = None
    ) -> list[dict[str, Any]]:
        """All ``workout_set_logs`` rows of one session, in completion order."""
        query = (
            self._client.table("workout_set_logs")
            .select(_SET_LOG_COLUMNS)
            .eq("workout_log_id", workout_log_id)
        )
        if client_id:
            query = query.eq("client_id", client_id)
        return [map_set_log(r) for r in self._rows(query.order("completed_at"))]

    def get_set_logs_for_logs(self, workout_log_ids: Iterable[str]) -> list[dict[str, Any]]:
        """Set rows of several sessions in one query. Empty input makes no call."""
        ids = list(dict.fromkeys(i for i in workout_log_ids if i))
        if not ids:
            return []
        query = (
            self._client.table("workout_set_logs")
            .select("id, workout_log_id, block_id, block_type, exercise_id, weight, reps, set_number, completed_at")
            .in_("workout_log_id", ids)
        )
        return [map_set_log(r) for r in self._rows(query)]

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def get_assignment(self, assignment_id: str) -> dict[str, Any]:
        """Template id and template name of a workout assignment."""
        query = (
            self._client.table("workout_assignments")
            .select("id, workout_template_id, workout_templates(id, name)")
            .eq("id", assignment_id)
            .limit(1)
        )
        rows = self._rows(query)
        return map_assignment(rows[0] if rows else None)

    def get_template_blocks(self, template_id: str) -> list[dict[str, Any]]:
        """Blocks of a template with their exercises and time protocols, in block order."""
        query = (
            self._client.table("workout_blocks")
            .select(_BLOCK_COLUMNS)
            .eq("template_id", template_id)
            .order("block_order")
        )
        return [map_template_block(r) for r in self._rows(query)]

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    def get_exercise_names(self, exercise_ids: Iterable[str]) -> list[dict[str, Any]]:
        """``{id, name}`` rows for *exercise_ids* in a single ``in`` query.

        Empty input makes no call.
        """
        ids = list(dict.fromkeys(i for i in exercise_ids if i))
        if not ids:
            return []
        query = self._client.table("exercises").select("id, name").in_("id", ids)
        rows = self._rows(query)
        logger.debug("Resolved %d of %d exercise names", len(rows), len(ids))
        return rows

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _rows(self, query: Any) -> list[dict[str, Any]]:
        response = self._safe_call(query.execute)
        data = getattr(response, "data", None)
        return list(data or [])

    def _safe_call(self, fn: Callable, *args: Any, **kwargs: Any) -> Any:
        """Call *fn*, retrying with exponential backoff on HTTP 429.

        PostgREST failures arrive as ``APIError`` whose ``code`` is usually a
        Postgres or PostgREST error code; it only carries an HTTP status when
        the response body was not JSON. Transport errors from httpx carry
        the status on ``response``.
        """
        last_exc: Exception | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                return fn(*args, **kwargs)
            except APIError as exc:
                last_exc = exc
                status = _status_of(exc)
                if status == 429:
                    self._backoff(attempt)
                    continue
                raise StoreQueryError(
                    _api_error_message(exc),
                    status_code=status,
                    error_code=None if status is not None else _text(exc.code),
                ) from exc
            except Exception as exc:
                last_exc = exc
                status = _status_of(exc)
                if status == 429:
                    self._backoff(attempt)
                    continue
                raise StoreQueryError(str(exc), status_code=status) from exc

        raise StoreRateLimitError(
            f"Rate limited after {_MAX_RETRIES} retries: {last_exc}"
        )

    @staticmethod
    def _backoff(attempt: int) -> None:
        wait = _BASE_BACKOFF_S * (2 ** attempt)
        logger.warning(
            "Rate limited (attempt %d/%d), retrying in %ds",
            attempt + 1,
            _MAX_RETRIES,
            wait,
        )
        time.sleep(wait)


def _status_of(exc: Exception) -> int | None:
    """HTTP status of a postgrest/httpx error, if it carries one.

    ``code`` is shared with Postgres SQLSTATE values ("23505"), so only
    values inside the HTTP range count as a status.
    """
    for attr in ("status_code", "status", "code"):
        status = _http_status(getattr(exc, attr, None))
        if status is not None:
            return status
    response = getattr(exc, "response", None)
    return _http_status(getattr(response, "status_code", None))


def _http_status(value: Any) -> int | None:
    if isinstance(value, str) and value.isdigit():
        value = int(value)
    if isinstance(value, int) and 100 <= value <= 599:
        return value
    return None


def _api_error_message(exc: APIError) -> str:
    message = exc.message or str(exc)
    if exc.details:
        message = f"{message} ({exc.details})"
    if exc.hint:
        message = f"{message}; hint: {exc.hint}"
    return message


def _text(value: Any) -> str | None:
    return str(value) if value not in (None, "") else None
