"""Page loaders — fetch rows, parse them, build views.

Each section of a page (session record, template, sets, exercise names) is
fetched separately; a failing section is logged and degrades to empty data
so that the rest of the page still renders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import pandas as pd

from coach_store import CoachStoreClient, StoreError
from workout_engine.classification import (
    parse_logged_set,
    parse_template_block,
    parse_workout_log,
)
from workout_engine.history import summarize_logs
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.template import TemplateBlock
from workout_engine.models.view import TemplateView, WorkoutView
from workout_engine.naming import resolve_names
from workout_engine.view_builder import TemplateViewBuilder, WorkoutLogViewBuilder

logger = logging.getLogger(__name__)

_V = TypeVar("_V")


@dataclass(frozen=True)
class LoadTicket:
    """Issued by ``ViewSession.begin``; identifies one load attempt."""

    identifier: str
    generation: int


class ViewSession(Generic[_V]):
    """Holds the view for the identifier currently being displayed.

    ``begin`` resets the view and supersedes every earlier ticket.
    ``apply`` only stores a result whose ticket is still current, so a
    late response for a previous identifier never overwrites the view of
    the new one.
    """

    def __init__(self) -> None:
        self._generation = 0
        self._identifier: str | None = None
        self.view: Optional[_V] = None

    @property
    def identifier(self) -> str | None:
        return self._identifier

    def begin(self, identifier: str) -> LoadTicket:
        self._generation += 1
        self._identifier = identifier
        self.view = None
        return LoadTicket(identifier, self._generation)

    def is_current(self, ticket: LoadTicket) -> bool:
        return (
            ticket.generation == self._generation
            and ticket.identifier == self._identifier
        )

    def apply(self, ticket: LoadTicket, view: Optional[_V]) -> bool:
        """Store *view* if *ticket* is current. Returns whether it was stored."""
        if not self.is_current(ticket):
            logger.debug(
                "Dropping stale result for %s (current: %s)",
                ticket.identifier, self._identifier,
            )
            return False
        self.view = view
        return True


class WorkoutLogLoader:
    """Loads workout-log, workout-details and history pages from the store."""

    def __init__(self, store: CoachStoreClient) -> None:
        self._store = store
        self._log_builder = WorkoutLogViewBuilder()
        self._template_builder = TemplateViewBuilder()

    # ------------------------------------------------------------------
    # Workout-log detail page
    # ------------------------------------------------------------------

    def load_workout_log(
        self, workout_log_id: str, client_id: str | None = None
    ) -> Optional[WorkoutView]:
        """Build the WorkoutView of one session, or None if the log is missing."""
        try:
            raw_log = self._store.get_workout_log(workout_log_id, client_id)
        except StoreError as exc:
            logger.error("Failed to load workout log %s: %s", workout_log_id, exc)
            return None
        if raw_log is None:
            logger.info("Workout log %s not found", workout_log_id)
            return None

        template_id, workout_name = self._assignment(raw_log.get("workout_assignment_id"))
        record = parse_workout_log(raw_log, workout_name)
        blocks = self._template_blocks(template_id)
        sets = self._set_logs(workout_log_id, client_id)
        names = resolve_names(sets, blocks, lookup=self._store.get_exercise_names)

        view = self._log_builder.build(record, blocks, sets, names)
        logger.info(
            "Loaded workout log %s: %d blocks, %d sets",
            workout_log_id, len(view.blocks), len(sets),
        )
        return view

    def load_into(
        self,
        session: ViewSession[WorkoutView],
        workout_log_id: str,
        client_id: str | None = None,
    ) -> bool:
        """Load *workout_log_id* into *session*, guarded against superseding loads."""
        ticket = session.begin(workout_log_id)
        view = self.load_workout_log(workout_log_id, client_id)
        return session.apply(ticket, view)

    # ------------------------------------------------------------------
    # Workout-details page
    # ------------------------------------------------------------------

    def load_template_view(self, assignment_id: str) -> Optional[TemplateView]:
        """Build the TemplateView of an assignment, or None without a template."""
        template_id, workout_name = self._assignment(assignment_id)
        if not template_id:
            logger.info("Assignment %s has no template", assignment_id)
            return None
        blocks = self._template_blocks(template_id)
        names = resolve_names((), blocks, lookup=self._store.get_exercise_names)
        return self._template_builder.build(workout_name or "Workout", blocks, names)

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def load_history(self, client_id: str, limit: int = 50) -> pd.DataFrame:
        """Summary frame of a client's completed sessions (see ``summarize_logs``)."""
        try:
            raw_logs = self._store.get_workout_logs(client_id, limit=limit)
        except StoreError as exc:
            logger.error("Failed to load workout history for %s: %s", client_id, exc)
            raw_logs = []

        names: dict[str, str | None] = {}
        for assignment_id in dict.fromkeys(
            r.get("workout_assignment_id") for r in raw_logs
        ):
            if assignment_id:
                names[assignment_id] = self._assignment(assignment_id)[1]

        records = [
            parse_workout_log(r, names.get(r.get("workout_assignment_id")))
            for r in raw_logs
        ]

        sets_by_log: dict[str, list[LoggedSet]] = {}
        try:
            rows = self._store.get_set_logs_for_logs(r.id for r in records)
        except StoreError as exc:
            logger.warning("Failed to load sets for history, using stored totals: %s", exc)
            rows = []
        for row in rows:
            logged = parse_logged_set(row)
            sets_by_log.setdefault(logged.workout_log_id or "", []).append(logged)

        return summarize_logs(records, sets_by_log)

    # ------------------------------------------------------------------
    # Internal helpers; each section degrades to empty data on failure
    # ------------------------------------------------------------------

    def _assignment(self, assignment_id: Any) -> tuple[str | None, str | None]:
        if not assignment_id:
            return (None, None)
        try:
            info = self._store.get_assignment(str(assignment_id))
        except StoreError as exc:
            logger.warning("Failed to load assignment %s: %s", assignment_id, exc)
            return (None, None)
        return (info.get("workout_template_id"), info.get("workout_name"))

    def _template_blocks(self, template_id: str | None) -> list[TemplateBlock]:
        if not template_id:
            return []
        try:
            rows = self._store.get_template_blocks(template_id)
        except StoreError as exc:
            logger.warning("Failed to load blocks of template %s: %s", template_id, exc)
            return []
        return [parse_template_block(r) for r in rows]

    def _set_logs(self, workout_log_id: str, client_id: str | None) -> list[LoggedSet]:
        try:
            rows = self._store.get_set_logs(workout_log_id, client_id)
        except StoreError as exc:
            logger.warning("Failed to load sets of workout log %s: %s", workout_log_id, exc)
            return []
        return [parse_logged_set(r) for r in rows]
