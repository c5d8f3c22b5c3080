"""Exercise name resolution.

Builds one id → name table per page load from three sources, in
precedence order:

1. names declared on the template (available before any set is logged),
2. names joined onto logged set rows,
3. a single batched lookup for every id still unnamed (superset partners,
   giant-set members, pre-exhaustion pairs, circuit stations).

Resolution never raises; an id with no name renders as a placeholder.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Callable, Iterator

from workout_engine.models.enums import PLACEHOLDER_EXERCISE
from workout_engine.models.logged_set import LoggedSet
from workout_engine.models.template import TemplateBlock

logger = logging.getLogger(__name__)

# Batched lookup: list of ids → rows shaped like {"id": ..., "name": ...}
NameLookup = Callable[[list[str]], Iterable[Mapping[str, Any]]]


class ExerciseNameTable(Mapping[str, str]):
    """Read-only id → display name mapping with placeholder fallbacks."""

    def __init__(self, names: Mapping[str, str] | None = None) -> None:
        self._names: dict[str, str] = dict(names or {})

    def __getitem__(self, exercise_id: str) -> str:
        return self._names[exercise_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def name_for(
        self, exercise_id: str | None, placeholder: str = PLACEHOLDER_EXERCISE
    ) -> str:
        """Resolved name for *exercise_id*, else *placeholder*."""
        if exercise_id and exercise_id in self._names:
            return self._names[exercise_id]
        return placeholder

    def __repr__(self) -> str:
        return f"ExerciseNameTable({self._names!r})"


def resolve_names(
    sets: Sequence[LoggedSet],
    template_blocks: Sequence[TemplateBlock] = (),
    lookup: NameLookup | None = None,
) -> ExerciseNameTable:
    """Build the exercise name table for one workout.

    Args:
        sets: Logged sets of the workout (may be empty).
        template_blocks: Template blocks of the workout (may be empty).
        lookup: Batched name lookup; called at most once, only with ids
            that no template or logged row already names.

    Returns:
        An ExerciseNameTable. Ids that could not be resolved are absent.
    """
    names: dict[str, str] = {}

    # 1. Template-declared names, block order then exercise order
    for block in sorted(template_blocks, key=_block_sort_key):
        for exercise in block.ordered_exercises():
            if exercise.exercise_id and exercise.exercise_name:
                names.setdefault(exercise.exercise_id, exercise.exercise_name)

    # 2. Names joined onto logged rows
    for logged in sets:
        if logged.exercise_id and logged.exercise_name:
            names.setdefault(logged.exercise_id, logged.exercise_name)

    # 3. One batched lookup for everything else
    missing = [
        exercise_id
        for exercise_id in collect_exercise_ids(sets, template_blocks)
        if exercise_id not in names
    ]
    if missing and lookup is not None:
        try:
            for row in lookup(missing) or ():
                exercise_id, name = row.get("id"), row.get("name")
                if exercise_id and name:
                    names.setdefault(str(exercise_id), str(name))
        except Exception:
            logger.warning(
                "Exercise name lookup failed for %d ids; using placeholders",
                len(missing),
                exc_info=True,
            )

    return ExerciseNameTable(names)


def collect_exercise_ids(
    sets: Sequence[LoggedSet],
    template_blocks: Sequence[TemplateBlock] = (),
) -> list[str]:
    """Every exercise id referenced anywhere, first-seen order, no duplicates."""
    ids: dict[str, None] = {}
    for block in sorted(template_blocks, key=_block_sort_key):
        for exercise in block.ordered_exercises():
            if exercise.exercise_id:
                ids.setdefault(exercise.exercise_id)
            if exercise.partner is not None and exercise.partner.exercise_id:
                ids.setdefault(exercise.partner.exercise_id)
        for protocol in block.time_protocols:
            if protocol.exercise_id:
                ids.setdefault(protocol.exercise_id)
    for logged in sets:
        for exercise_id in logged.referenced_exercise_ids():
            ids.setdefault(exercise_id)
    return list(ids)


def position_letter(index: int) -> str:
    """0 → 'A', 25 → 'Z', 26 → 'AA', 27 → 'AB', ..."""
    letters = ""
    n = index + 1
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters = chr(ord("A") + rem) + letters
    return letters


def placeholder_for(index: int) -> str:
    """Positional placeholder, e.g. index 0 → 'Exercise 1'."""
    return f"{PLACEHOLDER_EXERCISE} {index + 1}"


def _block_sort_key(block: TemplateBlock) -> int:
    return block.block_order if block.block_order is not None else 0
