"""Enumerations and display constants for the workout engine.

The twelve exercise-type tags are stored as plain strings in the backend
(``workout_blocks.block_type`` / ``workout_set_logs.block_type``), so
``VariantTag`` is a string-valued enum that compares equal to its raw value.
"""

from enum import Enum, IntEnum, auto


class VariantTag(str, Enum):
    """Exercise-type classifier shared by logged sets and template blocks."""

    STRAIGHT_SET = "straight_set"
    SUPERSET = "superset"
    GIANT_SET = "giant_set"
    DROP_SET = "drop_set"
    CLUSTER_SET = "cluster_set"
    REST_PAUSE = "rest_pause"
    PRE_EXHAUSTION = "pre_exhaustion"
    AMRAP = "amrap"
    EMOM = "emom"
    FOR_TIME = "for_time"
    TABATA = "tabata"
    CIRCUIT = "circuit"


class EmomMode(IntEnum):
    """EMOM protocol flavour (``workout_time_protocols.emom_mode``)."""

    TIME_BASED = auto()
    REP_BASED = auto()


# Legacy spellings found in older set-log rows.
TAG_ALIASES: dict[str, VariantTag] = {
    "dropset": VariantTag.DROP_SET,
    "fortime": VariantTag.FOR_TIME,
    "preexhaust": VariantTag.PRE_EXHAUSTION,
}

# A single row spans two or more exercises for these tags, so sets are
# listed flat instead of grouped by ``exercise_id``.
MULTI_EXERCISE_TAGS = frozenset({
    VariantTag.GIANT_SET,
    VariantTag.SUPERSET,
    VariantTag.PRE_EXHAUSTION,
})

# Tags whose planned parameters live in workout_time_protocols.
TIME_BASED_TAGS = frozenset({
    VariantTag.AMRAP,
    VariantTag.EMOM,
    VariantTag.FOR_TIME,
    VariantTag.TABATA,
    VariantTag.CIRCUIT,
})

# ---------------------------------------------------------------------------
# Placeholder labels used when an exercise name cannot be resolved
# ---------------------------------------------------------------------------

PLACEHOLDER_EXERCISE = "Exercise"
PLACEHOLDER_EXERCISE_A = "Exercise A"
PLACEHOLDER_EXERCISE_B = "Exercise B"
PLACEHOLDER_ISOLATION = "Isolation"
PLACEHOLDER_COMPOUND = "Compound"

NO_EXERCISES_CONFIGURED = "No exercises configured for this block."
NO_TABATA_EXERCISES_CONFIGURED = "No exercises configured for this Tabata block."

# ---------------------------------------------------------------------------
# Tabata planning defaults (classic 20 s on / 10 s off, 8 rounds)
# ---------------------------------------------------------------------------

TABATA_DEFAULT_ROUNDS = 8
TABATA_DEFAULT_WORK_S = 20
TABATA_DEFAULT_REST_S = 10
