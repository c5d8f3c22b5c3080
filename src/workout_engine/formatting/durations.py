"""Number and duration formatting shared by every display path."""

from __future__ import annotations

import math

from workout_engine.models.enums import VariantTag


def format_mm_ss(seconds: float | None) -> str:
    """Render a seconds value as zero-padded ``MM:SS``.

    >>> format_mm_ss(125)
    '02:05'
    >>> format_mm_ss(59)
    '00:59'
    """
    total = max(0, int(seconds or 0))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_number(value: float | None) -> str:
    """Whole numbers without a trailing ``.0``; missing values as ``0``."""
    if value is None or (isinstance(value, float) and not math.isfinite(value)):
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_weight(value: float | None) -> str:
    return f"{format_number(value)} kg"


def format_reps(value: int | None) -> str:
    return f"{format_number(value)} reps"


def format_weight_reps(weight: float | None, reps: int | None) -> str:
    """``"100 kg × 5 reps"``; missing values render as 0."""
    return f"{format_weight(weight)} × {format_reps(reps)}"


def format_seconds(value: int | None) -> str:
    return f"{format_number(value)}s"


def format_block_type(tag: VariantTag | str) -> str:
    """``drop_set`` → ``Drop Set``."""
    raw = tag.value if isinstance(tag, VariantTag) else str(tag)
    return " ".join(word.capitalize() for word in raw.split("_") if word)
