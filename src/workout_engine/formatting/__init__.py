"""Display formatting for logged sets and template fallbacks."""

from workout_engine.formatting.durations import format_block_type, format_mm_ss
from workout_engine.formatting.set_formatter import format_set
from workout_engine.formatting.template_formatter import (
    describe_block_parameters,
    describe_template_exercise,
    render_template_fallback,
)

__all__ = [
    "describe_block_parameters",
    "describe_template_exercise",
    "format_block_type",
    "format_mm_ss",
    "format_set",
    "render_template_fallback",
]
