"""Tests for number and duration formatting."""

from __future__ import annotations

import pytest

from workout_engine.formatting.durations import (
    format_block_type,
    format_mm_ss,
    format_number,
    format_weight_reps,
)
from workout_engine.models.enums import VariantTag


class TestFormatMmSs:
    @pytest.mark.parametrize("seconds,expected", [
        (125, "02:05"),
        (59, "00:59"),
        (0, "00:00"),
        (600, "10:00"),
        (3725, "62:05"),
    ])
    def test_values(self, seconds, expected):
        assert format_mm_ss(seconds) == expected

    def test_none_is_zero(self):
        assert format_mm_ss(None) == "00:00"


class TestFormatNumber:
    def test_whole_floats_drop_decimal(self):
        assert format_number(100.0) == "100"

    def test_fractional(self):
        assert format_number(62.5) == "62.5"

    def test_none(self):
        assert format_number(None) == "0"

    def test_weight_reps(self):
        assert format_weight_reps(100.0, 5) == "100 kg × 5 reps"
        assert format_weight_reps(None, None) == "0 kg × 0 reps"


class TestFormatBlockType:
    def test_enum(self):
        assert format_block_type(VariantTag.DROP_SET) == "Drop Set"

    def test_string(self):
        assert format_block_type("pre_exhaustion") == "Pre Exhaustion"
