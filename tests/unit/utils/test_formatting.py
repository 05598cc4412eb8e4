"""Tests for display formatting helpers."""

import pytest

from flood_mission_planner.utils.formatting import format_duration, format_percent


class TestFormatDuration:
    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [
            (0, "0m"),
            (42.9, "42m"),
            (60, "1h 0m"),
            (65.5, "1h 5m"),
            (150, "2h 30m"),
            (-3, "0m"),
        ],
    )
    def test_format(self, minutes: float, expected: str) -> None:
        assert format_duration(minutes) == expected


class TestFormatPercent:
    def test_rounds_to_whole_percent(self) -> None:
        assert format_percent(37.6) == "38%"

    def test_full(self) -> None:
        assert format_percent(100.0) == "100%"
