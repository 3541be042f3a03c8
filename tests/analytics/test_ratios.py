"""Unit tests for percentage rounding."""
from __future__ import annotations

import pytest

from shadow_ai_survey.analytics.ratios import percent


@pytest.mark.parametrize(
    "part, whole, expected",
    [
        (0, 0, 0),
        (5, 0, 0),
        (0, 7, 0),
        (1, 2, 50),
        (1, 3, 33),
        (2, 3, 67),
        (1, 8, 13),  # 12.5 rounds up
        (3, 8, 38),  # 37.5 rounds up
        (1, 200, 1),  # 0.5 rounds up
        (1, 201, 0),
        (7, 7, 100),
    ],
)
def test_percent_rounds_half_up(part, whole, expected):
    assert percent(part, whole) == expected


def test_percent_returns_int():
    assert isinstance(percent(1, 3), int)
