from __future__ import annotations

import pytest

from grooming_admin.application.matrix import duration


@pytest.mark.parametrize(
    "text,expected",
    [
        ("90", 90),
        ("1:30", 90),
        ("0:45", 45),
        ("2:05:59", 125),
        (" 1:15 h", 75),
        ("", None),
        ("   ", None),
        ("abc", None),
        ("1:75", None),
        ("1::30", None),
        ("1:2:3:4", None),
        (None, None),
    ],
)
def test_parse(text, expected):
    assert duration.parse(text) == expected


def test_to_display_pads_minutes():
    assert duration.to_display(0) == "0:00"
    assert duration.to_display(65) == "1:05"
    assert duration.to_display(600) == "10:00"


def test_to_display_rejects_negative():
    with pytest.raises(ValueError):
        duration.to_display(-1)


def test_display_and_parse_agree_for_every_minute_count():
    mismatches = [m for m in range(10000) if duration.parse(duration.to_display(m)) != m]
    assert mismatches == []


def test_format_duration_label():
    assert duration.format_duration_label(45) == "45 min"
    assert duration.format_duration_label(120) == "2 h"
    assert duration.format_duration_label(90) == "1:30 h"
    assert duration.format_duration_label(None) == "0 min"
