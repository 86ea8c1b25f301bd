from __future__ import annotations

import re

_NON_DURATION_CHARS = re.compile(r"[^\d:]")


def to_display(minutes: int) -> str:
    """Format whole minutes as ``H:MM``."""
    if minutes < 0:
        raise ValueError("minutes must be >= 0")
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}:{mins:02d}"


def parse(display: str | None) -> int | None:
    """Parse ``"90"``, ``"1:30"`` or ``"1:30:00"`` into minutes.

    Returns None for anything it cannot read; callers keep their last valid
    value in that case.
    """
    if display is None or not display.strip():
        return None
    cleaned = _NON_DURATION_CHARS.sub("", display.strip())
    if not cleaned:
        return None

    parts = cleaned.split(":")
    if len(parts) == 1:
        return int(parts[0])
    if len(parts) > 3:
        return None
    # seconds, when present, are ignored
    hours, mins = parts[0], parts[1]
    if not hours.isdigit() or not mins.isdigit():
        return None
    if int(mins) >= 60:
        return None
    return int(hours) * 60 + int(mins)


def format_duration_label(minutes: int | None) -> str:
    if minutes is None or minutes < 0:
        return "0 min"
    if minutes < 60:
        return f"{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"{hours} h"
    return f"{hours}:{mins:02d} h"
