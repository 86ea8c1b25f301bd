from __future__ import annotations

from enum import Enum


class BreedStatus(str, Enum):
    """How many of the active stations support a breed."""

    NONE = "none"
    SOME = "some"
    ALL = "all"
