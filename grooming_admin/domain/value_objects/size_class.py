from __future__ import annotations

from enum import Enum


class SizeClass(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    MEDIUM_LARGE = "medium_large"
    LARGE = "large"
