from __future__ import annotations

from enum import Enum


class DuplicateMode(str, Enum):
    NEW = "new"
    EXISTING = "existing"
