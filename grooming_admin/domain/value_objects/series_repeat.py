from __future__ import annotations

from enum import Enum


class SeriesRepeatType(str, Enum):
    COUNT = "count"
    END_DATE = "end_date"
