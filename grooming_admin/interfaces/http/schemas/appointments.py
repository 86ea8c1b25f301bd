from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from grooming_admin.domain.value_objects.series_repeat import SeriesRepeatType


class RecipientPayload(BaseModel):
    phone: str
    name: str | None = None
    fields: dict[str, str] = Field(default_factory=dict)


class DuplicateSeriesRequest(BaseModel):
    weeks_interval: int = 1
    repeat_type: SeriesRepeatType = SeriesRepeatType.COUNT
    repeat_count: int | None = None
    end_date: date | None = None
    start_date: date | None = None
    notify_client: bool = False
    recipients: list[RecipientPayload] = Field(default_factory=list)


class DuplicateSeriesResponse(BaseModel):
    occurrences: int
    message_sent: bool
    warnings: list[str]
    result: Any = None
