from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from grooming_admin.application.errors import AppError, NotFound, ValidationError
from grooming_admin.application.interfaces.remote_functions import RemoteFunctions
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.value_objects.series_repeat import SeriesRepeatType

logger = logging.getLogger(__name__)

DUPLICATE_FUNCTION = "duplicate-appointment"
MESSAGE_FUNCTION = "set-manychat-fields-and-send-flow"
_REMOTE_REPEAT_TYPES = {SeriesRepeatType.COUNT: "count", SeriesRepeatType.END_DATE: "endDate"}


@dataclass(slots=True)
class Recipient:
    phone: str
    name: str | None = None
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class DuplicateSeriesInput:
    weeks_interval: int
    repeat_type: SeriesRepeatType
    repeat_count: int | None = None
    end_date: date | None = None
    start_date: date | None = None
    notify_client: bool = False
    recipients: list[Recipient] = field(default_factory=list)


@dataclass(slots=True)
class DuplicateSeriesResult:
    occurrences: int
    result: Any = None
    message_sent: bool = False
    warnings: list[str] = field(default_factory=list)


def validate(payload: DuplicateSeriesInput) -> None:
    if payload.weeks_interval < 1:
        raise ValidationError("weeks_interval must be at least 1")
    if payload.repeat_type is SeriesRepeatType.COUNT:
        if not payload.repeat_count or payload.repeat_count < 1:
            raise ValidationError("repeat_count must be at least 1")
    elif payload.end_date is None:
        raise ValidationError("end_date is required")


def count_occurrences(payload: DuplicateSeriesInput, start: date) -> int:
    if payload.repeat_type is SeriesRepeatType.COUNT:
        return payload.repeat_count or 0
    if payload.end_date < start:
        raise ValidationError("end_date cannot be before the series start")
    whole_weeks = (payload.end_date - start).days // 7
    return whole_weeks // payload.weeks_interval + 1


def _message_users(recipients: list[Recipient]) -> list[dict]:
    users: dict[str, dict] = {}
    for recipient in recipients:
        phone = re.sub(r"\D", "", recipient.phone or "")
        if not phone:
            continue
        entry = users.setdefault(
            phone, {"phone": phone, "name": recipient.name or "", "fields": {}}
        )
        entry["fields"].update(recipient.fields)
    return list(users.values())


async def execute(
    uow: UnitOfWork,
    functions: RemoteFunctions,
    appointment_id: UUID,
    payload: DuplicateSeriesInput,
    *,
    flow_id: str | None = None,
) -> DuplicateSeriesResult:
    validate(payload)
    appointment = await uow.grooming_appointments.get(appointment_id)
    if not appointment:
        raise NotFound("Appointment not found")
    start = payload.start_date or appointment.start_at.date()
    occurrences = count_occurrences(payload, start)

    request: dict[str, Any] = {
        "appointmentId": str(appointment_id),
        "weeksInterval": payload.weeks_interval,
        "repeatType": _REMOTE_REPEAT_TYPES[payload.repeat_type],
    }
    if payload.repeat_type is SeriesRepeatType.COUNT:
        request["repeatCount"] = payload.repeat_count
    else:
        request["endDate"] = payload.end_date.isoformat()
    if payload.start_date:
        request["startDate"] = payload.start_date.isoformat()

    result = await functions.invoke(DUPLICATE_FUNCTION, request)
    logger.info("Appointment %s duplicated into %d occurrences", appointment_id, occurrences)
    outcome = DuplicateSeriesResult(occurrences=occurrences, result=result)

    if not payload.notify_client:
        return outcome
    users = _message_users(payload.recipients)
    if not flow_id:
        outcome.warnings.append("Client message skipped: no message flow configured")
    elif not users:
        outcome.warnings.append("Client message skipped: no recipient with a phone number")
    else:
        try:
            await functions.invoke(MESSAGE_FUNCTION, {"users": users, "flow_id": flow_id})
            outcome.message_sent = True
        except AppError as exc:
            logger.warning("Client message for series %s failed: %s", appointment_id, exc.message)
            outcome.warnings.append(f"Client message failed: {exc.message}")
    return outcome
