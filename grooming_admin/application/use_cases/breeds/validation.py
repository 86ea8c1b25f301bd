from __future__ import annotations

from decimal import Decimal

from grooming_admin.application.errors import ValidationError


def clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Breed name is required")
    return cleaned


def check_prices(
    min_price: Decimal | None, max_price: Decimal | None, hourly: Decimal | None
) -> None:
    prices = (
        ("min_groom_price", min_price),
        ("max_groom_price", max_price),
        ("hourly_price", hourly),
    )
    for label, value in prices:
        if value is not None and value < 0:
            raise ValidationError(f"{label} must be >= 0")
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ValidationError("min_groom_price cannot exceed max_groom_price")
