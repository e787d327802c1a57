from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.constants import CENTS
from ..core.exceptions import ValidationError


def to_money(value: Any) -> Decimal:
    """Convert to a cent-quantized Decimal; floats go through ``str`` to avoid binary drift."""
    if isinstance(value, Decimal):
        amount = value
    else:
        amount = Decimal(str(value))
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def require_amount(value: Any, field_name: str, *, default: Any = None) -> Decimal:
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} is required")
        value = default
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        amount = to_money(value)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return amount
