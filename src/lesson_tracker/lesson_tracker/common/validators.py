from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError
from .datetime_utils import DateInput, normalize_date


def require_class_id(value: Any) -> int:
    """Coerce a class selection (form value or int) into a positive id."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Please select a class")
    try:
        class_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid class selection") from None
    if class_id <= 0:
        raise ValidationError("Invalid class selection")
    return class_id


def require_date(value: DateInput, field_name: str) -> str:
    normalized = normalize_date(value)
    if not normalized:
        raise ValidationError(f"{field_name} is not a valid date")
    return normalized


def optional_date(value: DateInput, field_name: str) -> str | None:
    """Blank input stays ``None``; anything else must normalize."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return require_date(value, field_name)
