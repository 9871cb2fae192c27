"""Field types and validators shared by the request schemas."""
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict


def required_text(value: Optional[str], label: str) -> Optional[str]:
    """Trim ``value``; an empty result is rejected with '<label> is required'."""
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(f"{label} is required")
    return cleaned


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as UTC so they compare with aware ones."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def reject_nulls(data: Any, fields: Iterable[str]) -> Any:
    """Refuse an explicit ``null`` for columns that cannot be cleared."""
    if isinstance(data, dict):
        for field in fields:
            if field in data and data[field] is None:
                raise ValueError(f"{field} cannot be null")
    return data


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)
