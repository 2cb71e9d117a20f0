from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, field_validator

from aquabill.models import to_number


class MeterReading(BaseModel):
    id: int | None = None
    connection_id: int | None = None
    reading_date: date | None = None
    units_consumed: float = 0
    created_at: datetime | None = None

    @field_validator("units_consumed", mode="before")
    @classmethod
    def _coerce_units(cls, value):
        return to_number(value)

    @field_validator("reading_date", mode="before")
    @classmethod
    def _normalize_date(cls, value):
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str):
            # unreadable dates are treated as missing, so the bill falls back to today
            try:
                return datetime.fromisoformat(value.strip()).date()
            except ValueError:
                return None
        return value
