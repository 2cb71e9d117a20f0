from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class PaymentStatus(str, Enum):
    UNPAID = "Unpaid"
    PAID = "Paid"
    OVERDUE = "Overdue"


class BillStatus(str, Enum):
    """Display status derived from the due date and the payment status."""

    PAID = "Paid"
    OVERDUE = "Overdue"
    DUE_SOON = "Due Soon"
    UNPAID = "Unpaid"


class Bill(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    bill_number: str = ""
    bill_date: date
    due_date: date
    units_consumed: float = 0
    rate_per_unit: float = 0
    tax_rate: float = 0
    base_amount: float = 0
    tax_amount: float = 0
    service_charge: float = 0
    amount: float = 0
    payment_status: str = PaymentStatus.UNPAID.value
    meter_reading_id: int | None = None
    connection_id: int | None = None
    user_id: int | None = None
    created_at: datetime | None = None

    @field_validator("payment_status", mode="before")
    @classmethod
    def _status_value(cls, value):
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value


class BillBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    units_consumed: float
    rate_per_unit: float
    base_amount: float
    service_charge: float
    tax_rate: float
    tax_amount: float
    total_amount: float
