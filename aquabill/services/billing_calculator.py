from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from ulid import ULID

from aquabill.constants import LATE_FEE_TIERS, OUTSTANDING_STATUSES, OVERDUE_THRESHOLD_DAYS, TZ
from aquabill.models import round_half_up, to_number
from aquabill.models.bill import Bill, BillBreakdown, BillStatus, PaymentStatus
from aquabill.models.connection import Connection
from aquabill.models.reading import MeterReading
from aquabill.models.tariff import TariffConfig, default_tariff
from aquabill.settings import settings

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60
BILL_NUMBER_SUFFIX_LENGTH = 8


def _now() -> datetime:
    return datetime.now(TZ)


def _days_until(target: date, now: datetime) -> int:
    """Whole days from ``now`` to midnight of ``target``, rounded up."""
    start_of_target = datetime.combine(target, time.min, tzinfo=now.tzinfo)
    return math.ceil((start_of_target - now).total_seconds() / SECONDS_PER_DAY)


def _days_since(start: date, now: datetime) -> int:
    """Whole days from midnight of ``start`` to ``now``, rounded up."""
    start_of_day = datetime.combine(start, time.min, tzinfo=now.tzinfo)
    return math.ceil((now - start_of_day).total_seconds() / SECONDS_PER_DAY)


def _bill_number(bill_date: date, bill_id: str) -> str:
    """Billing month plus the random tail of the bill's ULID, unique across runs."""
    return f"BILL-{bill_date:%Y%m}-{bill_id[-BILL_NUMBER_SUFFIX_LENGTH:]}"


class BillingCalculator:
    """Turns meter readings into bills under a tariff.

    Amounts are rounded to cents one field at a time: the base amount is
    rounded before the tax is taken from it, and the rounded base and tax
    are summed with the service charge for the total.
    """

    def __init__(self, tariff: TariffConfig | None = None) -> None:
        self.tariff = tariff or default_tariff()

    def _amounts(self, units: float, tariff: TariffConfig) -> tuple[float, float, float]:
        base_amount = round_half_up(units * tariff.rate_per_unit)
        tax_amount = round_half_up(base_amount * tariff.tax_rate)
        total = round_half_up(base_amount + tax_amount + tariff.service_charge)
        return base_amount, tax_amount, total

    def generate_bill(
        self,
        reading: MeterReading,
        connection: Connection | None,
        tariff: TariffConfig | None = None,
    ) -> Bill:
        tariff = tariff or self.tariff
        units = reading.units_consumed
        base_amount, tax_amount, total = self._amounts(units, tariff)

        bill_date = reading.reading_date or _now().date()
        due_date = bill_date + timedelta(days=tariff.due_days)

        connection_id = reading.connection_id
        user_id = None
        if connection is not None:
            connection_id = connection.id if connection.id is not None else connection_id
            user_id = connection.user_id

        bill_id = str(ULID())
        bill = Bill(
            id=bill_id,
            bill_number=_bill_number(bill_date, bill_id),
            bill_date=bill_date,
            due_date=due_date,
            units_consumed=units,
            rate_per_unit=tariff.rate_per_unit,
            tax_rate=tariff.tax_rate,
            base_amount=base_amount,
            tax_amount=tax_amount,
            service_charge=tariff.service_charge,
            amount=total,
            payment_status=PaymentStatus.UNPAID.value,
            meter_reading_id=reading.id,
            connection_id=connection_id,
            user_id=user_id,
            created_at=_now(),
        )
        logger.debug(
            "Computed bill %s: units=%s base=%.2f tax=%.2f total=%.2f",
            bill.bill_number,
            units,
            base_amount,
            tax_amount,
            total,
        )
        return bill

    def preview_bill(self, units_consumed, tariff: TariffConfig | None = None) -> BillBreakdown:
        tariff = tariff or self.tariff
        units = to_number(units_consumed)
        base_amount, tax_amount, total = self._amounts(units, tariff)
        return BillBreakdown(
            units_consumed=units,
            rate_per_unit=tariff.rate_per_unit,
            base_amount=base_amount,
            service_charge=tariff.service_charge,
            tax_rate=tariff.tax_rate,
            tax_amount=tax_amount,
            total_amount=total,
        )

    @staticmethod
    def derive_status(due_date: date, payment_status: str, now: datetime | None = None) -> str:
        if payment_status == PaymentStatus.PAID.value:
            return BillStatus.PAID.value

        diff_days = _days_until(due_date, now or _now())
        if diff_days < 0:
            return BillStatus.OVERDUE.value
        if diff_days <= settings.due_soon_days:
            return BillStatus.DUE_SOON.value
        return BillStatus.UNPAID.value

    @staticmethod
    def overdue_days(bill_date: date, payment_status: str, now: datetime | None = None) -> int:
        """Days elapsed since the bill date, 0 for paid bills and future dates."""
        if payment_status == PaymentStatus.PAID.value:
            return 0
        return max(_days_since(bill_date, now or _now()), 0)

    @staticmethod
    def late_fee(amount: float, overdue_days: int) -> float:
        if overdue_days <= 0:
            return 0
        for days, rate in LATE_FEE_TIERS:
            if overdue_days > days:
                return round_half_up(to_number(amount) * rate)
        return 0

    def is_overdue(self, bill_date: date, payment_status: str, now: datetime | None = None) -> bool:
        if payment_status == PaymentStatus.PAID.value:
            return False
        return self.overdue_days(bill_date, payment_status, now) > OVERDUE_THRESHOLD_DAYS

    def outstanding_amount(self, bills: Sequence[Bill], now: datetime | None = None) -> float:
        """Unpaid and overdue amounts plus the late fee each has accrued."""
        now = now or _now()
        total = 0.0
        for bill in bills:
            if bill.payment_status not in OUTSTANDING_STATUSES:
                continue
            days = self.overdue_days(bill.bill_date, bill.payment_status, now)
            total += bill.amount + self.late_fee(bill.amount, days)
        return round_half_up(total)
