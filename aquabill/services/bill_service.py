from __future__ import annotations

import logging
from datetime import datetime

from aquabill.models.bill import Bill, PaymentStatus
from aquabill.models.reading import MeterReading
from aquabill.models.stats import BillingStats
from aquabill.repositories.base import BillRepository, ConnectionRepository
from aquabill.services import statistics
from aquabill.services.billing_calculator import BillingCalculator

logger = logging.getLogger(__name__)


class BillService:
    def __init__(
        self,
        bill_repo: BillRepository,
        connection_repo: ConnectionRepository,
        calculator: BillingCalculator | None = None,
    ) -> None:
        self.bill_repo = bill_repo
        self.connection_repo = connection_repo
        self.calculator = calculator or BillingCalculator()

    def generate_for_reading(self, reading: MeterReading) -> Bill:
        """Generate and store the bill for a recorded meter reading.

        A reading is billed once; asking again returns the stored bill.
        """
        if reading.id is not None:
            existing = self.bill_repo.get_by_reading(reading.id)
            if existing is not None:
                logger.info("Reading %s already billed as %s", reading.id, existing.bill_number)
                return existing

        connection = None
        if reading.connection_id is not None:
            connection = self.connection_repo.get_by_id(reading.connection_id)
            if connection is None:
                logger.warning(
                    "Connection %s not found, billing reading %s without it",
                    reading.connection_id,
                    reading.id,
                )

        bill = self.calculator.generate_bill(reading, connection)
        bill = self.bill_repo.create(bill)
        logger.info(
            "Bill created: number=%s, connection=%s, units=%s, amount=%.2f",
            bill.bill_number,
            bill.connection_id,
            bill.units_consumed,
            bill.amount,
        )
        return bill

    def get_bill(self, bill_id: str) -> Bill | None:
        result = self.bill_repo.get_by_id(bill_id)
        logger.debug("get_bill id=%s found=%s", bill_id, result is not None)
        return result

    def list_bills(self, connection_id: int | None = None) -> list[Bill]:
        if connection_id is None:
            result = self.bill_repo.list_all()
        else:
            result = self.bill_repo.list_by_connection(connection_id)
        logger.debug("Listed %d bills for connection=%s", len(result), connection_id)
        return result

    def set_payment_status(self, bill: Bill, status: PaymentStatus) -> Bill:
        if not bill.id:
            raise ValueError("Cannot update payment status for bill without an id")
        self.bill_repo.update_payment_status(bill.id, status.value)
        logger.info("Bill %s marked as %s", bill.bill_number, status.value)
        return bill.model_copy(update={"payment_status": status.value})

    def toggle_paid(self, bill: Bill) -> Bill:
        status = PaymentStatus.UNPAID if bill.is_paid else PaymentStatus.PAID
        return self.set_payment_status(bill, status)

    def display_status(self, bill: Bill, now: datetime | None = None) -> str:
        return self.calculator.derive_status(bill.due_date, bill.payment_status, now)

    def billing_summary(self, connection_id: int | None = None) -> BillingStats:
        return statistics.billing_stats(self.list_bills(connection_id))

    def outstanding_for_user(self, user_id: int, now: datetime | None = None) -> float:
        bills = self.bill_repo.list_by_user(user_id)
        amount = self.calculator.outstanding_amount(bills, now)
        logger.debug("Outstanding for user=%s: %.2f over %d bills", user_id, amount, len(bills))
        return amount
