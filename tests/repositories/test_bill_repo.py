from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from aquabill.models.bill import PaymentStatus


def _numbered(sample_bill, suffix: str, **overrides):
    return sample_bill(id=f"01HMZX4Q8V3J6K2N9P5R7T1W0{suffix}", bill_number=f"BILL-202401-T1W0{suffix}", **overrides)


class TestBillRepoCRUD:
    def test_create_and_get(self, bill_repo, sample_bill):
        bill = sample_bill()
        created = bill_repo.create(bill)

        assert created.id == bill.id
        assert created.bill_number == "BILL-202401-000001"
        assert created.bill_date == date(2024, 1, 15)
        assert created.due_date == date(2024, 2, 14)
        assert created.base_amount == 660.00
        assert created.tax_amount == 52.80
        assert created.amount == 722.80
        assert created.payment_status == "Unpaid"
        assert created.created_at is not None

    def test_get_by_id_not_found(self, bill_repo):
        assert bill_repo.get_by_id("nonexistent") is None

    def test_get_by_reading(self, bill_repo, reading_repo, sample_reading, sample_bill):
        reading = reading_repo.create(sample_reading(connection_id=None))
        bill_repo.create(sample_bill(meter_reading_id=reading.id))

        fetched = bill_repo.get_by_reading(reading.id)
        assert fetched is not None
        assert fetched.meter_reading_id == reading.id

    def test_get_by_reading_not_found(self, bill_repo):
        assert bill_repo.get_by_reading(9999) is None

    def test_list_by_connection(self, bill_repo, connection_repo, sample_connection, sample_bill):
        connection = connection_repo.create(sample_connection())
        bill_repo.create(_numbered(sample_bill, "B", connection_id=connection.id))
        bill_repo.create(_numbered(sample_bill, "C", connection_id=connection.id))
        bill_repo.create(_numbered(sample_bill, "D"))

        assert len(bill_repo.list_by_connection(connection.id)) == 2

    def test_list_by_user(self, bill_repo, sample_bill):
        bill_repo.create(_numbered(sample_bill, "B", user_id=1))
        bill_repo.create(_numbered(sample_bill, "C", user_id=2))

        bills = bill_repo.list_by_user(1)
        assert [b.id for b in bills] == ["01HMZX4Q8V3J6K2N9P5R7T1W0B"]

    def test_list_all_newest_first(self, bill_repo, sample_bill):
        bill_repo.create(_numbered(sample_bill, "B", bill_date=date(2024, 1, 1)))
        bill_repo.create(_numbered(sample_bill, "C", bill_date=date(2024, 3, 1)))

        assert [b.bill_date for b in bill_repo.list_all()] == [date(2024, 3, 1), date(2024, 1, 1)]

    def test_update_payment_status(self, bill_repo, sample_bill):
        created = bill_repo.create(sample_bill())
        bill_repo.update_payment_status(created.id, PaymentStatus.PAID.value)

        assert bill_repo.get_by_id(created.id).payment_status == "Paid"

    def test_bill_number_is_unique(self, bill_repo, sample_bill):
        bill_repo.create(sample_bill())
        with pytest.raises(IntegrityError):
            bill_repo.create(sample_bill(id="01HMZX4Q8V3J6K2N9P5R7T1W0B"))
