from __future__ import annotations

from datetime import datetime

from sqlalchemy import Connection as DBConnection
from sqlalchemy import text
from sqlalchemy.engine import RowMapping

from aquabill.constants import TZ
from aquabill.models.bill import Bill
from aquabill.models.connection import Connection
from aquabill.models.reading import MeterReading
from aquabill.repositories.base import BillRepository, ConnectionRepository, ReadingRepository


def _now() -> datetime:
    return datetime.now(TZ)


def _in_clause(name: str, values: list) -> tuple[str, dict]:
    placeholders = ", ".join(f":{name}{i}" for i in range(len(values)))
    params = {f"{name}{i}": value for i, value in enumerate(values)}
    return placeholders, params


class SQLAlchemyConnectionRepository(ConnectionRepository):
    def __init__(self, conn: DBConnection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_connection(row: RowMapping) -> Connection:
        return Connection(
            id=row["id"],
            user_id=row["user_id"],
            address=row["address"],
            status=row["status"],
            created_at=row["created_at"],
        )

    def create(self, connection: Connection) -> Connection:
        result = self.conn.execute(
            text(
                "INSERT INTO connections (user_id, address, status, created_at) "
                "VALUES (:user_id, :address, :status, :created_at)"
            ),
            {
                "user_id": connection.user_id,
                "address": connection.address,
                "status": connection.status,
                "created_at": _now(),
            },
        )
        self.conn.commit()
        connection_id = result.lastrowid
        created = self.get_by_id(connection_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve connection after create (id={connection_id})")
        return created

    def get_by_id(self, connection_id: int) -> Connection | None:
        row = (
            self.conn.execute(text("SELECT * FROM connections WHERE id = :id"), {"id": connection_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_connection(row)

    def list_by_user(self, user_id: int) -> list[Connection]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM connections WHERE user_id = :user_id ORDER BY id"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_connection(row) for row in rows]

    def list_all(self) -> list[Connection]:
        rows = self.conn.execute(text("SELECT * FROM connections ORDER BY id")).mappings().fetchall()
        return [self._row_to_connection(row) for row in rows]


class SQLAlchemyReadingRepository(ReadingRepository):
    def __init__(self, conn: DBConnection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_reading(row: RowMapping) -> MeterReading:
        return MeterReading(
            id=row["id"],
            connection_id=row["connection_id"],
            reading_date=row["reading_date"],
            units_consumed=row["units_consumed"],
            created_at=row["created_at"],
        )

    def create(self, reading: MeterReading) -> MeterReading:
        result = self.conn.execute(
            text(
                "INSERT INTO meter_readings (connection_id, reading_date, units_consumed, created_at) "
                "VALUES (:connection_id, :reading_date, :units_consumed, :created_at)"
            ),
            {
                "connection_id": reading.connection_id,
                "reading_date": reading.reading_date.isoformat() if reading.reading_date else None,
                "units_consumed": reading.units_consumed,
                "created_at": _now(),
            },
        )
        self.conn.commit()
        reading_id = result.lastrowid
        created = self.get_by_id(reading_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve reading after create (id={reading_id})")
        return created

    def get_by_id(self, reading_id: int) -> MeterReading | None:
        row = (
            self.conn.execute(text("SELECT * FROM meter_readings WHERE id = :id"), {"id": reading_id})
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_reading(row)

    def list_by_connection(self, connection_id: int) -> list[MeterReading]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM meter_readings WHERE connection_id = :connection_id "
                    "ORDER BY reading_date, id"
                ),
                {"connection_id": connection_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_reading(row) for row in rows]

    def list_by_connections(self, connection_ids: list[int]) -> list[MeterReading]:
        if not connection_ids:
            return []
        placeholders, params = _in_clause("cid", connection_ids)
        rows = (
            self.conn.execute(
                text(
                    f"SELECT * FROM meter_readings WHERE connection_id IN ({placeholders}) "
                    "ORDER BY reading_date, id"
                ),
                params,
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_reading(row) for row in rows]

    def list_all(self) -> list[MeterReading]:
        rows = (
            self.conn.execute(text("SELECT * FROM meter_readings ORDER BY reading_date, id"))
            .mappings()
            .fetchall()
        )
        return [self._row_to_reading(row) for row in rows]


class SQLAlchemyBillRepository(BillRepository):
    def __init__(self, conn: DBConnection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_bill(row: RowMapping) -> Bill:
        return Bill(
            id=row["id"],
            bill_number=row["bill_number"],
            bill_date=row["bill_date"],
            due_date=row["due_date"],
            units_consumed=row["units_consumed"],
            rate_per_unit=row["rate_per_unit"],
            tax_rate=row["tax_rate"],
            base_amount=row["base_amount"],
            tax_amount=row["tax_amount"],
            service_charge=row["service_charge"],
            amount=row["amount"],
            payment_status=row["payment_status"],
            meter_reading_id=row["meter_reading_id"],
            connection_id=row["connection_id"],
            user_id=row["user_id"],
            created_at=row["created_at"],
        )

    def create(self, bill: Bill) -> Bill:
        self.conn.execute(
            text(
                "INSERT INTO bills (id, bill_number, bill_date, due_date, units_consumed, rate_per_unit, "
                "tax_rate, base_amount, tax_amount, service_charge, amount, payment_status, "
                "meter_reading_id, connection_id, user_id, created_at) "
                "VALUES (:id, :bill_number, :bill_date, :due_date, :units_consumed, :rate_per_unit, "
                ":tax_rate, :base_amount, :tax_amount, :service_charge, :amount, :payment_status, "
                ":meter_reading_id, :connection_id, :user_id, :created_at)"
            ),
            {
                "id": bill.id,
                "bill_number": bill.bill_number,
                "bill_date": bill.bill_date.isoformat(),
                "due_date": bill.due_date.isoformat(),
                "units_consumed": bill.units_consumed,
                "rate_per_unit": bill.rate_per_unit,
                "tax_rate": bill.tax_rate,
                "base_amount": bill.base_amount,
                "tax_amount": bill.tax_amount,
                "service_charge": bill.service_charge,
                "amount": bill.amount,
                "payment_status": bill.payment_status,
                "meter_reading_id": bill.meter_reading_id,
                "connection_id": bill.connection_id,
                "user_id": bill.user_id,
                "created_at": bill.created_at or _now(),
            },
        )
        self.conn.commit()
        created = self.get_by_id(bill.id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve bill after create (id={bill.id})")
        return created

    def get_by_id(self, bill_id: str) -> Bill | None:
        row = self.conn.execute(text("SELECT * FROM bills WHERE id = :id"), {"id": bill_id}).mappings().fetchone()
        if row is None:
            return None
        return self._row_to_bill(row)

    def get_by_reading(self, meter_reading_id: int) -> Bill | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM bills WHERE meter_reading_id = :reading_id"),
                {"reading_id": meter_reading_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_bill(row)

    def _list_where(self, clause: str, params: dict) -> list[Bill]:
        rows = (
            self.conn.execute(text(f"SELECT * FROM bills WHERE {clause} ORDER BY bill_date DESC, id DESC"), params)
            .mappings()
            .fetchall()
        )
        return [self._row_to_bill(row) for row in rows]

    def list_by_connection(self, connection_id: int) -> list[Bill]:
        return self._list_where("connection_id = :connection_id", {"connection_id": connection_id})

    def list_by_user(self, user_id: int) -> list[Bill]:
        return self._list_where("user_id = :user_id", {"user_id": user_id})

    def list_all(self) -> list[Bill]:
        rows = self.conn.execute(text("SELECT * FROM bills ORDER BY bill_date DESC, id DESC")).mappings().fetchall()
        return [self._row_to_bill(row) for row in rows]

    def update_payment_status(self, bill_id: str, payment_status: str) -> None:
        self.conn.execute(
            text("UPDATE bills SET payment_status = :status WHERE id = :id"),
            {"status": payment_status, "id": bill_id},
        )
        self.conn.commit()
