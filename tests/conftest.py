"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from datetime import date

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from aquabill.models.bill import Bill, PaymentStatus
from aquabill.models.connection import Connection as WaterConnection
from aquabill.models.reading import MeterReading

# Matches Alembic head: 3f1a9c2b7d40 (initial schema)
SCHEMA_DDL = """
CREATE TABLE connections (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER,
    address TEXT NOT NULL DEFAULT '',
    status VARCHAR(20) NOT NULL DEFAULT 'Active',
    created_at DATETIME NOT NULL
);

CREATE TABLE meter_readings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    connection_id INTEGER REFERENCES connections(id),
    reading_date DATE,
    units_consumed FLOAT NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL
);

CREATE TABLE bills (
    id VARCHAR(26) PRIMARY KEY,
    bill_number VARCHAR(32) NOT NULL UNIQUE,
    bill_date DATE NOT NULL,
    due_date DATE NOT NULL,
    units_consumed FLOAT NOT NULL DEFAULT 0,
    rate_per_unit FLOAT NOT NULL,
    tax_rate FLOAT NOT NULL,
    base_amount FLOAT NOT NULL,
    tax_amount FLOAT NOT NULL,
    service_charge FLOAT NOT NULL,
    amount FLOAT NOT NULL,
    payment_status VARCHAR(20) NOT NULL DEFAULT 'Unpaid',
    meter_reading_id INTEGER REFERENCES meter_readings(id),
    connection_id INTEGER REFERENCES connections(id),
    user_id INTEGER,
    created_at DATETIME NOT NULL
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_connection(**overrides) -> WaterConnection:
    defaults = dict(user_id=7, address="12 River Road")
    defaults.update(overrides)
    return WaterConnection(**defaults)


def _sample_reading(connection_id: int | None = 1, **overrides) -> MeterReading:
    defaults = dict(
        connection_id=connection_id,
        reading_date=date(2024, 1, 15),
        units_consumed=120,
    )
    defaults.update(overrides)
    return MeterReading(**defaults)


def _sample_bill(**overrides) -> Bill:
    defaults = dict(
        id="01HMZX4Q8V3J6K2N9P5R7T1W0A",
        bill_number="BILL-202401-000001",
        bill_date=date(2024, 1, 15),
        due_date=date(2024, 2, 14),
        units_consumed=120,
        rate_per_unit=5.50,
        tax_rate=0.08,
        base_amount=660.00,
        tax_amount=52.80,
        service_charge=10.00,
        amount=722.80,
        payment_status=PaymentStatus.UNPAID,
        connection_id=None,
        user_id=7,
    )
    defaults.update(overrides)
    return Bill(**defaults)


@pytest.fixture()
def sample_connection():
    return _sample_connection


@pytest.fixture()
def sample_reading():
    return _sample_reading


@pytest.fixture()
def sample_bill():
    return _sample_bill
