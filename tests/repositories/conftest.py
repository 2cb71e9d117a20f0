import pytest
from sqlalchemy import Connection

from aquabill.repositories.sqlalchemy import (
    SQLAlchemyBillRepository,
    SQLAlchemyConnectionRepository,
    SQLAlchemyReadingRepository,
)


@pytest.fixture()
def connection_repo(db_connection: Connection) -> SQLAlchemyConnectionRepository:
    return SQLAlchemyConnectionRepository(db_connection)


@pytest.fixture()
def reading_repo(db_connection: Connection) -> SQLAlchemyReadingRepository:
    return SQLAlchemyReadingRepository(db_connection)


@pytest.fixture()
def bill_repo(db_connection: Connection) -> SQLAlchemyBillRepository:
    return SQLAlchemyBillRepository(db_connection)
