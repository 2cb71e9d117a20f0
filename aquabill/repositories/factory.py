from aquabill.repositories.base import BillRepository, ConnectionRepository, ReadingRepository


def get_connection_repository() -> ConnectionRepository:
    from aquabill.db import get_connection
    from aquabill.repositories.sqlalchemy import SQLAlchemyConnectionRepository

    return SQLAlchemyConnectionRepository(get_connection())


def get_reading_repository() -> ReadingRepository:
    from aquabill.db import get_connection
    from aquabill.repositories.sqlalchemy import SQLAlchemyReadingRepository

    return SQLAlchemyReadingRepository(get_connection())


def get_bill_repository() -> BillRepository:
    from aquabill.db import get_connection
    from aquabill.repositories.sqlalchemy import SQLAlchemyBillRepository

    return SQLAlchemyBillRepository(get_connection())
