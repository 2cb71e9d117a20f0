from abc import ABC, abstractmethod

from aquabill.models.bill import Bill
from aquabill.models.connection import Connection
from aquabill.models.reading import MeterReading


class ConnectionRepository(ABC):
    @abstractmethod
    def create(self, connection: Connection) -> Connection: ...

    @abstractmethod
    def get_by_id(self, connection_id: int) -> Connection | None: ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Connection]: ...

    @abstractmethod
    def list_all(self) -> list[Connection]: ...


class ReadingRepository(ABC):
    @abstractmethod
    def create(self, reading: MeterReading) -> MeterReading: ...

    @abstractmethod
    def get_by_id(self, reading_id: int) -> MeterReading | None: ...

    @abstractmethod
    def list_by_connection(self, connection_id: int) -> list[MeterReading]: ...

    @abstractmethod
    def list_by_connections(self, connection_ids: list[int]) -> list[MeterReading]: ...

    @abstractmethod
    def list_all(self) -> list[MeterReading]: ...


class BillRepository(ABC):
    @abstractmethod
    def create(self, bill: Bill) -> Bill: ...

    @abstractmethod
    def get_by_id(self, bill_id: str) -> Bill | None: ...

    @abstractmethod
    def get_by_reading(self, meter_reading_id: int) -> Bill | None: ...

    @abstractmethod
    def list_by_connection(self, connection_id: int) -> list[Bill]: ...

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Bill]: ...

    @abstractmethod
    def list_all(self) -> list[Bill]: ...

    @abstractmethod
    def update_payment_status(self, bill_id: str, payment_status: str) -> None: ...
