from __future__ import annotations

import logging

from aquabill.models.connection import Connection
from aquabill.repositories.base import ConnectionRepository

logger = logging.getLogger(__name__)


class ConnectionService:
    def __init__(self, repo: ConnectionRepository) -> None:
        self.repo = repo

    def create_connection(self, user_id: int, address: str = "") -> Connection:
        result = self.repo.create(Connection(user_id=user_id, address=address))
        logger.info("Connection created: id=%s, user=%s", result.id, user_id)
        return result

    def get_connection(self, connection_id: int) -> Connection | None:
        return self.repo.get_by_id(connection_id)

    def list_connections(self, user_id: int | None = None) -> list[Connection]:
        if user_id is None:
            return self.repo.list_all()
        return self.repo.list_by_user(user_id)
