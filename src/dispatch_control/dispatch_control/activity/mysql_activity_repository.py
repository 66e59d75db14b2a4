from __future__ import annotations

from typing import Any, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json
from .repository import ActivityRepository


class MySQLActivityRepository(ActivityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert(
        self,
        *,
        username: str,
        action: str,
        entity_type: Optional[str],
        entity_id: Optional[str],
        details: dict[str, Any],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO activity_logs(username, action, entity_type, entity_id, details)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (username, action, entity_type, entity_id, dump_json(details)),
            )
