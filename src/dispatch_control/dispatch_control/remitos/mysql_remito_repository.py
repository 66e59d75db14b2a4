from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import RemitoStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from ..orders.model import SalesOrder
from ..orders.mysql_pre_remito_repository import SALES_ORDER_JOIN
from .model import Remito
from .repository import RemitoRepository

_SELECT = """
    SELECT r.remito_id, r.remito_number, r.items, r.discrepancies, r.clarification, r.status,
           r.created_by, r.prepared_by, r.total_packages, r.packages_added_by, r.created_at,
           s.order_ref, s.client_code, s.client_store, s.client_name
    FROM remitos r
""" + SALES_ORDER_JOIN.format(number="r.remito_number")


def _row_to_remito(row: dict) -> Remito:
    sales_order = None
    if row.get("order_ref"):
        sales_order = SalesOrder(
            order_ref=row["order_ref"],
            client_code=row.get("client_code"),
            client_store=row.get("client_store"),
            client_name=row.get("client_name"),
        )
    total_packages = row.get("total_packages")
    return Remito(
        remito_id=int(row["remito_id"]),
        remito_number=row["remito_number"],
        items=load_json(row.get("items"), default=[]),
        discrepancies=load_json(row.get("discrepancies"), default={}),
        clarification=row.get("clarification"),
        status=RemitoStatus(row["status"]),
        created_by=row["created_by"],
        prepared_by=row.get("prepared_by"),
        total_packages=int(total_packages) if total_packages is not None else None,
        packages_added_by=row.get("packages_added_by"),
        created_at=row.get("created_at"),
        sales_order=sales_order,
    )


class MySQLRemitoRepository(RemitoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        remito_number: str,
        items: list[dict[str, Any]],
        discrepancies: dict[str, Any],
        clarification: Optional[str],
        status: RemitoStatus,
        created_by: str,
        prepared_by: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO remitos(remito_number, items, discrepancies, clarification, status, created_by, prepared_by)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    remito_number,
                    dump_json(items),
                    dump_json(discrepancies),
                    clarification,
                    status.value,
                    created_by,
                    prepared_by,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, remito_id: int) -> Optional[Remito]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE r.remito_id=%s LIMIT 1", (remito_id,))
            row = fetchone(cur)
            return _row_to_remito(row) if row else None

    def list_all(self) -> Sequence[Remito]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " ORDER BY r.created_at DESC, r.remito_id DESC")
            return [_row_to_remito(r) for r in fetchall(cur)]

    def update(
        self,
        remito_id: int,
        *,
        total_packages: Optional[int] = None,
        packages_added_by: Optional[str] = None,
        status: Optional[RemitoStatus] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[Any] = []
        if total_packages is not None:
            sets.append("total_packages=%s")
            params.append(total_packages)
            sets.append("packages_added_by=%s")
            params.append(packages_added_by)
        if status is not None:
            sets.append("status=%s")
            params.append(status.value)
        if not sets:
            return False

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT remito_id FROM remitos WHERE remito_id=%s", (remito_id,))
            if not fetchone(cur):
                return False
            cur.execute(f"UPDATE remitos SET {', '.join(sets)} WHERE remito_id=%s", (*params, remito_id))
            return True
