from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PreRemitoStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from ..reconciliation.model import ExpectedItem, ScannedItem
from .model import PreRemito, SalesOrder
from .repository import PreRemitoRepository

# ERP may link several sales orders to one pre-remito; only the first is shown.
SALES_ORDER_JOIN = """
    LEFT JOIN sales_orders s ON s.sales_order_id = (
        SELECT MIN(s2.sales_order_id) FROM sales_orders s2 WHERE s2.pre_remito_number = {number}
    )
"""

_SELECT = """
    SELECT p.pre_remito_id, p.order_number, p.items, p.scanned_items, p.status, p.created_at,
           s.order_ref, s.client_code, s.client_store, s.client_name
    FROM pre_remitos p
""" + SALES_ORDER_JOIN.format(number="p.order_number")


def _row_to_pre_remito(row: dict) -> PreRemito:
    items = tuple(
        ExpectedItem(
            code=str(i.get("code")),
            description=i.get("description") or "",
            quantity=int(i.get("quantity") or 0),
        )
        for i in load_json(row.get("items"), default=[])
    )
    scanned = tuple(
        ScannedItem(code=str(s.get("code")), name=s.get("name") or "", quantity=int(s.get("quantity") or 0))
        for s in load_json(row.get("scanned_items"), default=[])
    )
    sales_order = None
    if row.get("order_ref"):
        sales_order = SalesOrder(
            order_ref=row["order_ref"],
            client_code=row.get("client_code"),
            client_store=row.get("client_store"),
            client_name=row.get("client_name"),
        )
    return PreRemito(
        pre_remito_id=int(row["pre_remito_id"]),
        order_number=row["order_number"],
        items=items,
        scanned_items=scanned,
        status=PreRemitoStatus(row.get("status") or PreRemitoStatus.PENDING.value),
        created_at=row.get("created_at"),
        sales_order=sales_order,
    )


class MySQLPreRemitoRepository(PreRemitoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_order_number(self, order_number: str) -> Optional[PreRemito]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE p.order_number=%s LIMIT 1", (order_number,))
            row = fetchone(cur)
            return _row_to_pre_remito(row) if row else None

    def list_pending(self) -> Sequence[PreRemito]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE p.status <> %s ORDER BY p.created_at DESC",
                (PreRemitoStatus.PROCESSED.value,),
            )
            return [_row_to_pre_remito(r) for r in fetchall(cur)]

    def save_draft(self, order_number: str, scanned_items: Sequence[ScannedItem]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT pre_remito_id FROM pre_remitos WHERE order_number=%s", (order_number,))
            if not fetchone(cur):
                return False
            cur.execute(
                "UPDATE pre_remitos SET scanned_items=%s WHERE order_number=%s",
                (dump_json([s.to_dict() for s in scanned_items]), order_number),
            )
            return True

    def mark_processed(self, order_number: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE pre_remitos SET status=%s, scanned_items=%s WHERE order_number=%s",
                (PreRemitoStatus.PROCESSED.value, dump_json([]), order_number),
            )
            return cur.rowcount > 0

    def upsert(self, order_number: str, items: Sequence[ExpectedItem]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO pre_remitos(order_number, items, scanned_items, status)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE items=VALUES(items), status=VALUES(status)
                """,
                (
                    order_number,
                    dump_json([i.to_dict() for i in items]),
                    dump_json([]),
                    PreRemitoStatus.PENDING.value,
                ),
            )
            cur.execute("SELECT pre_remito_id FROM pre_remitos WHERE order_number=%s", (order_number,))
            return int(fetchone(cur)["pre_remito_id"])

    def upsert_sales_order(self, sales_order: SalesOrder, *, pre_remito_number: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sales_orders(order_ref, pre_remito_number, client_code, client_store, client_name)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    pre_remito_number=VALUES(pre_remito_number),
                    client_code=VALUES(client_code),
                    client_store=VALUES(client_store),
                    client_name=VALUES(client_name)
                """,
                (
                    sales_order.order_ref,
                    pre_remito_number,
                    sales_order.client_code,
                    sales_order.client_store,
                    sales_order.client_name,
                ),
            )
