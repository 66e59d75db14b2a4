from __future__ import annotations

from datetime import datetime

from src.dispatch_control.dispatch_control.orders.mysql_pre_remito_repository import MySQLPreRemitoRepository
from src.dispatch_control.dispatch_control.remitos.mysql_remito_repository import MySQLRemitoRepository


class RecordingCursor:
    def __init__(self, rows):
        self.rows = rows
        self.queries: list[str] = []

    def execute(self, sql, params=None):
        self.queries.append(" ".join(sql.split()))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def close(self):
        pass


class RecordingConnection:
    def __init__(self, cursor):
        self._cursor = cursor

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        pass

    def rollback(self):
        pass

    def close(self):
        pass


class RecordingFactory:
    def __init__(self, rows):
        self.cur = RecordingCursor(rows)

    def connect(self):
        return RecordingConnection(self.cur)


ONE_SALES_ORDER = "LEFT JOIN sales_orders s ON s.sales_order_id = ( SELECT MIN(s2.sales_order_id) FROM sales_orders s2"


def test_pre_remito_queries_join_one_sales_order():
    factory = RecordingFactory(
        [
            {
                "pre_remito_id": 1,
                "order_number": "R-1",
                "items": '[{"code": "A", "description": "Widget", "quantity": 2}]',
                "scanned_items": None,
                "status": "pending",
                "created_at": datetime(2026, 3, 2, 9, 30),
                "order_ref": "PV-1",
                "client_code": "C1",
                "client_store": "01",
                "client_name": "ACME",
            }
        ]
    )

    pending = MySQLPreRemitoRepository(factory).list_pending()

    (query,) = factory.cur.queries
    assert ONE_SALES_ORDER in query
    assert "WHERE s2.pre_remito_number = p.order_number )" in query
    assert [p.sales_order.order_ref for p in pending] == ["PV-1"]
    assert pending[0].items[0].quantity == 2


def test_remito_queries_join_one_sales_order():
    factory = RecordingFactory(
        [
            {
                "remito_id": 3,
                "remito_number": "R-1",
                "items": "[]",
                "discrepancies": '{"missing": [], "extra": []}',
                "clarification": None,
                "status": "scanned",
                "created_by": "op",
                "prepared_by": None,
                "total_packages": None,
                "packages_added_by": None,
                "created_at": None,
                "order_ref": None,
                "client_code": None,
                "client_store": None,
                "client_name": None,
            }
        ]
    )
    repo = MySQLRemitoRepository(factory)

    remitos = repo.list_all()
    repo.get_by_id(3)

    for query in factory.cur.queries:
        assert ONE_SALES_ORDER in query
        assert "WHERE s2.pre_remito_number = r.remito_number )" in query
    assert remitos[0].to_dict()["numero_pv"] == "-"
