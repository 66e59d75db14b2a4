from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Product
from .repository import ProductRepository


class MySQLProductRepository(ProductRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code_or_barcode(self, value: str) -> Optional[Product]:
        with db_cursor(self._conn_factory) as (_, cur):
            # Prefer an exact internal-code hit over a barcode hit.
            cur.execute(
                """
                SELECT product_id, code, barcode, description
                FROM products
                WHERE code=%s OR barcode=%s
                ORDER BY (code=%s) DESC
                LIMIT 1
                """,
                (value, value, value),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Product(
                product_id=int(row["product_id"]),
                code=row["code"],
                barcode=row.get("barcode"),
                description=row.get("description") or "",
            )
