from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..activity.service import ActivityLog
from ..common.validators import require_list, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..reconciliation.engine import merge_scans
from ..reconciliation.model import ExpectedItem
from ..reconciliation.parsing import parse_expected_items, parse_scanned_items
from .model import PreRemito, SalesOrder
from .repository import PreRemitoRepository

logger = logging.getLogger(__name__)


class OrderService:
    """Use case: expected orders (pre-remitos) and their scan drafts."""

    def __init__(self, pre_remitos: PreRemitoRepository, activity: Optional[ActivityLog] = None):
        self._pre_remitos = pre_remitos
        self._activity = activity

    def get(self, order_number: str) -> PreRemito:
        pre = self._pre_remitos.get_by_order_number(require_non_empty(order_number, "Order number"))
        if not pre:
            raise NotFoundError("Pre-remito not found")
        return pre

    def get_expected_items(self, order_number: str) -> Optional[list[ExpectedItem]]:
        """Expected lines of an order, or None when no such order was loaded."""
        pre = self._pre_remitos.get_by_order_number(order_number)
        return list(pre.items) if pre else None

    def list_pending(self) -> Sequence[PreRemito]:
        return self._pre_remitos.list_pending()

    def mark_processed(self, order_number: str) -> None:
        if not self._pre_remitos.mark_processed(order_number):
            logger.warning("Pre-remito %s vanished before it could be marked processed", order_number)

    def save_draft(self, *, order_number: str, scanned_items: Any, username: str) -> PreRemito:
        # An empty draft is valid: the operator may have cleared the list.
        items = merge_scans(parse_scanned_items(scanned_items, allow_empty=True))
        if not self._pre_remitos.save_draft(order_number, items):
            raise NotFoundError("Pre-remito not found")

        if self._activity:
            self._activity.record(username, "update_draft", "pre_remitos", order_number, {"items_count": len(items)})
        return self.get(order_number)

    def receive_from_erp(self, *, header: Any, details: Any) -> int:
        """Store a pre-remito pushed by the ERP, plus its sales-order linkage.

        Payload keys are the ERP's own: header ``numero_pre_remito``,
        ``numero_pv``, ``codigo_cliente``, ``tienda_cliente``,
        ``nombre_cliente``; details ``codigo_producto``, ``descripcion``,
        ``cantidad``.
        """
        if not isinstance(header, dict) or not header.get("numero_pre_remito"):
            raise ValidationError("Invalid payload: Missing header or details")
        rows = require_list(details, "details")

        order_number = str(header["numero_pre_remito"]).strip()
        lines = []
        for d in rows:
            if not isinstance(d, dict):
                raise ValidationError("Invalid payload: details must be objects")
            lines.append(
                {
                    "code": d.get("codigo_producto"),
                    "description": d.get("descripcion"),
                    "quantity": d.get("cantidad"),
                }
            )
        items = parse_expected_items(lines)

        pre_remito_id = self._pre_remitos.upsert(order_number, items)

        if header.get("numero_pv"):
            self._pre_remitos.upsert_sales_order(
                SalesOrder(
                    order_ref=str(header["numero_pv"]).strip(),
                    client_code=header.get("codigo_cliente"),
                    client_store=header.get("tienda_cliente"),
                    client_name=header.get("nombre_cliente"),
                ),
                pre_remito_number=order_number,
            )

        logger.info("Received pre-remito %s from ERP (%d lines)", order_number, len(items))
        return pre_remito_id
