from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..reconciliation.model import ExpectedItem, ScannedItem
from .model import PreRemito, SalesOrder


class PreRemitoRepository(Protocol):
    def get_by_order_number(self, order_number: str) -> Optional[PreRemito]:
        raise NotImplementedError

    def list_pending(self) -> Sequence[PreRemito]:
        """Pre-remitos not yet processed, newest first."""

        raise NotImplementedError

    def save_draft(self, order_number: str, scanned_items: Sequence[ScannedItem]) -> bool:
        raise NotImplementedError

    def mark_processed(self, order_number: str) -> bool:
        """Set status to processed and clear the scan draft."""

        raise NotImplementedError

    def upsert(self, order_number: str, items: Sequence[ExpectedItem]) -> int:
        """Create or replace the expected items; the order goes back to pending."""

        raise NotImplementedError

    def upsert_sales_order(self, sales_order: SalesOrder, *, pre_remito_number: str) -> None:
        raise NotImplementedError
