from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..core.enums import RemitoStatus
from ..orders.model import SalesOrder


@dataclass(frozen=True)
class Remito:
    """Domain entity: what was actually scanned and shipped for an order."""

    remito_id: int
    remito_number: str
    items: list[dict[str, Any]]
    discrepancies: dict[str, Any]
    clarification: Optional[str]
    status: RemitoStatus
    created_by: str
    prepared_by: Optional[str] = None
    total_packages: Optional[int] = None
    packages_added_by: Optional[str] = None
    created_at: Optional[datetime] = None
    sales_order: Optional[SalesOrder] = None

    def to_dict(self) -> dict:
        pv = self.sales_order
        return {
            "id": self.remito_id,
            "remito_number": self.remito_number,
            "items": self.items,
            "discrepancies": self.discrepancies,
            "clarification": self.clarification,
            "status": self.status.value,
            "created_by": self.created_by,
            "prepared_by": self.prepared_by,
            "total_packages": self.total_packages,
            "packages_added_by": self.packages_added_by,
            "date": self.created_at.isoformat() if self.created_at else None,
            "numero_pv": pv.order_ref if pv else "-",
            "sucursal": (pv.client_store if pv else None) or "-",
            "cliente_codigo": (pv.client_code if pv else None) or "-",
            "cliente_nombre": (pv.client_name if pv else None) or "-",
        }
