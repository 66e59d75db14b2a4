from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import PreRemitoStatus
from ..reconciliation.model import ExpectedItem, ScannedItem


@dataclass(frozen=True)
class SalesOrder:
    """ERP sales order ("PV") a pre-remito was generated from."""

    order_ref: str
    client_code: Optional[str] = None
    client_store: Optional[str] = None
    client_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "numero_pv": self.order_ref,
            "cliente_codigo": self.client_code,
            "sucursal": self.client_store,
            "cliente_nombre": self.client_name,
        }


@dataclass(frozen=True)
class PreRemito:
    """Domain entity: the expected order, plus the operator's scan draft."""

    pre_remito_id: int
    order_number: str
    items: tuple[ExpectedItem, ...]
    scanned_items: tuple[ScannedItem, ...] = field(default_factory=tuple)
    status: PreRemitoStatus = PreRemitoStatus.PENDING
    created_at: Optional[datetime] = None
    sales_order: Optional[SalesOrder] = None

    def summary(self) -> dict:
        out = {
            "id": self.pre_remito_id,
            "order_number": self.order_number,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if self.sales_order:
            out.update(self.sales_order.to_dict())
        else:
            out.update({"numero_pv": None, "cliente_codigo": None, "sucursal": None, "cliente_nombre": None})
        return out

    def to_dict(self) -> dict:
        out = self.summary()
        out["items"] = [i.to_dict() for i in self.items]
        out["scanned_items"] = [s.to_dict() for s in self.scanned_items]
        return out
