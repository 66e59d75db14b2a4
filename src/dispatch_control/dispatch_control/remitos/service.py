from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..activity.service import ActivityLog
from ..common.validators import optional_text, require_int, require_non_empty
from ..core.enums import RemitoStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..orders.service import OrderService
from ..reconciliation.engine import apply_clarification, merge_scans, reconcile
from ..reconciliation.model import DiscrepancyReport, ScannedItem
from ..reconciliation.parsing import parse_scanned_items
from .model import Remito
from .repository import RemitoRepository

logger = logging.getLogger(__name__)


class RemitoService:
    """Use case: turn a scanned list into a remito, reconciling it first."""

    def __init__(
        self,
        remitos: RemitoRepository,
        orders: OrderService,
        activity: Optional[ActivityLog] = None,
    ):
        self._remitos = remitos
        self._orders = orders
        self._activity = activity

    def _scans(self, raw: Any) -> list[ScannedItem]:
        return merge_scans(parse_scanned_items(raw))

    def preview(self, *, order_number: str, scanned_items: Any) -> DiscrepancyReport:
        """Reconcile without persisting anything."""
        order_number = require_non_empty(order_number, "Remito number")
        return reconcile(self._orders.get_expected_items(order_number), self._scans(scanned_items))

    def submit(
        self,
        *,
        order_number: str,
        scanned_items: Any,
        username: str,
        clarification: Optional[str] = None,
        missing_reasons: Optional[dict[str, str]] = None,
        prepared_by: Optional[str] = None,
    ) -> Remito:
        order_number = require_non_empty(order_number, "Remito number")
        scans = self._scans(scanned_items)
        prepared_by = optional_text(prepared_by, "preparedBy")
        expected = self._orders.get_expected_items(order_number)

        report = apply_clarification(reconcile(expected, scans), clarification, missing_reasons)
        note = clarification.strip() if isinstance(clarification, str) and clarification.strip() else None

        remito_id = self._remitos.create(
            remito_number=order_number,
            items=[s.to_dict() for s in scans],
            discrepancies=report.to_dict(),
            clarification=note,
            status=RemitoStatus.SCANNED,
            created_by=username,
            prepared_by=prepared_by,
        )

        if expected is not None:
            self._orders.mark_processed(order_number)

        logger.info(
            "Remito %s created by %s (missing=%d, extra=%d)",
            order_number,
            username,
            len(report.missing),
            len(report.extra),
        )
        if self._activity:
            self._activity.record(
                username,
                "create_remito",
                "remitos",
                remito_id,
                {"remito_number": order_number, "items_count": len(scans), "prepared_by": prepared_by},
            )
        return self.get(remito_id)

    def list_remitos(self) -> Sequence[Remito]:
        return self._remitos.list_all()

    def get(self, remito_id: int) -> Remito:
        remito = self._remitos.get_by_id(int(remito_id))
        if not remito:
            raise NotFoundError("Remito not found")
        return remito

    def update(
        self,
        *,
        remito_id: int,
        username: str,
        total_packages: Any = None,
        status: Any = None,
    ) -> Remito:
        if total_packages is None and not status:
            raise ValidationError("No fields to update")

        packages = None
        if total_packages is not None:
            packages = require_int(total_packages, "total_packages", minimum=1)

        new_status = None
        if status:
            try:
                new_status = RemitoStatus(status)
            except ValueError:
                raise ValidationError(f"Invalid status: {status!r}")

        ok = self._remitos.update(
            int(remito_id),
            total_packages=packages,
            packages_added_by=username if packages is not None else None,
            status=new_status,
        )
        if not ok:
            raise NotFoundError("Remito not found")
        return self.get(remito_id)
