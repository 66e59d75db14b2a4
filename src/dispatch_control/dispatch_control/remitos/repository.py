from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..core.enums import RemitoStatus
from .model import Remito


class RemitoRepository(Protocol):
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
        raise NotImplementedError

    def get_by_id(self, remito_id: int) -> Optional[Remito]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Remito]:
        """All remitos, newest first."""

        raise NotImplementedError

    def update(
        self,
        remito_id: int,
        *,
        total_packages: Optional[int] = None,
        packages_added_by: Optional[str] = None,
        status: Optional[RemitoStatus] = None,
    ) -> bool:
        """Update only the fields given; returns False for an unknown remito."""

        raise NotImplementedError
