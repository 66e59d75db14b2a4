from __future__ import annotations

from typing import Any, Optional, Protocol


class ActivityRepository(Protocol):
    def insert(
        self,
        *,
        username: str,
        action: str,
        entity_type: Optional[str],
        entity_id: Optional[str],
        details: dict[str, Any],
    ) -> None:
        raise NotImplementedError
