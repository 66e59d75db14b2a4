from __future__ import annotations

import logging
from typing import Any, Optional

from .repository import ActivityRepository

logger = logging.getLogger(__name__)


class ActivityLog:
    """Audit trail of who did what.

    Writes are best-effort: an audit failure is logged and never fails the
    operation being audited.
    """

    def __init__(self, activities: ActivityRepository):
        self._activities = activities

    def record(
        self,
        username: str,
        action: str,
        entity_type: Optional[str] = None,
        entity_id: Any = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        try:
            self._activities.insert(
                username=username,
                action=action,
                entity_type=entity_type,
                entity_id=None if entity_id is None else str(entity_id),
                details=dict(details or {}),
            )
        except Exception:
            logger.exception("Could not record activity %s for %s", action, username)
