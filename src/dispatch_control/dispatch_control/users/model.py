from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class UserAccount:
    """Domain entity: an operator account.

    ``current_session_id`` is the single-session mutex: non-null while a
    session is (or was) active, rotated on every login, cleared on logout.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    current_session_id: Optional[str] = None
    tasks: tuple[str, ...] = field(default_factory=tuple)
    user_code: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    def public_view(self) -> dict:
        return {
            "id": self.user_id,
            "username": self.username,
            "role": self.role.value,
            "user_code": self.user_code,
            "tasks": list(self.tasks),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
