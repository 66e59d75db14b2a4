from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import UserAccount

# Sentinel for update_session: "do not check the previous value".
ANY_SESSION = object()


class UserRepository(Protocol):
    """Repository interface for accounts.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[UserAccount]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def get_by_username_or_code(self, username: str, user_code: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        user_code: Optional[str] = None,
        current_session_id: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update_session(self, user_id: int, session_id: Optional[str], *, expected=ANY_SESSION) -> bool:
        """Store ``session_id`` as the account's current session.

        With ``expected`` given, the write only happens if the stored value
        still equals it (compare-and-set). Returns whether a row was updated.
        """

        raise NotImplementedError

    def update_tasks(self, user_id: int, tasks: Sequence[str]) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[UserAccount]:
        raise NotImplementedError
