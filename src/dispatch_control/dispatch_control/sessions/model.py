from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role
from ..users.model import UserAccount


@dataclass(frozen=True)
class UserClaims:
    """What a credential asserts about its bearer."""

    user_id: int
    username: str
    role: Role
    session_id: str


@dataclass(frozen=True)
class IssuedToken:
    token: str
    claims: UserClaims
    expires_at: datetime


@dataclass(frozen=True)
class LoginResult:
    token: str
    expires_at: datetime
    account: UserAccount

    def to_dict(self) -> dict:
        return {
            "token": self.token,
            "expires_at": self.expires_at.isoformat(),
            "user": {
                "id": self.account.user_id,
                "username": self.account.username,
                "role": self.account.role.value,
            },
        }
