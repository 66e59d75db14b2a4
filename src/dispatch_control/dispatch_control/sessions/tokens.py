from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TOKEN_TTL_MINUTES, JWT_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .model import IssuedToken, UserClaims


class TokenCodec:
    """Signs and verifies session credentials (HS256 JWT).

    A decoded token is only half of authentication: the embedded session id
    must still match the account row, see ``SessionGuard.authenticate``.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
        clock: Callable[[], datetime] = now_utc,
    ):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._ttl = timedelta(minutes=int(ttl_minutes))
        self._clock = clock

    def issue(self, claims: UserClaims) -> IssuedToken:
        issued_at = self._clock()
        expires_at = issued_at + self._ttl
        payload = {
            "id": claims.user_id,
            "username": claims.username,
            "role": claims.role.value,
            "session_id": claims.session_id,
            "iat": issued_at,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)
        return IssuedToken(token=token, claims=claims, expires_at=expires_at)

    def decode(self, token: str) -> UserClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "id", "session_id"]},
            )
        except jwt.PyJWTError:
            raise AuthenticationError("invalid token")

        try:
            return UserClaims(
                user_id=int(payload["id"]),
                username=str(payload.get("username", "")),
                role=Role(payload.get("role")),
                session_id=str(payload["session_id"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("invalid token")
