from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Callable, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..activity.service import ActivityLog
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from ..users.model import UserAccount
from ..users.repository import UserRepository
from .model import LoginResult, UserClaims
from .tokens import TokenCodec

logger = logging.getLogger(__name__)


# Compared against when the username is unknown, so both failure paths hash.
_DUMMY_HASH = generate_password_hash("dispatch-control-no-such-account")


def _new_session_id() -> str:
    return str(uuid.uuid4())


class SessionGuard:
    """Use case: one active session per account.

    The account's ``current_session_id`` acts as a mutex. Every login rotates
    it and every authenticated request compares the token's embedded session
    id against the stored one, so a newer login (from any device) revokes
    older credentials before they expire.
    """

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenCodec,
        activity: Optional[ActivityLog] = None,
        *,
        session_id_factory: Callable[[], str] = _new_session_id,
    ):
        self._users = users
        self._tokens = tokens
        self._activity = activity
        self._new_session_id = session_id_factory

    def _record(self, username: str, action: str, user_id: int, details: Optional[dict] = None) -> None:
        if self._activity:
            self._activity.record(username, action, "user", user_id, details)

    def _issue(self, account: UserAccount, session_id: str) -> LoginResult:
        issued = self._tokens.issue(
            UserClaims(
                user_id=account.user_id,
                username=account.username,
                role=account.role,
                session_id=session_id,
            )
        )
        return LoginResult(
            token=issued.token,
            expires_at=issued.expires_at,
            account=replace(account, current_session_id=session_id),
        )

    def login(self, username: str, password: str, *, force: bool = False) -> LoginResult:
        if not username or not password:
            raise ValidationError("Username and password are required")

        account = self._users.get_by_username(username)
        if not account:
            check_password_hash(_DUMMY_HASH, password)
            raise AuthenticationError("invalid credentials")
        if not account.is_active:
            raise AuthenticationError("invalid credentials")

        try:
            ok = check_password_hash(account.password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("invalid credentials")

        if account.current_session_id is not None and not force:
            raise ConflictError("session already active")

        session_id = self._new_session_id()
        if force:
            self._users.update_session(account.user_id, session_id)
        elif not self._users.update_session(account.user_id, session_id, expected=None):
            # Another login claimed the empty slot between our read and write.
            raise ConflictError("session already active")

        logger.info("User %s logged in (force=%s)", account.username, bool(force))
        self._record(account.username, "login", account.user_id, {"force": bool(force)})
        return self._issue(account, session_id)

    def authenticate(self, token: Optional[str]) -> UserClaims:
        if not token:
            raise AuthenticationError("invalid token")

        claims = self._tokens.decode(token)

        account = self._users.get_by_id(claims.user_id)
        if not account:
            raise AuthenticationError("account not found")

        if account.current_session_id is None or account.current_session_id != claims.session_id:
            raise AuthenticationError("session superseded")

        return claims

    def logout(self, user_id: int, *, username: Optional[str] = None) -> None:
        self._users.update_session(int(user_id), None)
        logger.info("User %s logged out", username or user_id)
        if username:
            self._record(username, "logout", int(user_id))

    def register(self, username: str, password: str) -> LoginResult:
        """Self-service sign-up; the new account starts with an active session."""
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        session_id = self._new_session_id()
        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=Role.USER,
            current_session_id=session_id,
        )
        account = self._users.get_by_id(user_id)
        if account is None:
            raise ValidationError("Registration failed")

        self._record(username, "register", user_id)
        return self._issue(account, session_id)
