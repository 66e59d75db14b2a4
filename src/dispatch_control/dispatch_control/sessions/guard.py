from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import g, request

from ..common.http import internal_error, json_error
from ..core.constants import TOKEN_HEADER
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from .service import SessionGuard

logger = logging.getLogger(__name__)


def extract_token() -> Optional[str]:
    token = request.headers.get(TOKEN_HEADER)
    if token:
        return token.strip()
    auth = request.headers.get("Authorization", "")
    scheme, _, value = auth.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def session_ended():
    # Same body for every failure reason; the reason only goes to the log.
    return json_error("Session ended", 401, code="session_ended")


class RequestGuard:
    """Flask decorators running SessionGuard.authenticate on each request."""

    def __init__(self, sessions: SessionGuard):
        self._sessions = sessions

    def token_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.user = self._sessions.authenticate(extract_token())
            except AuthenticationError as e:
                logger.info("Rejected %s %s: %s", request.method, request.path, e.reason)
                return session_ended()
            except Exception as e:
                return internal_error(e)
            return view(*args, **kwargs)

        return wrapper

    def roles_required(self, *roles: Role):
        """Must be stacked under ``token_required``."""

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                if g.user.role not in roles:
                    return json_error("Access denied", 403)
                return view(*args, **kwargs)

            return wrapper

        return decorator
