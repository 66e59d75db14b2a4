from __future__ import annotations

from typing import Any, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..activity.service import ActivityLog
from ..common.validators import require_min_length, require_non_empty, require_pattern
from ..core.constants import DEFAULT_PREPARER_TASK, MIN_PASSWORD_LENGTH, USER_CODE_PATTERN
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import UserAccount
from .repository import UserRepository


class UserService:
    """Use case: manage accounts (admin) and look up operators by task."""

    def __init__(
        self,
        users: UserRepository,
        activity: Optional[ActivityLog] = None,
        *,
        preparer_task: str = DEFAULT_PREPARER_TASK,
    ):
        self._users = users
        self._activity = activity
        self._preparer_task = preparer_task

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied. Admin only.")

    def create_account(
        self,
        *,
        current_role: Role,
        actor: str,
        username: str,
        password: str,
        user_code: str,
        role: str,
    ) -> UserAccount:
        self._require_admin(current_role)

        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        user_code = require_pattern(user_code, "User code", USER_CODE_PATTERN, "User code must be exactly 3 digits")
        try:
            new_role = Role(role)
        except ValueError:
            raise ValidationError("Invalid role")

        if self._users.get_by_username_or_code(username, user_code):
            raise ValidationError("Username or User Code already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=new_role,
            user_code=user_code,
        )
        if self._activity:
            self._activity.record(
                actor,
                "admin_create_user",
                "user",
                user_id,
                {"new_username": username, "role": new_role.value, "user_code": user_code},
            )

        account = self._users.get_by_id(user_id)
        if account is None:
            raise ValidationError("Account creation failed")
        return account

    def list_users(self, *, current_role: Role) -> Sequence[UserAccount]:
        self._require_admin(current_role)
        return self._users.list_all()

    def update_tasks(self, *, current_role: Role, actor: str, user_id: int, tasks: Any) -> UserAccount:
        self._require_admin(current_role)

        if not isinstance(tasks, list) or not all(isinstance(t, str) for t in tasks):
            raise ValidationError("Tasks must be an array of strings")
        cleaned = [t.strip() for t in tasks if t.strip()]

        if not self._users.update_tasks(int(user_id), cleaned):
            raise NotFoundError("User not found")
        if self._activity:
            self._activity.record(actor, "update_user_tasks", "user", user_id, {"new_tasks": cleaned})

        account = self._users.get_by_id(int(user_id))
        if account is None:
            raise NotFoundError("User not found")
        return account

    def list_preparers(self) -> list[dict]:
        return [
            {"username": u.username, "user_code": u.user_code, "tasks": list(u.tasks)}
            for u in sorted(self._users.list_all(), key=lambda u: u.username)
            if self._preparer_task in u.tasks
        ]
