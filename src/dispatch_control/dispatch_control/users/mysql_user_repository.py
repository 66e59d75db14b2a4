from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import UserAccount
from .repository import ANY_SESSION, UserRepository

_COLUMNS = "user_id, username, password_hash, role, current_session_id, tasks, user_code, is_active, created_at"


def _row_to_account(row: dict) -> UserAccount:
    return UserAccount(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        current_session_id=row.get("current_session_id"),
        tasks=tuple(load_json(row.get("tasks"), default=[])),
        user_code=row.get("user_code"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def get_by_username_or_code(self, username: str, user_code: str) -> Optional[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE username=%s OR user_code=%s LIMIT 1",
                (username, user_code),
            )
            row = fetchone(cur)
            return _row_to_account(row) if row else None

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        user_code: Optional[str] = None,
        current_session_id: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(username, password_hash, role, user_code, current_session_id, tasks, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (username, password_hash, role.value, user_code, current_session_id, dump_json([])),
            )
            return int(cur.lastrowid)

    def update_session(self, user_id: int, session_id: Optional[str], *, expected=ANY_SESSION) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if expected is ANY_SESSION:
                cur.execute(
                    "UPDATE users SET current_session_id=%s WHERE user_id=%s",
                    (session_id, user_id),
                )
            else:
                # <=> is NULL-safe equality, so expected=None matches an empty slot.
                cur.execute(
                    "UPDATE users SET current_session_id=%s WHERE user_id=%s AND current_session_id <=> %s",
                    (session_id, user_id, expected),
                )
            return cur.rowcount > 0

    def update_tasks(self, user_id: int, tasks: Sequence[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT user_id FROM users WHERE user_id=%s", (user_id,))
            if not fetchone(cur):
                return False
            cur.execute("UPDATE users SET tasks=%s WHERE user_id=%s", (dump_json(list(tasks)), user_id))
            return True

    def list_all(self) -> Sequence[UserAccount]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY created_at DESC, user_id DESC")
            return [_row_to_account(r) for r in fetchall(cur)]
