from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.dispatch_control.dispatch_control.activity.service import ActivityLog
from src.dispatch_control.dispatch_control.container import wire_services
from src.dispatch_control.dispatch_control.core.enums import PreRemitoStatus, RemitoStatus, Role
from src.dispatch_control.dispatch_control.orders.model import PreRemito
from src.dispatch_control.dispatch_control.products.model import Product
from src.dispatch_control.dispatch_control.reconciliation.model import ExpectedItem
from src.dispatch_control.dispatch_control.remitos.model import Remito
from src.dispatch_control.dispatch_control.sessions.tokens import TokenCodec
from src.dispatch_control.dispatch_control.users.model import UserAccount
from src.dispatch_control.dispatch_control.users.repository import ANY_SESSION

JWT_SECRET = "test-jwt-secret"
FIXED_NOW = datetime(2026, 3, 2, 9, 30)


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, UserAccount] = {}
        self._next_id = 1

    def add(
        self,
        username: str,
        password: str,
        *,
        role: Role = Role.USER,
        tasks=(),
        user_code=None,
        is_active: bool = True,
    ) -> UserAccount:
        account = UserAccount(
            user_id=self._next_id,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            tasks=tuple(tasks),
            user_code=user_code,
            is_active=is_active,
            created_at=FIXED_NOW,
        )
        self.by_id[account.user_id] = account
        self._next_id += 1
        return account

    def get_by_id(self, user_id: int) -> Optional[UserAccount]:
        return self.by_id.get(int(user_id))

    def get_by_username(self, username: str) -> Optional[UserAccount]:
        return next((u for u in self.by_id.values() if u.username == username), None)

    def get_by_username_or_code(self, username: str, user_code: str) -> Optional[UserAccount]:
        return next((u for u in self.by_id.values() if u.username == username or u.user_code == user_code), None)

    def create_user(self, *, username, password_hash, role, user_code=None, current_session_id=None) -> int:
        user_id = self._next_id
        self._next_id += 1
        self.by_id[user_id] = UserAccount(
            user_id=user_id,
            username=username,
            password_hash=password_hash,
            role=role,
            user_code=user_code,
            current_session_id=current_session_id,
            created_at=FIXED_NOW,
        )
        return user_id

    def update_session(self, user_id, session_id, *, expected=ANY_SESSION) -> bool:
        account = self.by_id.get(int(user_id))
        if account is None:
            return False
        if expected is not ANY_SESSION and account.current_session_id != expected:
            return False
        self.by_id[account.user_id] = replace(account, current_session_id=session_id)
        return True

    def update_tasks(self, user_id, tasks) -> bool:
        account = self.by_id.get(int(user_id))
        if account is None:
            return False
        self.by_id[account.user_id] = replace(account, tasks=tuple(tasks))
        return True

    def list_all(self):
        return list(self.by_id.values())


class InMemoryPreRemitos:
    def __init__(self):
        self.by_number: dict[str, PreRemito] = {}
        self.sales_orders: dict[str, tuple] = {}
        self._next_id = 1

    def add(self, order_number: str, items: list[ExpectedItem]) -> PreRemito:
        self.upsert(order_number, items)
        return self.by_number[order_number]

    def get_by_order_number(self, order_number):
        pre = self.by_number.get(order_number)
        if pre is None:
            return None
        linked = next((so for so, number in self.sales_orders.values() if number == order_number), None)
        return replace(pre, sales_order=linked)

    def list_pending(self):
        return [
            self.get_by_order_number(n)
            for n, p in reversed(list(self.by_number.items()))
            if p.status != PreRemitoStatus.PROCESSED
        ]

    def save_draft(self, order_number, scanned_items) -> bool:
        pre = self.by_number.get(order_number)
        if pre is None:
            return False
        self.by_number[order_number] = replace(pre, scanned_items=tuple(scanned_items))
        return True

    def mark_processed(self, order_number) -> bool:
        pre = self.by_number.get(order_number)
        if pre is None:
            return False
        self.by_number[order_number] = replace(pre, status=PreRemitoStatus.PROCESSED, scanned_items=())
        return True

    def upsert(self, order_number, items) -> int:
        pre = self.by_number.get(order_number)
        if pre is None:
            pre = PreRemito(pre_remito_id=self._next_id, order_number=order_number, items=(), created_at=FIXED_NOW)
            self._next_id += 1
        self.by_number[order_number] = replace(pre, items=tuple(items), status=PreRemitoStatus.PENDING)
        return pre.pre_remito_id

    def upsert_sales_order(self, sales_order, *, pre_remito_number) -> None:
        self.sales_orders[sales_order.order_ref] = (sales_order, pre_remito_number)


class InMemoryRemitos:
    def __init__(self):
        self.by_id: dict[int, Remito] = {}
        self._next_id = 1

    def create(self, *, remito_number, items, discrepancies, clarification, status, created_by, prepared_by) -> int:
        remito_id = self._next_id
        self._next_id += 1
        self.by_id[remito_id] = Remito(
            remito_id=remito_id,
            remito_number=remito_number,
            items=items,
            discrepancies=discrepancies,
            clarification=clarification,
            status=status,
            created_by=created_by,
            prepared_by=prepared_by,
            created_at=FIXED_NOW,
        )
        return remito_id

    def get_by_id(self, remito_id):
        return self.by_id.get(int(remito_id))

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda r: r.remito_id, reverse=True)

    def update(self, remito_id, *, total_packages=None, packages_added_by=None, status=None) -> bool:
        remito = self.by_id.get(int(remito_id))
        if remito is None:
            return False
        if total_packages is not None:
            remito = replace(remito, total_packages=total_packages, packages_added_by=packages_added_by)
        if status is not None:
            remito = replace(remito, status=RemitoStatus(status))
        self.by_id[remito.remito_id] = remito
        return True


class InMemoryProducts:
    def __init__(self, products=()):
        self.products = list(products)

    def get_by_code_or_barcode(self, value):
        return next((p for p in self.products if p.code == value), None) or next(
            (p for p in self.products if p.barcode == value), None
        )


class InMemoryActivity:
    def __init__(self):
        self.entries: list[dict] = []

    def insert(self, *, username, action, entity_type, entity_id, details) -> None:
        self.entries.append(
            {
                "username": username,
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "details": details,
            }
        )

    def actions(self) -> list[str]:
        return [e["action"] for e in self.entries]


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def pre_remitos_repo():
    return InMemoryPreRemitos()


@pytest.fixture
def remitos_repo():
    return InMemoryRemitos()


@pytest.fixture
def products_repo():
    return InMemoryProducts(
        [
            Product(product_id=1, code="10001", barcode="7790001000011", description="Tornillo 8x1"),
            Product(product_id=2, code="10002", barcode=None, description="Tarugo 8mm"),
        ]
    )


@pytest.fixture
def activity_repo():
    return InMemoryActivity()


@pytest.fixture
def tokens():
    return TokenCodec(JWT_SECRET, ttl_minutes=60)


@pytest.fixture
def container(users_repo, pre_remitos_repo, remitos_repo, products_repo, activity_repo, tokens):
    return wire_services(
        users_repo=users_repo,
        pre_remitos_repo=pre_remitos_repo,
        remitos_repo=remitos_repo,
        products_repo=products_repo,
        activity_log=ActivityLog(activity_repo),
        tokens=tokens,
    )


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.dispatch_control.dispatch_control.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
