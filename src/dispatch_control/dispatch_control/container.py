from __future__ import annotations

from dataclasses import dataclass

from .activity.mysql_activity_repository import MySQLActivityRepository
from .activity.service import ActivityLog
from .core.constants import DEFAULT_PREPARER_TASK, DEFAULT_TOKEN_TTL_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .orders.mysql_pre_remito_repository import MySQLPreRemitoRepository
from .orders.repository import PreRemitoRepository
from .orders.service import OrderService
from .products.mysql_product_repository import MySQLProductRepository
from .products.repository import ProductRepository
from .products.service import ProductCatalog
from .remitos.mysql_remito_repository import MySQLRemitoRepository
from .remitos.repository import RemitoRepository
from .remitos.service import RemitoService
from .sessions.service import SessionGuard
from .sessions.tokens import TokenCodec
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    pre_remitos_repo: PreRemitoRepository
    remitos_repo: RemitoRepository
    products_repo: ProductRepository

    activity_log: ActivityLog
    session_guard: SessionGuard
    user_service: UserService
    order_service: OrderService
    remito_service: RemitoService
    product_catalog: ProductCatalog


def wire_services(
    *,
    users_repo: UserRepository,
    pre_remitos_repo: PreRemitoRepository,
    remitos_repo: RemitoRepository,
    products_repo: ProductRepository,
    activity_log: ActivityLog,
    tokens: TokenCodec,
    preparer_task: str = DEFAULT_PREPARER_TASK,
) -> Container:
    """Build services on top of any repository implementations (MySQL or fakes)."""
    order_service = OrderService(pre_remitos_repo, activity_log)
    return Container(
        users_repo=users_repo,
        pre_remitos_repo=pre_remitos_repo,
        remitos_repo=remitos_repo,
        products_repo=products_repo,
        activity_log=activity_log,
        session_guard=SessionGuard(users_repo, tokens, activity_log),
        user_service=UserService(users_repo, activity_log, preparer_task=preparer_task),
        order_service=order_service,
        remito_service=RemitoService(remitos_repo, order_service, activity_log),
        product_catalog=ProductCatalog(products_repo),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    preparer_task: str = DEFAULT_PREPARER_TASK,
) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        pre_remitos_repo=MySQLPreRemitoRepository(conn),
        remitos_repo=MySQLRemitoRepository(conn),
        products_repo=MySQLProductRepository(conn),
        activity_log=ActivityLog(MySQLActivityRepository(conn)),
        tokens=TokenCodec(jwt_secret, ttl_minutes=token_ttl_minutes),
        preparer_task=preparer_task,
    )
