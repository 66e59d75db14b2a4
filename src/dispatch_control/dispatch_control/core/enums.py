from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account roles used for authorization."""

    ADMIN = "admin"
    SUPERVISOR = "supervisor"
    USER = "user"


class MissingReason(str, Enum):
    """Why an expected item was shipped short."""

    NO_STOCK = "no_stock"
    DAMAGED = "damaged"


class PreRemitoStatus(str, Enum):
    PENDING = "pending"
    PROCESSED = "processed"


class RemitoStatus(str, Enum):
    """Lifecycle of a finalized dispatch record."""

    SCANNED = "scanned"
    PACKED = "packed"
    FINALIZED = "finalized"
    PROCESSED = "processed"
    VOIDED = "voided"
