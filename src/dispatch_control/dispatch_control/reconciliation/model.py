from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import MissingReason


@dataclass(frozen=True)
class ExpectedItem:
    """One line of a pre-remito: what the warehouse should ship."""

    code: str
    description: str
    quantity: int

    def to_dict(self) -> dict:
        return {"code": self.code, "description": self.description, "quantity": self.quantity}


@dataclass(frozen=True)
class ScannedItem:
    """One scanned product; repeated scans of a code are merged by quantity."""

    code: str
    name: str
    quantity: int

    def to_dict(self) -> dict:
        return {"code": self.code, "name": self.name, "quantity": self.quantity}


@dataclass(frozen=True)
class MissingEntry:
    code: str
    description: str
    expected: int
    scanned: int
    reason: Optional[MissingReason] = None

    def to_dict(self) -> dict:
        out = {
            "code": self.code,
            "description": self.description,
            "expected": self.expected,
            "scanned": self.scanned,
        }
        if self.reason is not None:
            out["reason"] = self.reason.value
        return out


@dataclass(frozen=True)
class ExtraEntry:
    code: str
    description: str
    quantity: int

    def to_dict(self) -> dict:
        return {"code": self.code, "description": self.description, "quantity": self.quantity}


@dataclass(frozen=True)
class DiscrepancyReport:
    """Shortfalls (``missing``) and surpluses (``extra``) of a scan against its order."""

    missing: tuple[MissingEntry, ...] = field(default_factory=tuple)
    extra: tuple[ExtraEntry, ...] = field(default_factory=tuple)

    @property
    def has_discrepancies(self) -> bool:
        return bool(self.missing or self.extra)

    def to_dict(self) -> dict:
        return {
            "missing": [m.to_dict() for m in self.missing],
            "extra": [e.to_dict() for e in self.extra],
        }
