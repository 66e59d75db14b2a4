from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Product:
    product_id: int
    code: str
    barcode: Optional[str]
    description: str

    def to_dict(self) -> dict:
        return {
            "id": self.product_id,
            "code": self.code,
            "barcode": self.barcode,
            "description": self.description,
        }
