from __future__ import annotations

from typing import Optional, Protocol

from .model import Product


class ProductRepository(Protocol):
    def get_by_code_or_barcode(self, value: str) -> Optional[Product]:
        """Match either the internal product code or the EAN barcode."""

        raise NotImplementedError
