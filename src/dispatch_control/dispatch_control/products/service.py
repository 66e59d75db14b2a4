from __future__ import annotations

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Product
from .repository import ProductRepository


class ProductCatalog:
    def __init__(self, products: ProductRepository):
        self._products = products

    def lookup(self, code_or_barcode: str) -> Product:
        value = require_non_empty(code_or_barcode, "Barcode")
        product = self._products.get_by_code_or_barcode(value)
        if not product:
            raise NotFoundError("Product not found")
        return product
