from __future__ import annotations

from typing import Any

from ..common.validators import require_int, require_list, require_non_empty
from ..core.exceptions import ValidationError
from .model import ExpectedItem, ScannedItem


def _require_mapping(raw: Any, field_name: str) -> dict:
    if not isinstance(raw, dict):
        raise ValidationError(f"{field_name} must be an object")
    return raw


def parse_scanned_items(raw: Any, *, allow_empty: bool = False) -> list[ScannedItem]:
    """Validate a JSON list of ``{code, name, quantity}`` scans."""
    rows = require_list(raw, "scannedItems")
    if not rows and not allow_empty:
        raise ValidationError("scannedItems must not be empty")

    items: list[ScannedItem] = []
    for i, row in enumerate(rows):
        row = _require_mapping(row, f"scannedItems[{i}]")
        code = require_non_empty(str(row.get("code") or ""), f"scannedItems[{i}].code")
        # Clients send either ``name`` or ``description`` for the label.
        name = row.get("name") or row.get("description") or ""
        quantity = require_int(row.get("quantity"), f"scannedItems[{i}].quantity", minimum=1)
        items.append(ScannedItem(code=code, name=str(name), quantity=quantity))
    return items


def parse_expected_items(raw: Any) -> list[ExpectedItem]:
    """Validate a JSON list of ``{code, description, quantity}`` order lines."""
    rows = require_list(raw, "items")

    items: list[ExpectedItem] = []
    seen: set[str] = set()
    for i, row in enumerate(rows):
        row = _require_mapping(row, f"items[{i}]")
        code = require_non_empty(str(row.get("code") or ""), f"items[{i}].code")
        if code in seen:
            raise ValidationError(f"Duplicate product code in order: {code}")
        seen.add(code)
        quantity = require_int(row.get("quantity"), f"items[{i}].quantity", minimum=0)
        items.append(ExpectedItem(code=code, description=str(row.get("description") or ""), quantity=quantity))
    return items
