from __future__ import annotations

import pytest

from src.dispatch_control.dispatch_control.core.enums import MissingReason
from src.dispatch_control.dispatch_control.core.exceptions import ValidationError
from src.dispatch_control.dispatch_control.reconciliation.engine import apply_clarification, reconcile
from src.dispatch_control.dispatch_control.reconciliation.model import ExpectedItem, ScannedItem


@pytest.fixture
def report():
    return reconcile(
        [ExpectedItem("A", "Widget", 5), ExpectedItem("B", "Gadget", 2)],
        [ScannedItem("A", "Widget", 3), ScannedItem("C", "Extra", 1)],
    )


def test_clean_report_needs_no_clarification():
    clean = reconcile([ExpectedItem("A", "W", 1)], [ScannedItem("A", "W", 1)])

    assert apply_clarification(clean, None, None) is clean


@pytest.mark.parametrize("clarification", [None, "", "   \n"])
def test_discrepancies_require_clarification(report, clarification):
    with pytest.raises(ValidationError):
        apply_clarification(report, clarification, {"A": "no_stock", "B": "damaged"})


def test_extra_only_still_requires_clarification():
    extra_only = reconcile([ExpectedItem("A", "W", 1)], [ScannedItem("A", "W", 2)])

    with pytest.raises(ValidationError):
        apply_clarification(extra_only, "", {})
    assert apply_clarification(extra_only, "client asked for one more", {}) == extra_only


def test_every_missing_item_needs_a_reason(report):
    with pytest.raises(ValidationError, match="B"):
        apply_clarification(report, "partial shipment", {"A": "no_stock"})


def test_unknown_reason_is_rejected(report):
    with pytest.raises(ValidationError):
        apply_clarification(report, "partial shipment", {"A": "no_stock", "B": "lost"})


def test_reasons_are_attached_to_missing_entries(report):
    resolved = apply_clarification(report, "partial shipment", {"A": "no_stock", "B": "damaged"})

    assert [m.reason for m in resolved.missing] == [MissingReason.NO_STOCK, MissingReason.DAMAGED]
    assert resolved.extra == report.extra
    assert resolved.to_dict()["missing"][1]["reason"] == "damaged"
