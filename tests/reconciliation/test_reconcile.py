from __future__ import annotations

import pytest

from src.dispatch_control.dispatch_control.reconciliation.engine import merge_scans, reconcile
from src.dispatch_control.dispatch_control.reconciliation.model import (
    DiscrepancyReport,
    ExpectedItem,
    ExtraEntry,
    MissingEntry,
    ScannedItem,
)


def test_no_expected_order_yields_empty_report():
    scanned = [ScannedItem(code="A", name="Widget", quantity=3), ScannedItem(code="B", name="Gadget", quantity=1)]

    report = reconcile(None, scanned)

    assert report == DiscrepancyReport()
    assert report.to_dict() == {"missing": [], "extra": []}


def test_exact_match_yields_empty_report():
    expected = [ExpectedItem("A", "Widget", 2), ExpectedItem("B", "Gadget", 5)]
    scanned = [ScannedItem("B", "Gadget", 5), ScannedItem("A", "Widget", 2)]

    report = reconcile(expected, scanned)

    assert report.missing == ()
    assert report.extra == ()
    assert not report.has_discrepancies


def test_shortfall_is_reported_as_missing():
    report = reconcile([ExpectedItem("A", "Widget", 10)], [ScannedItem("A", "Widget", 4)])

    assert report.missing == (MissingEntry(code="A", description="Widget", expected=10, scanned=4),)
    assert report.extra == ()


def test_unexpected_code_is_fully_extra():
    report = reconcile(
        [ExpectedItem("A", "W", 5)],
        [ScannedItem("A", "W", 5), ScannedItem("B", "Gadget", 3)],
    )

    assert report.extra == (ExtraEntry(code="B", description="Gadget", quantity=3),)
    assert report.missing == ()


def test_overage_on_expected_code_reports_only_surplus():
    report = reconcile([ExpectedItem("A", "W", 5)], [ScannedItem("A", "W", 8)])

    assert report.extra == (ExtraEntry(code="A", description="W", quantity=3),)
    assert report.missing == ()


def test_never_scanned_expected_item_is_missing_with_zero():
    report = reconcile([ExpectedItem("A", "Widget", 2)], [ScannedItem("B", "Gadget", 1)])

    assert report.missing == (MissingEntry("A", "Widget", expected=2, scanned=0),)
    assert report.extra == (ExtraEntry("B", "Gadget", 1),)


def test_code_never_in_both_missing_and_extra():
    expected = [ExpectedItem("A", "a", 5), ExpectedItem("B", "b", 2), ExpectedItem("C", "c", 1)]
    scanned = [
        ScannedItem("A", "a", 2),
        ScannedItem("B", "b", 1),
        ScannedItem("B", "b", 4),
        ScannedItem("D", "d", 1),
        ScannedItem("A", "a", 1),
    ]

    report = reconcile(expected, scanned)

    missing_codes = {m.code for m in report.missing}
    extra_codes = {e.code for e in report.extra}
    assert missing_codes.isdisjoint(extra_codes)
    assert report.missing == (MissingEntry("A", "a", 5, 3), MissingEntry("C", "c", 1, 0))
    assert report.extra == (ExtraEntry("B", "b", 3), ExtraEntry("D", "d", 1))


def test_ordering_follows_inputs():
    expected = [ExpectedItem("Z", "z", 1), ExpectedItem("M", "m", 1), ExpectedItem("A", "a", 1)]
    scanned = [ScannedItem("Y", "y", 1), ScannedItem("B", "b", 2), ScannedItem("X", "x", 1)]

    report = reconcile(expected, scanned)

    assert [m.code for m in report.missing] == ["Z", "M", "A"]
    assert [e.code for e in report.extra] == ["Y", "B", "X"]


def test_zero_expected_quantity_makes_any_scan_extra():
    report = reconcile([ExpectedItem("A", "W", 0)], [ScannedItem("A", "W", 2)])

    assert report.missing == ()
    assert report.extra == (ExtraEntry("A", "W", 2),)


def test_non_positive_scans_are_ignored():
    report = reconcile(
        [ExpectedItem("A", "W", 2)],
        [ScannedItem("A", "W", 0), ScannedItem("B", "G", -3)],
    )

    assert report.missing == (MissingEntry("A", "W", 2, 0),)
    assert report.extra == ()


def test_reconcile_is_deterministic_and_does_not_mutate_inputs():
    expected = [ExpectedItem("A", "W", 5), ExpectedItem("B", "G", 1)]
    scanned = [ScannedItem("A", "W", 7), ScannedItem("C", "X", 1)]
    expected_copy, scanned_copy = list(expected), list(scanned)

    first = reconcile(expected, scanned)
    second = reconcile(expected, scanned)

    assert first == second
    assert first is not second
    assert expected == expected_copy
    assert scanned == scanned_copy


def test_non_list_arguments_fail_fast():
    with pytest.raises(TypeError):
        reconcile([ExpectedItem("A", "W", 1)], "A")
    with pytest.raises(TypeError):
        reconcile({"A": 1}, [])


def test_merge_scans_sums_quantities_in_first_seen_order():
    merged = merge_scans(
        [
            ScannedItem("B", "Gadget", 1),
            ScannedItem("A", "Widget", 2),
            ScannedItem("B", "Gadget (dup label)", 3),
        ]
    )

    assert merged == [ScannedItem("B", "Gadget", 4), ScannedItem("A", "Widget", 2)]


def test_report_to_dict_includes_reason_only_when_set():
    report = reconcile([ExpectedItem("A", "W", 3)], [ScannedItem("A", "W", 1), ScannedItem("B", "G", 2)])

    assert report.to_dict() == {
        "missing": [{"code": "A", "description": "W", "expected": 3, "scanned": 1}],
        "extra": [{"code": "B", "description": "G", "quantity": 2}],
    }
