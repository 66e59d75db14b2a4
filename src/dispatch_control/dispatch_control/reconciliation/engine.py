"""Order reconciliation: compare what was scanned against what was expected.

Everything here is pure. Nothing touches storage, so the functions are safe to
call from any request thread.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Mapping, Optional, Sequence

from ..core.enums import MissingReason
from ..core.exceptions import ValidationError
from .model import DiscrepancyReport, ExpectedItem, ExtraEntry, MissingEntry, ScannedItem


def merge_scans(scanned: Sequence[ScannedItem]) -> list[ScannedItem]:
    """Collapse repeated codes into one entry, summing quantities.

    Order is first-seen order and the first name seen for a code wins.
    Entries with a non-positive quantity are dropped.
    """
    merged: dict[str, ScannedItem] = {}
    for item in scanned:
        if item.quantity <= 0:
            continue
        prev = merged.get(item.code)
        if prev is None:
            merged[item.code] = item
        else:
            merged[item.code] = replace(prev, quantity=prev.quantity + item.quantity)
    return list(merged.values())


def reconcile(
    expected: Optional[Sequence[ExpectedItem]],
    scanned: Sequence[ScannedItem],
) -> DiscrepancyReport:
    """Build the discrepancy report of ``scanned`` against ``expected``.

    ``expected=None`` means no order was loaded, in which case there is
    nothing to reconcile and the report is empty. Missing entries follow the
    order of ``expected``; extra entries follow the order of ``scanned``. For
    a code scanned beyond its expected quantity only the surplus is reported.
    """
    if not isinstance(scanned, (list, tuple)):
        raise TypeError(f"scanned must be a list, got {type(scanned).__name__}")
    if expected is None:
        return DiscrepancyReport()
    if not isinstance(expected, (list, tuple)):
        raise TypeError(f"expected must be a list or None, got {type(expected).__name__}")

    scans = merge_scans(scanned)
    scanned_by_code = {s.code: s for s in scans}
    expected_by_code: dict[str, ExpectedItem] = {}
    for e in expected:
        expected_by_code.setdefault(e.code, e)

    missing: list[MissingEntry] = []
    for e in expected_by_code.values():
        match = scanned_by_code.get(e.code)
        scanned_qty = match.quantity if match else 0
        if scanned_qty < e.quantity:
            missing.append(
                MissingEntry(
                    code=e.code,
                    description=e.description,
                    expected=e.quantity,
                    scanned=scanned_qty,
                )
            )

    extra: list[ExtraEntry] = []
    for s in scans:
        match = expected_by_code.get(s.code)
        if match is None:
            extra.append(ExtraEntry(code=s.code, description=s.name, quantity=s.quantity))
        elif s.quantity > match.quantity:
            extra.append(ExtraEntry(code=s.code, description=s.name, quantity=s.quantity - match.quantity))

    return DiscrepancyReport(missing=tuple(missing), extra=tuple(extra))


def apply_clarification(
    report: DiscrepancyReport,
    clarification: Optional[str],
    missing_reasons: Optional[Mapping[str, str]],
) -> DiscrepancyReport:
    """Gate a submission on the operator's explanation of its discrepancies.

    A report without discrepancies passes through untouched. Otherwise a
    non-blank clarification is required and every missing code needs a
    reason; the returned report carries those reasons.
    """
    if not report.has_discrepancies:
        return report

    if not isinstance(clarification, str) or not clarification.strip():
        raise ValidationError("A clarification is required when there are discrepancies")

    reasons = missing_reasons or {}
    if not isinstance(reasons, Mapping):
        raise ValidationError("missingReasons must be an object keyed by product code")

    resolved: list[MissingEntry] = []
    for entry in report.missing:
        raw = reasons.get(entry.code)
        if not raw:
            raise ValidationError(f"Missing item {entry.code} needs a reason")
        try:
            reason = MissingReason(raw)
        except ValueError:
            raise ValidationError(f"Invalid reason for {entry.code}: {raw!r}")
        resolved.append(replace(entry, reason=reason))

    return replace(report, missing=tuple(resolved))
