# gst_engine/domain/services/return_validation.py
"""
Structural checks on generated returns before export.

These never raise: every problem found is reported in ValidationResult.errors.
"""

from __future__ import annotations

from decimal import Decimal

from gst_engine.domain.models.gst import ZERO, ValidationResult
from gst_engine.domain.models.gstr1 import Gstr1Return
from gst_engine.domain.models.gstr3b import Gstr3bItcRow, Gstr3bReturn
from gst_engine.domain.services.gstin_pan_validation import GSTIN_REGEX, is_valid_return_period

ITC_TOLERANCE = Decimal("0.01")


def _check_header(gstin: str, period: str, errors: list[str]) -> None:
    if not gstin or not GSTIN_REGEX.match(gstin):
        errors.append("Invalid GSTIN format")
    if not is_valid_return_period(period):
        errors.append("Invalid return period format")


def _check_invoices(section: str, invoices, errors: list[str]) -> None:
    for inv in invoices:
        if not inv.inum or not inv.inum.strip():
            errors.append(f"Missing invoice number in {section} entry")
        if not inv.itms:
            errors.append(f"No line items in invoice: {inv.inum}")


def validate_gstr1(ret: Gstr1Return) -> ValidationResult:
    errors: list[str] = []
    _check_header(ret.gstin, ret.ret_period, errors)

    for entry in ret.b2b:
        if not entry.ctin or not GSTIN_REGEX.match(entry.ctin):
            errors.append(f"Invalid customer GSTIN in B2B: {entry.ctin}")
        _check_invoices("B2B", entry.inv, errors)

    for entry in ret.b2cl:
        _check_invoices("B2CL", entry.inv, errors)

    for entry in ret.exp:
        _check_invoices("EXP", entry.inv, errors)

    for entry in ret.cdnr:
        if not entry.ctin or not GSTIN_REGEX.match(entry.ctin):
            errors.append(f"Invalid customer GSTIN in CDNR: {entry.ctin}")
        for note in entry.nt:
            if not note.itms:
                errors.append(f"No line items in note: {note.nt_num}")

    for entry in ret.hsn:
        if not entry.hsn_sc or len(entry.hsn_sc) < 2:
            errors.append(f"Invalid HSN code: {entry.hsn_sc}")
        if entry.qty <= ZERO:
            errors.append(f"Invalid quantity for HSN {entry.hsn_sc}")

    return ValidationResult(is_valid=not errors, errors=errors)


def _sum(rows: list[Gstr3bItcRow], attr: str) -> Decimal:
    return sum((getattr(r, attr) for r in rows), ZERO)


def validate_gstr3b(ret: Gstr3bReturn) -> ValidationResult:
    errors: list[str] = []
    _check_header(ret.gstin, ret.ret_period, errors)

    itc = ret.itc_elg
    for attr, label in (("iamt", "IGST"), ("camt", "CGST"), ("samt", "SGST"), ("csamt", "cess")):
        expected = _sum(itc.itc_avl, attr) - _sum(itc.itc_rev, attr)
        if abs(getattr(itc.itc_net, attr) - expected) > ITC_TOLERANCE:
            errors.append(f"ITC net {label} calculation mismatch")

    return ValidationResult(is_valid=not errors, errors=errors)
