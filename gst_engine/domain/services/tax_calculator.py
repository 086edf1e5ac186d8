# gst_engine/domain/services/tax_calculator.py
"""
GST computation for amounts, line items and whole invoices.

Rounding: each component (taxable, IGST, each CGST / SGST half, cess) is
computed from the unrounded base and rounded to paise (ROUND_HALF_UP) once.
Every total is summed from the rounded components, so invoice totals equal
the sum of what is printed on each line.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping

from gst_engine.core.errors import TaxCalculationError
from gst_engine.domain.constants import DEFAULT_GST_RATE, GST_RATES, MAX_GST_RATE
from gst_engine.domain.models.gst import (
    ZERO,
    Invoice,
    InvoiceLineItem,
    InvoiceTaxResult,
    InvoiceTotals,
    LineItemTax,
    TaxBreakdown,
)
from gst_engine.domain.services.gstin_pan_validation import format_amount, is_intra_state
from gst_engine.domain.services.hsn_registry import get_hsn_registry

logger = logging.getLogger("tax_calculator")

_HUNDRED = Decimal("100")
_TWO = Decimal("2")
DEFAULT_TDS_RATE = Decimal("2")

# Chapter fallback when the registry has no entry for the code or its prefixes
_CHAPTER_FALLBACK_RATES: tuple[tuple[frozenset[str], Decimal], ...] = (
    (frozenset({"01", "02", "03", "04", "07", "08", "10"}), GST_RATES["EXEMPT"]),
    (frozenset({"11", "15", "17", "19", "20", "21"}), GST_RATES["GST_5"]),
    (frozenset({"25", "27", "28", "29", "30"}), GST_RATES["GST_12"]),
    (frozenset({"84", "85", "87", "90"}), GST_RATES["GST_18"]),
    (frozenset({"22", "24", "33", "34"}), GST_RATES["GST_28"]),
)


def _dec(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _check_rate(gst_rate: Decimal) -> None:
    if gst_rate < ZERO or gst_rate > MAX_GST_RATE:
        raise TaxCalculationError(
            "GST rate must be between 0 and 50", details={"gst_rate": str(gst_rate)}
        )


# ---------------------------------------------------------------------------
# Core computation
# ---------------------------------------------------------------------------


def calculate_tax(
    amount,
    gst_rate,
    is_inclusive: bool = False,
    is_inter_state: bool = False,
    cess_rate=ZERO,
    apply_reverse_charge: bool = False,
) -> TaxBreakdown:
    """
    GST breakdown for a single amount.

    Inclusive amounts are grossed down by (1 + (gst_rate + cess_rate)/100).
    Cess is never split. Inter-state GST is IGST; intra-state GST is split
    equally into CGST and SGST.

    ``apply_reverse_charge`` does not change the amounts: under reverse
    charge the same tax is computed and the recipient pays it.
    """
    amount = _dec(amount)
    gst_rate = _dec(gst_rate)
    cess_rate = _dec(cess_rate)

    if amount <= ZERO:
        raise TaxCalculationError("Amount must be positive", details={"amount": str(amount)})
    _check_rate(gst_rate)
    if cess_rate < ZERO:
        raise TaxCalculationError("Cess rate cannot be negative", details={"cess_rate": str(cess_rate)})

    if is_inclusive:
        base = amount / (1 + (gst_rate + cess_rate) / _HUNDRED)
    else:
        base = amount

    # Tax is computed on the unrounded base; only the outputs are rounded
    raw_gst = base * gst_rate / _HUNDRED
    taxable = format_amount(base)
    cess = format_amount(base * cess_rate / _HUNDRED)

    if is_inter_state:
        igst, cgst, sgst = format_amount(raw_gst), ZERO, ZERO
    else:
        half = format_amount(raw_gst / _TWO)
        igst, cgst, sgst = ZERO, half, half

    total_tax = cgst + sgst + igst + cess

    return TaxBreakdown(
        taxable_amount=taxable,
        cgst=cgst,
        sgst=sgst,
        igst=igst,
        cess=cess,
        total_tax=total_tax,
        total_amount=taxable + total_tax,
        gst_rate=gst_rate,
        cess_rate=cess_rate,
        is_inter_state=is_inter_state,
        is_inclusive=is_inclusive,
    )


def calculate_line_item_tax(
    item: InvoiceLineItem,
    supplier_state: str,
    customer_state: str,
    apply_reverse_charge: bool = False,
) -> LineItemTax:
    """Tax for one line: qty x price, less percentage discount, then calculate_tax."""
    if item.quantity <= ZERO:
        raise TaxCalculationError("Quantity must be positive", details={"serial_no": item.serial_no})

    gross = item.quantity * item.unit_price
    discount = gross * item.discount / _HUNDRED
    line_total = gross - discount

    breakdown = calculate_tax(
        line_total,
        item.gst_rate,
        is_inclusive=False,
        is_inter_state=not is_intra_state(supplier_state, customer_state),
        cess_rate=item.cess_rate,
        apply_reverse_charge=apply_reverse_charge,
    )
    return LineItemTax(**breakdown.model_dump(), line_total=format_amount(line_total))


def calculate_invoice_tax(invoice: Invoice) -> InvoiceTaxResult:
    """Per-line breakdowns plus invoice totals summed from the rounded lines."""
    inter_state = not is_intra_state(invoice.supplier_state, invoice.customer_state)

    lines = [
        calculate_line_item_tax(
            item,
            invoice.supplier_state,
            invoice.customer_state,
            apply_reverse_charge=invoice.reverse_charge,
        )
        for item in invoice.line_items
    ]

    totals = InvoiceTotals(
        total_taxable_amount=sum((l.taxable_amount for l in lines), ZERO),
        total_cgst=sum((l.cgst for l in lines), ZERO),
        total_sgst=sum((l.sgst for l in lines), ZERO),
        total_igst=sum((l.igst for l in lines), ZERO),
        total_cess=sum((l.cess for l in lines), ZERO),
        total_tax=sum((l.total_tax for l in lines), ZERO),
        total_invoice_amount=sum((l.total_amount for l in lines), ZERO),
    )
    return InvoiceTaxResult(line_items=lines, totals=totals, is_inter_state=inter_state)


@dataclass
class ReverseGSTResult:
    taxable_amount: Decimal
    gst_amount: Decimal

    def to_dict(self) -> dict:
        return {"taxable_amount": float(self.taxable_amount), "gst_amount": float(self.gst_amount)}


def calculate_reverse_gst(inclusive_amount, gst_rate) -> ReverseGSTResult:
    """Split a GST-inclusive amount into its taxable base and GST."""
    inclusive_amount = _dec(inclusive_amount)
    gst_rate = _dec(gst_rate)
    if inclusive_amount <= ZERO:
        raise TaxCalculationError("Amount must be positive")
    _check_rate(gst_rate)

    taxable = format_amount(inclusive_amount / (1 + gst_rate / _HUNDRED))
    return ReverseGSTResult(taxable_amount=taxable, gst_amount=format_amount(inclusive_amount - taxable))


# ---------------------------------------------------------------------------
# Rate resolution
# ---------------------------------------------------------------------------


def get_applicable_gst_rate(hsn_sac: str | None = None) -> Decimal:
    """Registry rate (exact or longest prefix), else the chapter fallback, else 18%."""
    if not hsn_sac:
        return DEFAULT_GST_RATE

    rate = get_hsn_registry().get_recommended_rate(hsn_sac)
    if rate is not None:
        return rate

    chapter = hsn_sac[:2]
    for chapters, chapter_rate in _CHAPTER_FALLBACK_RATES:
        if chapter in chapters:
            return chapter_rate
    return DEFAULT_GST_RATE


def calculate_composite_rate(supplies: Iterable[Mapping]) -> Decimal:
    """Value-weighted average rate of mixed supplies ({"amount", "gst_rate"})."""
    supplies = list(supplies)
    if not supplies:
        raise TaxCalculationError("No supplies provided")

    total = sum((_dec(s["amount"]) for s in supplies), ZERO)
    if total <= ZERO:
        raise TaxCalculationError("Total amount must be positive")

    weighted = sum((_dec(s["amount"]) * _dec(s["gst_rate"]) for s in supplies), ZERO)
    return format_amount(weighted / total)


@dataclass
class TDSResult:
    gst_amount: Decimal
    tds_amount: Decimal
    net_payable: Decimal

    def to_dict(self) -> dict:
        return {
            "gst_amount": float(self.gst_amount),
            "tds_amount": float(self.tds_amount),
            "net_payable": float(self.net_payable),
        }


def calculate_tds_on_gst(taxable_amount, gst_rate, tds_rate=DEFAULT_TDS_RATE) -> TDSResult:
    """TDS deducted on the GST portion (2% by default)."""
    taxable_amount = _dec(taxable_amount)
    if taxable_amount <= ZERO:
        raise TaxCalculationError("Taxable amount must be positive")

    gst = format_amount(taxable_amount * _dec(gst_rate) / _HUNDRED)
    tds = format_amount(gst * _dec(tds_rate) / _HUNDRED)
    return TDSResult(gst_amount=gst, tds_amount=tds, net_payable=taxable_amount + gst - tds)


# ---------------------------------------------------------------------------
# Custom rate overrides
# ---------------------------------------------------------------------------


class GSTRateManager:
    """Per-code rate overrides on top of get_applicable_gst_rate."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._custom_rates: dict[str, Decimal] = {}

    def set_custom_rate(self, hsn_sac: str, rate) -> None:
        rate = _dec(rate)
        _check_rate(rate)
        with self._lock:
            self._custom_rates[hsn_sac.lower()] = rate
        logger.info("Custom GST rate %s%% set for %s", rate, hsn_sac)

    def get_rate(self, hsn_sac: str) -> Decimal:
        with self._lock:
            custom = self._custom_rates.get(hsn_sac.lower())
        if custom is not None:
            return custom
        return get_applicable_gst_rate(hsn_sac)

    def clear_custom_rates(self) -> None:
        with self._lock:
            self._custom_rates.clear()

    def get_all_standard_rates(self) -> dict[str, Decimal]:
        return dict(GST_RATES)


_rate_manager: GSTRateManager | None = None


def get_rate_manager() -> GSTRateManager:
    """Process-wide override table."""
    global _rate_manager
    if _rate_manager is None:
        _rate_manager = GSTRateManager()
    return _rate_manager
