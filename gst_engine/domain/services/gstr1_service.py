# gst_engine/domain/services/gstr1_service.py
"""
GSTR-1 builder.

Each outward document lands in exactly one bucket:

- Credit / debit notes -> CDNR (registered recipient) or CDNUR
- B2B  -> b2b,  grouped by recipient GSTIN
- B2CL -> b2cl, grouped by place of supply
- B2C  -> b2cs, summed per (supply type, place of supply, rate)
- EXP  -> exp,  grouped by WPAY / WOPAY
- NIL  -> nil.inv, summed per supply type

Every line of every document is also counted once in the HSN summary.
Amounts come from the tax calculator, so each line carries the same rounded
values the invoice prints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from gst_engine.core.errors import ReturnGenerationError
from gst_engine.domain.constants import B2CL_THRESHOLD, GSTInvoiceType, GSTTransactionType
from gst_engine.domain.models.gst import ZERO, Invoice, InvoiceTaxResult, LineItemTax
from gst_engine.domain.models.gstr1 import (
    Gstr1B2BEntry,
    Gstr1B2BInv,
    Gstr1B2CLEntry,
    Gstr1B2CLInv,
    Gstr1B2CSEntry,
    Gstr1CDNREntry,
    Gstr1CDNUREntry,
    Gstr1ExpEntry,
    Gstr1ExpInv,
    Gstr1HSNEntry,
    Gstr1Item,
    Gstr1ItemDetail,
    Gstr1Nil,
    Gstr1NilSupply,
    Gstr1Note,
    Gstr1Return,
)
from gst_engine.domain.services.gstin_pan_validation import (
    format_gst_date,
    is_intra_state,
    is_valid_return_period,
)
from gst_engine.domain.services.tax_calculator import calculate_invoice_tax

logger = logging.getLogger("gstr1_service")

UNCLASSIFIED_HSN = "000000"
DEFAULT_SHIPPING_BILL = "000000"
HSN_DESC_MAX = 30


@dataclass
class _Buckets:
    """Per-call accumulator; dict keys keep first-seen order."""

    b2b: dict[str, Gstr1B2BEntry] = field(default_factory=dict)
    b2cl: dict[str, Gstr1B2CLEntry] = field(default_factory=dict)
    b2cs: dict[tuple[str, str, Decimal], Gstr1B2CSEntry] = field(default_factory=dict)
    exp: dict[str, Gstr1ExpEntry] = field(default_factory=dict)
    cdnr: dict[str, Gstr1CDNREntry] = field(default_factory=dict)
    cdnur: dict[tuple[str, str | None], Gstr1CDNUREntry] = field(default_factory=dict)
    nil: dict[str, Gstr1NilSupply] = field(default_factory=dict)
    hsn: dict[str, Gstr1HSNEntry] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Item helpers
# ---------------------------------------------------------------------------


def _full_detail(rate: Decimal, calc: LineItemTax) -> Gstr1ItemDetail:
    return Gstr1ItemDetail(
        rt=rate, txval=calc.taxable_amount,
        iamt=calc.igst, camt=calc.cgst, samt=calc.sgst, csamt=calc.cess,
    )


def _igst_detail(rate: Decimal, calc: LineItemTax) -> Gstr1ItemDetail:
    return Gstr1ItemDetail(rt=rate, txval=calc.taxable_amount, iamt=calc.igst, csamt=calc.cess)


def _export_detail(rate: Decimal, calc: LineItemTax) -> Gstr1ItemDetail:
    return Gstr1ItemDetail(rt=rate, txval=calc.taxable_amount, csamt=calc.cess)


def _items(invoice: Invoice, calc: InvoiceTaxResult, detail) -> list[Gstr1Item]:
    return [
        Gstr1Item(num=item.serial_no, itm_det=detail(item.gst_rate, line))
        for item, line in zip(invoice.line_items, calc.line_items)
    ]


# ---------------------------------------------------------------------------
# Bucket writers
# ---------------------------------------------------------------------------


def _add_b2b(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    if not invoice.customer_gstin:
        raise ReturnGenerationError(
            "Customer GSTIN required for B2B transaction",
            details={"invoice_number": invoice.invoice_number},
        )
    entry = buckets.b2b.setdefault(invoice.customer_gstin, Gstr1B2BEntry(ctin=invoice.customer_gstin))
    entry.inv.append(
        Gstr1B2BInv(
            inum=invoice.invoice_number,
            idt=format_gst_date(invoice.invoice_date),
            val=calc.totals.total_invoice_amount,
            pos=invoice.place_of_supply,
            rchrg="Y" if invoice.reverse_charge else "N",
            inv_typ="SEWP" if invoice.invoice_type == GSTInvoiceType.SEZ_INVOICE else "R",
            etin=invoice.ecommerce_gstin,
            itms=_items(invoice, calc, _full_detail),
        )
    )


def _add_b2cl(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    entry = buckets.b2cl.setdefault(invoice.place_of_supply, Gstr1B2CLEntry(pos=invoice.place_of_supply))
    entry.inv.append(
        Gstr1B2CLInv(
            inum=invoice.invoice_number,
            idt=format_gst_date(invoice.invoice_date),
            val=calc.totals.total_invoice_amount,
            etin=invoice.ecommerce_gstin,
            itms=_items(invoice, calc, _igst_detail),
        )
    )


def _add_b2cs(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    # Invoice identity is not reported for small B2C supplies, only the sums
    sply_ty = "INTER" if calc.is_inter_state else "INTRA"
    for item, line in zip(invoice.line_items, calc.line_items):
        key = (sply_ty, invoice.place_of_supply, item.gst_rate)
        entry = buckets.b2cs.get(key)
        if entry is None:
            entry = Gstr1B2CSEntry(sply_ty=sply_ty, pos=invoice.place_of_supply, rt=item.gst_rate)
            buckets.b2cs[key] = entry
        entry.txval += line.taxable_amount
        entry.iamt += line.igst
        entry.camt += line.cgst
        entry.samt += line.sgst
        entry.csamt += line.cess


def _add_export(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    exp_typ = "WPAY" if invoice.export_with_payment else "WOPAY"
    entry = buckets.exp.setdefault(exp_typ, Gstr1ExpEntry(exp_typ=exp_typ))
    entry.inv.append(
        Gstr1ExpInv(
            inum=invoice.invoice_number,
            idt=format_gst_date(invoice.invoice_date),
            val=calc.totals.total_invoice_amount,
            sbpcode=invoice.shipping_bill_port_code or DEFAULT_SHIPPING_BILL,
            sbnum=invoice.shipping_bill_number or DEFAULT_SHIPPING_BILL,
            sbdt=format_gst_date(invoice.shipping_bill_date or invoice.invoice_date),
            itms=_items(invoice, calc, _export_detail),
        )
    )


def _add_nil(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    scope = "INTER" if calc.is_inter_state else "INTR"
    party = "B2B" if invoice.customer_gstin else "B2C"
    sply_ty = f"{scope}{party}"
    entry = buckets.nil.setdefault(sply_ty, Gstr1NilSupply(sply_ty=sply_ty))
    value = calc.totals.total_taxable_amount
    # Bill of supply covers exempt goods; everything else here is nil-rated
    if invoice.invoice_type == GSTInvoiceType.BILL_OF_SUPPLY:
        entry.expt_amt += value
    else:
        entry.nil_amt += value


def _add_note(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    registered = bool(invoice.customer_gstin)
    note = Gstr1Note(
        ntty="C" if invoice.invoice_type == GSTInvoiceType.CREDIT_NOTE else "D",
        nt_num=invoice.invoice_number,
        nt_dt=format_gst_date(invoice.invoice_date),
        val=calc.totals.total_invoice_amount,
        p_gst="Y" if invoice.pre_gst else "N",
        rsn=invoice.note_reason,
        inum=invoice.original_invoice_number,
        idt=format_gst_date(invoice.original_invoice_date) if invoice.original_invoice_date else None,
        pos=invoice.place_of_supply,
        itms=_items(invoice, calc, _full_detail if registered else _igst_detail),
    )

    if registered:
        entry = buckets.cdnr.setdefault(invoice.customer_gstin, Gstr1CDNREntry(ctin=invoice.customer_gstin))
        entry.nt.append(note)
        return

    if invoice.transaction_type == GSTTransactionType.EXPORT:
        typ, pos = ("EXPWP" if invoice.export_with_payment else "EXPWOP"), None
    else:
        typ, pos = "B2CL", invoice.place_of_supply
    entry = buckets.cdnur.setdefault((typ, pos), Gstr1CDNUREntry(typ=typ, pos=pos))
    entry.nt.append(note)


def _add_hsn(buckets: _Buckets, invoice: Invoice, calc: InvoiceTaxResult) -> None:
    for item, line in zip(invoice.line_items, calc.line_items):
        code = item.hsn_sac or UNCLASSIFIED_HSN
        entry = buckets.hsn.get(code)
        if entry is None:
            entry = Gstr1HSNEntry(
                num=len(buckets.hsn) + 1,
                hsn_sc=code,
                desc=item.description[:HSN_DESC_MAX],
                uqc=item.unit.upper(),
            )
            buckets.hsn[code] = entry
        entry.qty += item.quantity
        entry.val += line.total_amount
        entry.txval += line.taxable_amount
        entry.iamt += line.igst
        entry.camt += line.cgst
        entry.samt += line.sgst
        entry.csamt += line.cess


_DISPATCH = {
    GSTTransactionType.B2B: _add_b2b,
    GSTTransactionType.B2CL: _add_b2cl,
    GSTTransactionType.B2C: _add_b2cs,
    GSTTransactionType.EXPORT: _add_export,
    GSTTransactionType.NIL: _add_nil,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def generate_gstr1(gstin: str, period: str, invoices: Iterable[Invoice]) -> Gstr1Return:
    """
    Build GSTR-1 for ``gstin`` and filing period ``period`` (MMYYYY).

    Raises ReturnGenerationError for a bad period, a B2B invoice without a
    recipient GSTIN, or any failure while computing the documents.
    """
    if not is_valid_return_period(period):
        raise ReturnGenerationError("Invalid return period format. Use MMYYYY", details={"period": period})

    buckets = _Buckets()
    count = 0
    try:
        for invoice in invoices:
            calc = calculate_invoice_tax(invoice)
            if invoice.is_note:
                _add_note(buckets, invoice, calc)
            else:
                _DISPATCH[invoice.transaction_type](buckets, invoice, calc)
            _add_hsn(buckets, invoice, calc)
            count += 1
    except ReturnGenerationError:
        raise
    except Exception as e:
        logger.exception("GSTR-1 generation failed for %s %s", gstin, period)
        raise ReturnGenerationError("Failed to generate GSTR-1 return", details={"error": str(e)}) from e

    logger.info(
        "GSTR-1 %s %s: %d documents, %d b2b parties, %d b2cs rows, %d hsn rows",
        gstin, period, count, len(buckets.b2b), len(buckets.b2cs), len(buckets.hsn),
    )
    return Gstr1Return(
        gstin=gstin,
        ret_period=period,
        b2b=list(buckets.b2b.values()),
        b2cl=list(buckets.b2cl.values()),
        b2cs=list(buckets.b2cs.values()),
        exp=list(buckets.exp.values()),
        cdnr=list(buckets.cdnr.values()),
        cdnur=list(buckets.cdnur.values()),
        nil=Gstr1Nil(inv=list(buckets.nil.values())),
        hsn=list(buckets.hsn.values()),
    )


def infer_transaction_type(
    customer_gstin: str | None,
    supplier_state: str,
    customer_state: str,
    invoice_value,
    is_export: bool = False,
    is_nil_rated: bool = False,
) -> GSTTransactionType:
    """
    GSTR-1 category for an outward supply.

    Unregistered inter-state invoices above 2.5 lakh are B2CL; other
    unregistered supplies are B2C (reported in B2CS).
    """
    if is_export:
        return GSTTransactionType.EXPORT
    if is_nil_rated:
        return GSTTransactionType.NIL
    if customer_gstin:
        return GSTTransactionType.B2B
    value = invoice_value if isinstance(invoice_value, Decimal) else Decimal(str(invoice_value))
    if not is_intra_state(supplier_state, customer_state) and value > B2CL_THRESHOLD:
        return GSTTransactionType.B2CL
    return GSTTransactionType.B2C


def gstr1_totals(ret: Gstr1Return) -> dict[str, Decimal]:
    """Taxable value and tax across every invoice bucket (notes excluded)."""
    totals = {"txval": ZERO, "iamt": ZERO, "camt": ZERO, "samt": ZERO, "csamt": ZERO}

    def add(det: Gstr1ItemDetail) -> None:
        totals["txval"] += det.txval
        totals["iamt"] += det.iamt or ZERO
        totals["camt"] += det.camt or ZERO
        totals["samt"] += det.samt or ZERO
        totals["csamt"] += det.csamt

    for b2b in ret.b2b:
        for inv in b2b.inv:
            for it in inv.itms:
                add(it.itm_det)
    for b2cl in ret.b2cl:
        for inv in b2cl.inv:
            for it in inv.itms:
                add(it.itm_det)
    for exp in ret.exp:
        for inv in exp.inv:
            for it in inv.itms:
                add(it.itm_det)
    for row in ret.b2cs:
        totals["txval"] += row.txval
        totals["iamt"] += row.iamt
        totals["camt"] += row.camt
        totals["samt"] += row.samt
        totals["csamt"] += row.csamt
    return totals
