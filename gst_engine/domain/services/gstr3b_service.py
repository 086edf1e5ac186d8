# gst_engine/domain/services/gstr3b_service.py
"""
GSTR-3B summary return.

generate_gstr3b is pure aggregation over caller-supplied totals.
summarize_outward_supplies derives the outward totals from invoices when the
caller has the documents rather than the figures.
"""

from __future__ import annotations

import logging
from typing import Iterable

from gst_engine.core.errors import ReturnGenerationError
from gst_engine.domain.constants import GSTInvoiceType, GSTTransactionType
from gst_engine.domain.models.gst import (
    InterStateSupply,
    InwardSupplies,
    Invoice,
    ItcData,
    OutwardSummary,
    SupplyTotals,
    TaxComponents,
)
from gst_engine.domain.models.gstr3b import (
    Gstr3bInterSup,
    Gstr3bInwardRow,
    Gstr3bInwardSup,
    Gstr3bItcAmounts,
    Gstr3bItcElg,
    Gstr3bItcRow,
    Gstr3bReturn,
    Gstr3bSupDetails,
    Gstr3bTaxRow,
    Gstr3bValueOnly,
    Gstr3bZeroRated,
)
from gst_engine.domain.services.gstin_pan_validation import format_amount, is_valid_return_period
from gst_engine.domain.services.tax_calculator import calculate_invoice_tax

logger = logging.getLogger("gstr3b_service")


def _tax_row(s: SupplyTotals) -> Gstr3bTaxRow:
    return Gstr3bTaxRow(
        txval=format_amount(s.taxable),
        iamt=format_amount(s.igst),
        camt=format_amount(s.cgst),
        samt=format_amount(s.sgst),
        csamt=format_amount(s.cess),
    )


def _itc_row(ty: str, c: TaxComponents) -> Gstr3bItcRow:
    return Gstr3bItcRow(
        ty=ty,
        iamt=format_amount(c.igst),
        camt=format_amount(c.cgst),
        samt=format_amount(c.sgst),
        csamt=format_amount(c.cess),
    )


def _as_summary(outward: OutwardSummary | SupplyTotals) -> OutwardSummary:
    if isinstance(outward, OutwardSummary):
        return outward
    return OutwardSummary(taxable=outward)


def generate_gstr3b(
    gstin: str,
    period: str,
    outward: OutwardSummary | SupplyTotals,
    inward: InwardSupplies | None = None,
    itc: ItcData | None = None,
) -> Gstr3bReturn:
    """
    Assemble GSTR-3B tables 3.1, 3.2, 4 and 5.

    ``outward`` may be plain taxable totals or a full OutwardSummary.
    ITC net is available minus reversed, per component.
    """
    if not is_valid_return_period(period):
        raise ReturnGenerationError("Invalid return period format. Use MMYYYY", details={"period": period})

    outward = _as_summary(outward)
    inward = inward or InwardSupplies()
    itc = itc or ItcData()

    avl, rev = itc.available, itc.reversed
    net = Gstr3bItcAmounts(
        iamt=format_amount(avl.igst - rev.igst),
        camt=format_amount(avl.cgst - rev.cgst),
        samt=format_amount(avl.sgst - rev.sgst),
        csamt=format_amount(avl.cess - rev.cess),
    )

    inelg = []
    ie = itc.ineligible
    if any((ie.igst, ie.cgst, ie.sgst, ie.cess)):
        inelg.append(_itc_row("RUL", ie))

    ret = Gstr3bReturn(
        gstin=gstin,
        ret_period=period,
        sup_details=Gstr3bSupDetails(
            osup_det=_tax_row(outward.taxable),
            osup_zero=Gstr3bZeroRated(
                txval=format_amount(outward.zero_rated.taxable),
                iamt=format_amount(outward.zero_rated.igst),
                csamt=format_amount(outward.zero_rated.cess),
            ),
            osup_nil_exmp=Gstr3bValueOnly(txval=format_amount(outward.nil_exempt)),
            isup_rev=_tax_row(inward.reverse_charge),
            osup_nongst=Gstr3bValueOnly(),
        ),
        inter_sup=Gstr3bInterSup(unreg_details=list(outward.unregistered_inter_state)),
        itc_elg=Gstr3bItcElg(
            itc_avl=[_itc_row("ISRC", avl)],
            itc_rev=[_itc_row("RUL", rev)],
            itc_net=net,
            itc_inelg=inelg,
        ),
        inward_sup=Gstr3bInwardSup(
            isup_details=[Gstr3bInwardRow(ty="GST"), Gstr3bInwardRow(ty="NONGST")],
        ),
    )
    logger.info("GSTR-3B %s %s: outward txval=%s", gstin, period, ret.sup_details.osup_det.txval)
    return ret


def summarize_outward_supplies(invoices: Iterable[Invoice]) -> OutwardSummary:
    """
    Outward totals for table 3.1 / 3.2 from a period's invoices.

    Credit notes reduce and debit notes increase the taxable bucket. Supplies
    on which the recipient pays tax under reverse charge count their value
    only. Inter-state supplies to unregistered persons are also listed per
    place of supply.
    """
    summary = OutwardSummary()
    unreg: dict[str, InterStateSupply] = {}

    for invoice in invoices:
        calc = calculate_invoice_tax(invoice)
        t = calc.totals
        sign = -1 if invoice.invoice_type == GSTInvoiceType.CREDIT_NOTE else 1

        if invoice.transaction_type == GSTTransactionType.NIL:
            summary.nil_exempt += sign * t.total_taxable_amount
            continue

        if invoice.transaction_type == GSTTransactionType.EXPORT:
            bucket = summary.zero_rated
        else:
            bucket = summary.taxable

        bucket.taxable += sign * t.total_taxable_amount
        if not invoice.reverse_charge:
            bucket.igst += sign * t.total_igst
            bucket.cgst += sign * t.total_cgst
            bucket.sgst += sign * t.total_sgst
            bucket.cess += sign * t.total_cess

        if (
            calc.is_inter_state
            and not invoice.customer_gstin
            and invoice.transaction_type in (GSTTransactionType.B2C, GSTTransactionType.B2CL)
        ):
            row = unreg.setdefault(invoice.place_of_supply, InterStateSupply(pos=invoice.place_of_supply))
            row.txval += sign * t.total_taxable_amount
            row.iamt += sign * t.total_igst

    summary.unregistered_inter_state = list(unreg.values())
    return summary
