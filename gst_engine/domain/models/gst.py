# gst_engine/domain/models/gst.py

from datetime import date
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, Field, PlainSerializer

from gst_engine.domain.constants import GSTInvoiceType, GSTTransactionType

# Decimal in memory, JSON number on the wire
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

GSTIN_PATTERN = r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$"
STATE_CODE_PATTERN = r"^[0-9]{2}$"

ZERO = Decimal("0")


class TaxBreakdown(BaseModel):
    taxable_amount: Amount
    cgst: Amount = ZERO
    sgst: Amount = ZERO
    igst: Amount = ZERO
    cess: Amount = ZERO
    total_tax: Amount = ZERO
    total_amount: Amount = ZERO
    gst_rate: Amount
    cess_rate: Amount = ZERO
    is_inter_state: bool = False
    is_inclusive: bool = False


class LineItemTax(TaxBreakdown):
    line_total: Amount  # after discount, before tax


class InvoiceTotals(BaseModel):
    total_taxable_amount: Amount = ZERO
    total_cgst: Amount = ZERO
    total_sgst: Amount = ZERO
    total_igst: Amount = ZERO
    total_cess: Amount = ZERO
    total_tax: Amount = ZERO
    total_invoice_amount: Amount = ZERO


class InvoiceTaxResult(BaseModel):
    line_items: list[LineItemTax]
    totals: InvoiceTotals
    is_inter_state: bool


class InvoiceLineItem(BaseModel):
    serial_no: int = Field(..., gt=0)
    description: str = Field(..., min_length=1)
    hsn_sac: Optional[str] = Field(default=None, pattern=r"^[0-9]{2,8}$")
    quantity: Decimal = Field(..., gt=0)
    unit: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., ge=0)
    discount: Decimal = Field(default=ZERO, ge=0, le=100, description="Discount percent")
    gst_rate: Decimal = Field(..., ge=0, le=50)
    cess_rate: Decimal = Field(default=ZERO, ge=0)
    is_service: bool = False


class Invoice(BaseModel):
    invoice_number: str = Field(..., min_length=1)
    invoice_date: date
    invoice_type: GSTInvoiceType = GSTInvoiceType.TAX_INVOICE
    transaction_type: GSTTransactionType
    place_of_supply: str = Field(..., pattern=STATE_CODE_PATTERN)

    # Supplier
    supplier_gstin: str = Field(..., pattern=GSTIN_PATTERN)
    supplier_name: str = ""
    supplier_state: str = Field(..., pattern=STATE_CODE_PATTERN)

    # Customer (GSTIN mandatory only for B2B)
    customer_gstin: Optional[str] = Field(default=None, pattern=GSTIN_PATTERN)
    customer_name: str = ""
    customer_state: str = Field(..., pattern=STATE_CODE_PATTERN)

    line_items: list[InvoiceLineItem] = Field(..., min_length=1)

    reverse_charge: bool = False
    ecommerce_gstin: Optional[str] = Field(default=None, pattern=GSTIN_PATTERN)
    notes: Optional[str] = None

    # Exports
    export_with_payment: bool = True
    shipping_bill_port_code: Optional[str] = None
    shipping_bill_number: Optional[str] = None
    shipping_bill_date: Optional[date] = None

    # Credit / debit notes
    original_invoice_number: Optional[str] = None
    original_invoice_date: Optional[date] = None
    note_reason: Optional[str] = None
    pre_gst: bool = False

    @property
    def is_note(self) -> bool:
        return self.invoice_type in (GSTInvoiceType.CREDIT_NOTE, GSTInvoiceType.DEBIT_NOTE)


class TaxComponents(BaseModel):
    igst: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    cess: Decimal = ZERO


class SupplyTotals(TaxComponents):
    taxable: Decimal = ZERO


class InwardSupplies(BaseModel):
    reverse_charge: SupplyTotals = Field(default_factory=SupplyTotals)


class ItcData(BaseModel):
    available: TaxComponents = Field(default_factory=TaxComponents)
    reversed: TaxComponents = Field(default_factory=TaxComponents)
    ineligible: TaxComponents = Field(default_factory=TaxComponents)


class InterStateSupply(BaseModel):
    pos: str
    txval: Amount = ZERO
    iamt: Amount = ZERO


class OutwardSummary(BaseModel):
    """Outward totals derived from a period's invoices for GSTR-3B."""

    taxable: SupplyTotals = Field(default_factory=SupplyTotals)
    zero_rated: SupplyTotals = Field(default_factory=SupplyTotals)
    nil_exempt: Decimal = ZERO
    unregistered_inter_state: list[InterStateSupply] = Field(default_factory=list)


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
