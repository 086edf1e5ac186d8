"""Shared test fixtures for the gst_engine test suite."""

import asyncio
from datetime import date
from decimal import Decimal

import pytest

from gst_engine.domain.constants import GSTInvoiceType, GSTTransactionType
from gst_engine.domain.models.gst import Invoice, InvoiceLineItem

# Checksum-valid GSTINs
SUPPLIER_GSTIN = "27AAPFU0939F1ZV"  # Maharashtra
CUSTOMER_GSTIN = "29AAECC1206D1Z8"  # Karnataka
LOCAL_CUSTOMER_GSTIN = "27AADCB2230M1ZT"  # Maharashtra
DELHI_GSTIN = "07AAACH7409R1Z3"


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


def make_item(**overrides) -> InvoiceLineItem:
    data = {
        "serial_no": 1,
        "description": "Laptop computer",
        "hsn_sac": "847130",
        "quantity": Decimal("1"),
        "unit": "nos",
        "unit_price": Decimal("10000"),
        "gst_rate": Decimal("18"),
    }
    data.update(overrides)
    return InvoiceLineItem(**data)


def make_invoice(**overrides) -> Invoice:
    """Inter-state B2B invoice (27 -> 29) for 10,000 @ 18% unless overridden."""
    data = {
        "invoice_number": "INV-001",
        "invoice_date": date(2025, 1, 15),
        "invoice_type": GSTInvoiceType.TAX_INVOICE,
        "transaction_type": GSTTransactionType.B2B,
        "place_of_supply": "29",
        "supplier_gstin": SUPPLIER_GSTIN,
        "supplier_state": "27",
        "customer_gstin": CUSTOMER_GSTIN,
        "customer_state": "29",
        "line_items": [make_item()],
    }
    data.update(overrides)
    return Invoice(**data)


@pytest.fixture
def b2b_invoice() -> Invoice:
    return make_invoice()


@pytest.fixture
def intra_state_invoice() -> Invoice:
    return make_invoice(
        invoice_number="INV-002",
        place_of_supply="27",
        customer_gstin=LOCAL_CUSTOMER_GSTIN,
        customer_state="27",
    )


@pytest.fixture
def b2c_invoice() -> Invoice:
    return make_invoice(
        invoice_number="INV-003",
        transaction_type=GSTTransactionType.B2C,
        customer_gstin=None,
        place_of_supply="27",
        customer_state="27",
        line_items=[make_item(description="Mouse", hsn_sac="847160", unit_price=Decimal("500"))],
    )
