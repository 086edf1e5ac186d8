"""Tests for GSTR-1 / GSTR-3B structural validation."""

from decimal import Decimal

from conftest import SUPPLIER_GSTIN
from gst_engine.domain.models.gst import ItcData, SupplyTotals, TaxComponents
from gst_engine.domain.models.gstr1 import (
    Gstr1B2BEntry,
    Gstr1B2BInv,
    Gstr1CDNREntry,
    Gstr1HSNEntry,
    Gstr1Note,
    Gstr1Return,
)
from gst_engine.domain.models.gstr3b import Gstr3bItcRow
from gst_engine.domain.services.gstr1_service import generate_gstr1
from gst_engine.domain.services.gstr3b_service import generate_gstr3b
from gst_engine.domain.services.return_validation import validate_gstr1, validate_gstr3b


class TestValidateGSTR1:

    def test_generated_return_is_valid(self, b2b_invoice, b2c_invoice):
        result = validate_gstr1(generate_gstr1(SUPPLIER_GSTIN, "012025", [b2b_invoice, b2c_invoice]))
        assert result.is_valid is True
        assert result.errors == []

    def test_bad_header(self):
        result = validate_gstr1(Gstr1Return(gstin="NOTAGSTIN", ret_period="2025-01"))
        assert result.is_valid is False
        assert result.errors == ["Invalid GSTIN format", "Invalid return period format"]

    def test_b2b_problems(self):
        ret = Gstr1Return(
            gstin=SUPPLIER_GSTIN,
            ret_period="012025",
            b2b=[
                Gstr1B2BEntry(
                    ctin="BAD",
                    inv=[Gstr1B2BInv(inum="X-1", idt="15-01-2025", val=Decimal("0"), pos="29")],
                )
            ],
        )
        errors = validate_gstr1(ret).errors
        assert "Invalid customer GSTIN in B2B: BAD" in errors
        assert "No line items in invoice: X-1" in errors

    def test_blank_invoice_number(self):
        ret = Gstr1Return(
            gstin=SUPPLIER_GSTIN,
            ret_period="012025",
            b2b=[Gstr1B2BEntry(ctin=SUPPLIER_GSTIN, inv=[Gstr1B2BInv(inum="  ", idt="", val=Decimal("0"), pos="27")])],
        )
        assert "Missing invoice number in B2B entry" in validate_gstr1(ret).errors

    def test_empty_note(self):
        ret = Gstr1Return(
            gstin=SUPPLIER_GSTIN,
            ret_period="012025",
            cdnr=[Gstr1CDNREntry(ctin=SUPPLIER_GSTIN, nt=[Gstr1Note(ntty="C", nt_num="CN-9", nt_dt="01-01-2025", val=Decimal("0"))])],
        )
        assert validate_gstr1(ret).errors == ["No line items in note: CN-9"]

    def test_hsn_rows(self):
        ret = Gstr1Return(
            gstin=SUPPLIER_GSTIN,
            ret_period="012025",
            hsn=[
                Gstr1HSNEntry(num=1, hsn_sc="8", desc="x", uqc="NOS", qty=Decimal("1")),
                Gstr1HSNEntry(num=2, hsn_sc="8471", desc="x", uqc="NOS", qty=Decimal("0")),
            ],
        )
        assert validate_gstr1(ret).errors == ["Invalid HSN code: 8", "Invalid quantity for HSN 8471"]


class TestValidateGSTR3B:

    def _itc(self):
        return ItcData(
            available=TaxComponents(igst=Decimal("5000"), cgst=Decimal("100")),
            reversed=TaxComponents(igst=Decimal("1000")),
        )

    def test_generated_return_is_valid(self):
        ret = generate_gstr3b(SUPPLIER_GSTIN, "012025", SupplyTotals(), itc=self._itc())
        assert validate_gstr3b(ret).is_valid is True

    def test_net_mismatch(self):
        ret = generate_gstr3b(SUPPLIER_GSTIN, "012025", SupplyTotals(), itc=self._itc())
        ret.itc_elg.itc_net.iamt = Decimal("4500")
        result = validate_gstr3b(ret)
        assert result.is_valid is False
        assert result.errors == ["ITC net IGST calculation mismatch"]

    def test_within_tolerance(self):
        ret = generate_gstr3b(SUPPLIER_GSTIN, "012025", SupplyTotals(), itc=self._itc())
        ret.itc_elg.itc_net.camt = Decimal("100.01")
        assert validate_gstr3b(ret).is_valid is True

    def test_all_rows_are_summed(self):
        ret = generate_gstr3b(SUPPLIER_GSTIN, "012025", SupplyTotals(), itc=self._itc())
        ret.itc_elg.itc_avl.append(Gstr3bItcRow(ty="IMPG", iamt=Decimal("700")))
        assert validate_gstr3b(ret).errors == ["ITC net IGST calculation mismatch"]
        ret.itc_elg.itc_net.iamt = Decimal("4700")
        assert validate_gstr3b(ret).is_valid is True

    def test_bad_header(self):
        ret = generate_gstr3b(SUPPLIER_GSTIN, "012025", SupplyTotals())
        ret.gstin = "27AAPFU0939F1Z"
        assert validate_gstr3b(ret).errors == ["Invalid GSTIN format"]
