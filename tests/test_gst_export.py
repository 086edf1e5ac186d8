"""Tests for portal JSON export."""

import json
from decimal import Decimal

import pytest

from conftest import SUPPLIER_GSTIN
from gst_engine.domain.models.gst import ItcData, SupplyTotals, TaxComponents
from gst_engine.domain.models.gstr1 import Gstr1Return
from gst_engine.domain.services.gst_export import (
    export_for_portal,
    export_gstr1_for_portal,
    export_gstr3b_for_portal,
    generate_portal_package,
    validate_file_size,
)
from gst_engine.domain.services.gstr1_service import generate_gstr1
from gst_engine.domain.services.gstr3b_service import generate_gstr3b, summarize_outward_supplies

PERIOD = "012025"


@pytest.fixture
def gstr1(b2b_invoice, b2c_invoice):
    return generate_gstr1(SUPPLIER_GSTIN, PERIOD, [b2b_invoice, b2c_invoice])


@pytest.fixture
def gstr3b(b2b_invoice, b2c_invoice):
    itc = ItcData(available=TaxComponents(igst=Decimal("500")))
    return generate_gstr3b(SUPPLIER_GSTIN, PERIOD, summarize_outward_supplies([b2b_invoice, b2c_invoice]), itc=itc)


class TestExportGSTR1:

    def test_json_shape(self, gstr1):
        result = export_gstr1_for_portal(gstr1)
        payload = json.loads(result.json)

        assert result.filename == f"GSTR1_{PERIOD}_{SUPPLIER_GSTIN}.json"
        assert payload["gstin"] == SUPPLIER_GSTIN
        assert payload["ret_period"] == PERIOD
        inv = payload["b2b"][0]["inv"][0]
        assert inv["val"] == 11800.0
        assert inv["itms"][0]["itm_det"]["iamt"] == 1800.0
        # unset optional fields are omitted
        assert "etin" not in inv

    def test_size_is_utf8_bytes(self, gstr1):
        result = export_gstr1_for_portal(gstr1)
        assert result.size == len(result.json.encode("utf-8"))
        assert result.size_check.is_valid is True

    def test_compact_is_smaller(self, gstr1):
        assert export_gstr1_for_portal(gstr1, pretty=False).size < export_gstr1_for_portal(gstr1).size

    def test_summary(self, gstr1):
        summary = export_gstr1_for_portal(gstr1).summary
        assert summary["b2b_customers"] == 1
        assert summary["b2b_invoices"] == 1
        assert summary["b2cs_entries"] == 1
        assert summary["hsn_codes"] == 2

    def test_invalid_return_still_exported(self):
        result = export_gstr1_for_portal(Gstr1Return(gstin="BAD", ret_period="012025"))
        assert result.validation.is_valid is False
        assert json.loads(result.json)["gstin"] == "BAD"

    def test_validation_can_be_skipped(self, gstr1):
        assert export_gstr1_for_portal(gstr1, validate=False).validation is None


class TestExportGSTR3B:

    def test_json_and_summary(self, gstr3b):
        result = export_gstr3b_for_portal(gstr3b)
        payload = json.loads(result.json)

        assert result.filename == f"GSTR3B_{PERIOD}_{SUPPLIER_GSTIN}.json"
        assert payload["sup_details"]["osup_det"]["txval"] == 10500.0
        assert payload["itc_elg"]["itc_net"]["iamt"] == 500.0
        assert result.summary["outward_igst"] == 1800.0
        assert result.summary["itc_available_igst"] == 500.0
        assert result.validation.is_valid is True


class TestDispatchAndPackage:

    def test_export_for_portal_dispatches(self, gstr1, gstr3b):
        assert export_for_portal(gstr1).filename.startswith("GSTR1_")
        assert export_for_portal(gstr3b).filename.startswith("GSTR3B_")

    def test_export_for_portal_rejects_other_types(self):
        with pytest.raises(TypeError):
            export_for_portal(SupplyTotals())

    def test_package(self, gstr1, gstr3b):
        package = generate_portal_package(gstr1, gstr3b)
        assert package.package_summary == {
            "period": PERIOD,
            "gstin": SUPPLIER_GSTIN,
            "total_files": 2,
            "total_size": package.gstr1.size + package.gstr3b.size,
            "all_valid": True,
        }

    def test_to_dict(self, gstr1):
        out = export_gstr1_for_portal(gstr1).to_dict()
        assert out["validation"] == {"is_valid": True, "errors": []}
        assert out["size_check"]["is_valid"] is True


class TestFileSize:

    def test_within_limit(self):
        check = validate_file_size(1024)
        assert check.is_valid is True
        assert "within acceptable limits" in check.message

    def test_over_default_limit(self):
        check = validate_file_size(6 * 1024 * 1024)
        assert check.is_valid is False
        assert "exceeds portal limit of 5 MB" in check.message

    def test_custom_limit(self):
        assert validate_file_size(2048, max_bytes=1024).is_valid is False
