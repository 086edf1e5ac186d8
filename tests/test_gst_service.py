"""Tests for the state-code based GST entry points."""

from decimal import Decimal

import pytest

from gst_engine.core.errors import GSTError, GSTINValidationError, TaxCalculationError
from gst_engine.domain.services.gst_service import batch_calculate, calculate_gst, get_gst_info
from gst_engine.domain.services.tax_calculator import get_rate_manager


@pytest.fixture(autouse=True)
def _reset_custom_rates():
    yield
    get_rate_manager().clear_custom_rates()


class TestCalculateGST:

    def test_inter_state(self):
        r = calculate_gst(10000, 18, "27", "29")
        assert r.igst == Decimal("1800.00")
        assert r.is_inter_state is True

    def test_intra_state(self):
        r = calculate_gst(10000, 18, "27", "27")
        assert r.cgst == r.sgst == Decimal("900.00")
        assert r.igst == Decimal("0")

    def test_inclusive_with_cess(self):
        r = calculate_gst(150000, 28, "27", "29", is_inclusive=True, cess_rate=22)
        assert r.taxable_amount == Decimal("100000.00")

    def test_invalid_supplier_state(self):
        with pytest.raises(GSTError) as exc:
            calculate_gst(1000, 18, "99", "29")
        assert exc.value.code == "INVALID_STATE_CODE"
        assert exc.value.details == {"state_code": "99"}

    def test_invalid_state_is_an_identifier_error(self):
        with pytest.raises(GSTINValidationError) as exc:
            calculate_gst(1000, 18, "27", "00")
        assert exc.value.kind == "state"
        assert exc.value.code == "INVALID_STATE_CODE"
        assert isinstance(exc.value, GSTError)

    def test_invalid_customer_state(self):
        with pytest.raises(GSTError) as exc:
            calculate_gst(1000, 18, "27", "X1")
        assert exc.value.code == "INVALID_STATE_CODE"

    def test_calculation_errors_propagate(self):
        with pytest.raises(TaxCalculationError):
            calculate_gst(-5, 18, "27", "29")


class TestGetGSTInfo:

    def test_hsn_code(self):
        info = get_gst_info(1000, "847130", "27", "29")
        assert info.applicable_rate == Decimal("18")
        assert info.is_inter_state is True
        assert info.calculation.igst == Decimal("180.00")
        assert info.hsn_info["chapter"] == "84"
        assert info.sac_info is None

    def test_sac_code(self):
        info = get_gst_info(1000, "998314")
        assert info.sac_info["category"] == "99"
        assert info.hsn_info is None
        # no states: treated as intra-state
        assert info.is_inter_state is False
        assert info.calculation.cgst == Decimal("90.00")

    def test_no_code_uses_default_rate(self):
        info = get_gst_info(1000)
        assert info.applicable_rate == Decimal("18")
        assert "hsn_info" not in info.to_dict()

    def test_custom_rate_wins(self):
        get_rate_manager().set_custom_rate("847130", 12)
        info = get_gst_info(1000, "847130")
        assert info.applicable_rate == Decimal("12")

    def test_to_dict_is_json_ready(self):
        out = get_gst_info(1000, "1006", "27", "27").to_dict()
        assert out["applicable_rate"] == 0.0
        assert out["calculation"]["taxable_amount"] == 1000.0
        assert out["hsn_info"]["chapter"] == "10"


class TestBatchCalculate:

    def test_mixed_items(self):
        results = batch_calculate(
            [
                {"amount": 1000, "gst_rate": 5, "description": "Rice bag"},
                {"amount": 2000, "hsn_sac": "847130", "description": "Laptop"},
                {"amount": 500, "gst_rate": 0, "hsn_sac": "847130"},
            ],
            "27",
            "27",
        )
        assert [r.gst_rate for r in results] == [Decimal("5"), Decimal("18"), Decimal("0")]
        assert results[0].description == "Rice bag"
        assert results[1].hsn_sac == "847130"
        assert results[1].cgst == Decimal("180.00")
        assert results[2].total_tax == Decimal("0")

    def test_empty(self):
        assert batch_calculate([], "27", "29") == []

    def test_bad_item_fails_whole_batch(self):
        with pytest.raises(TaxCalculationError):
            batch_calculate([{"amount": 100, "gst_rate": 18}, {"amount": 0, "gst_rate": 18}], "27", "29")
