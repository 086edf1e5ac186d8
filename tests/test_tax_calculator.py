"""Tests for GST computation, rate resolution and custom rate overrides."""

from decimal import Decimal

import pytest

from conftest import make_invoice, make_item
from gst_engine.core.errors import TaxCalculationError
from gst_engine.domain.services.tax_calculator import (
    GSTRateManager,
    calculate_composite_rate,
    calculate_invoice_tax,
    calculate_line_item_tax,
    calculate_reverse_gst,
    calculate_tax,
    calculate_tds_on_gst,
    get_applicable_gst_rate,
    get_rate_manager,
)


class TestCalculateTax:

    def test_inter_state_exclusive(self):
        r = calculate_tax(10000, 18, is_inter_state=True)
        assert r.taxable_amount == Decimal("10000.00")
        assert r.igst == Decimal("1800.00")
        assert r.cgst == Decimal("0")
        assert r.sgst == Decimal("0")
        assert r.total_tax == Decimal("1800.00")
        assert r.total_amount == Decimal("11800.00")

    def test_intra_state_exclusive(self):
        r = calculate_tax(10000, 18, is_inter_state=False)
        assert r.cgst == Decimal("900.00")
        assert r.sgst == Decimal("900.00")
        assert r.igst == Decimal("0")
        assert r.total_amount == Decimal("11800.00")

    def test_inclusive(self):
        r = calculate_tax(11800, 18, is_inclusive=True, is_inter_state=True)
        assert r.taxable_amount == Decimal("10000.00")
        assert r.igst == Decimal("1800.00")
        assert r.total_amount == Decimal("11800.00")
        assert r.is_inclusive is True

    def test_cess_is_never_split(self):
        r = calculate_tax(100000, 28, cess_rate=22)
        assert r.cess == Decimal("22000.00")
        assert r.cgst == r.sgst == Decimal("14000.00")
        assert r.total_tax == Decimal("50000.00")

    def test_inclusive_with_cess(self):
        r = calculate_tax(150000, 28, is_inclusive=True, is_inter_state=True, cess_rate=22)
        assert r.taxable_amount == Decimal("100000.00")
        assert r.igst == Decimal("28000.00")
        assert r.cess == Decimal("22000.00")

    def test_inclusive_tax_computed_on_unrounded_base(self):
        # base is 84.7457..., GST 15.2542...
        r = calculate_tax(100, 18, is_inclusive=True, is_inter_state=True)
        assert r.taxable_amount == Decimal("84.75")
        assert r.igst == Decimal("15.25")
        assert r.total_amount == Decimal("100.00")

    def test_inclusive_intra_state_halves_unrounded_gst(self):
        # each half is 7.6271..., rounded on its own
        r = calculate_tax(100, 18, is_inclusive=True)
        assert r.taxable_amount == Decimal("84.75")
        assert r.cgst == r.sgst == Decimal("7.63")
        assert r.total_amount == r.taxable_amount + r.cgst + r.sgst

    def test_rounding_half_up(self):
        r = calculate_tax(Decimal("0.25"), 18, is_inter_state=True)
        # 0.25 * 18% = 0.045
        assert r.igst == Decimal("0.05")

    def test_totals_are_sums_of_rounded_components(self):
        r = calculate_tax(Decimal("99.99"), 5)
        assert r.total_tax == r.cgst + r.sgst + r.igst + r.cess
        assert r.total_amount == r.taxable_amount + r.total_tax

    def test_zero_rate(self):
        r = calculate_tax(500, 0)
        assert r.total_tax == Decimal("0")
        assert r.total_amount == Decimal("500.00")

    def test_deterministic(self):
        a = calculate_tax(Decimal("1234.567"), 12, cess_rate=1)
        b = calculate_tax(Decimal("1234.567"), 12, cess_rate=1)
        assert a == b

    def test_reverse_charge_does_not_change_amounts(self):
        assert calculate_tax(1000, 18, apply_reverse_charge=True) == calculate_tax(1000, 18)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"amount": 0, "gst_rate": 18},
            {"amount": -1, "gst_rate": 18},
            {"amount": 100, "gst_rate": 51},
            {"amount": 100, "gst_rate": -1},
            {"amount": 100, "gst_rate": 18, "cess_rate": -1},
        ],
    )
    def test_invalid_inputs(self, kwargs):
        with pytest.raises(TaxCalculationError) as exc:
            calculate_tax(**kwargs)
        assert exc.value.code == "TAX_CALCULATION_ERROR"


class TestInvariants:

    @pytest.mark.parametrize("amount", ["1", "10.01", "333.33", "999.99", "12345.67"])
    @pytest.mark.parametrize("rate", ["0", "3", "5", "12", "18", "28"])
    def test_split(self, amount, rate):
        inter = calculate_tax(Decimal(amount), Decimal(rate), is_inter_state=True)
        intra = calculate_tax(Decimal(amount), Decimal(rate), is_inter_state=False)
        assert inter.cgst == inter.sgst == 0
        assert inter.igst == (inter.taxable_amount * Decimal(rate) / 100).quantize(Decimal("0.01"), rounding="ROUND_HALF_UP")
        assert intra.igst == 0
        assert intra.cgst == intra.sgst

    @pytest.mark.parametrize(
        "amount,rate,half",
        [
            # 9% of 10000.05 is 900.0045
            ("10000.05", "18", "900.00"),
            ("0.25", "18", "0.02"),
            ("333.33", "5", "8.33"),
            ("100.10", "12", "6.01"),
        ],
    )
    def test_odd_paisa_split_rounds_each_half_once(self, amount, rate, half):
        r = calculate_tax(Decimal(amount), Decimal(rate), is_inter_state=False)
        exact_half = Decimal(amount) * Decimal(rate) / 200
        assert r.cgst == r.sgst == Decimal(half)
        assert r.cgst == exact_half.quantize(Decimal("0.01"), rounding="ROUND_HALF_UP")
        assert r.total_amount == r.taxable_amount + 2 * r.cgst

    def test_odd_paisa_split_totals(self):
        r = calculate_tax(Decimal("10000.05"), 18)
        assert r.total_tax == Decimal("1800.00")
        assert r.total_amount == Decimal("11800.05")

    @pytest.mark.parametrize("amount", ["1", "10.01", "333.33", "999.99", "12345.67"])
    @pytest.mark.parametrize("rate", ["5", "12", "18", "28"])
    def test_inclusive_round_trip(self, amount, rate):
        exclusive = calculate_tax(Decimal(amount), Decimal(rate), is_inter_state=True)
        inclusive = calculate_tax(exclusive.total_amount, Decimal(rate), is_inclusive=True, is_inter_state=True)
        assert abs(inclusive.taxable_amount - Decimal(amount)) <= Decimal("0.01")


class TestLineItemsAndInvoices:

    def test_line_with_discount(self):
        item = make_item(quantity=Decimal("2"), unit_price=Decimal("5000"), discount=Decimal("10"))
        r = calculate_line_item_tax(item, "27", "29")
        assert r.line_total == Decimal("9000.00")
        assert r.taxable_amount == Decimal("9000.00")
        assert r.igst == Decimal("1620.00")
        assert r.is_inter_state is True

    def test_invoice_totals_sum_rounded_lines(self):
        items = [
            make_item(serial_no=1, unit_price=Decimal("0.25")),
            make_item(serial_no=2, unit_price=Decimal("0.25")),
        ]
        result = calculate_invoice_tax(make_invoice(line_items=items))
        # each line rounds 0.045 up to 0.05; totals add the rounded lines
        assert [l.igst for l in result.line_items] == [Decimal("0.05"), Decimal("0.05")]
        assert result.totals.total_igst == Decimal("0.10")
        assert result.totals.total_invoice_amount == Decimal("0.60")

    def test_invoice_inter_state_resolved_from_states(self, intra_state_invoice):
        result = calculate_invoice_tax(intra_state_invoice)
        assert result.is_inter_state is False
        assert result.totals.total_cgst == Decimal("900.00")
        assert result.totals.total_igst == Decimal("0")

    def test_zero_value_line_fails(self):
        with pytest.raises(TaxCalculationError):
            calculate_line_item_tax(make_item(unit_price=Decimal("0")), "27", "27")


class TestReverseAndComposite:

    def test_reverse_gst(self):
        r = calculate_reverse_gst(11800, 18)
        assert r.taxable_amount == Decimal("10000.00")
        assert r.gst_amount == Decimal("1800.00")
        assert r.to_dict() == {"taxable_amount": 10000.0, "gst_amount": 1800.0}

    def test_reverse_gst_amounts_are_in_paise(self):
        r = calculate_reverse_gst(Decimal("1180.005"), 18)
        assert r.taxable_amount == Decimal("1000.00")
        assert r.gst_amount == Decimal("180.01")
        assert r.gst_amount.as_tuple().exponent == -2

    def test_reverse_gst_invalid(self):
        with pytest.raises(TaxCalculationError):
            calculate_reverse_gst(0, 18)

    def test_composite_rate(self):
        rate = calculate_composite_rate([{"amount": 1000, "gst_rate": 5}, {"amount": 3000, "gst_rate": 18}])
        assert rate == Decimal("14.75")

    def test_composite_rate_empty(self):
        with pytest.raises(TaxCalculationError):
            calculate_composite_rate([])

    def test_tds_on_gst(self):
        r = calculate_tds_on_gst(10000, 18)
        assert r.gst_amount == Decimal("1800.00")
        assert r.tds_amount == Decimal("36.00")
        assert r.net_payable == Decimal("11764.00")


class TestRateResolution:

    def test_no_code_defaults_to_18(self):
        assert get_applicable_gst_rate(None) == Decimal("18")

    def test_registry_prefix(self):
        assert get_applicable_gst_rate("84713000") == Decimal("18")
        assert get_applicable_gst_rate("1006") == Decimal("0")

    @pytest.mark.parametrize(
        "code,rate",
        [("0101", "0"), ("1101", "5"), ("2710", "12"), ("8501", "18"), ("2203", "28"), ("9801", "18")],
    )
    def test_chapter_fallback(self, code, rate):
        assert get_applicable_gst_rate(code) == Decimal(rate)


class TestGSTRateManager:

    def test_custom_rate_overrides(self):
        manager = GSTRateManager()
        manager.set_custom_rate("ABC123", 5)
        assert manager.get_rate("abc123") == Decimal("5")
        assert manager.get_rate("847130") == Decimal("18")

    def test_invalid_custom_rate(self):
        with pytest.raises(TaxCalculationError):
            GSTRateManager().set_custom_rate("847130", 60)

    def test_clear(self):
        manager = GSTRateManager()
        manager.set_custom_rate("847130", 12)
        manager.clear_custom_rates()
        assert manager.get_rate("847130") == Decimal("18")

    def test_standard_rates(self):
        rates = GSTRateManager().get_all_standard_rates()
        assert rates["GST_28"] == Decimal("28")

    def test_process_wide_instance(self):
        assert get_rate_manager() is get_rate_manager()
