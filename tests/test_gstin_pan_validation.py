"""Tests for GSTIN / PAN / HSN / SAC validators and format helpers."""

from datetime import date
from decimal import Decimal

import pytest

from conftest import CUSTOMER_GSTIN, DELHI_GSTIN, LOCAL_CUSTOMER_GSTIN, SUPPLIER_GSTIN
from gst_engine.core.errors import GSTINValidationError
from gst_engine.domain.services.gstin_pan_validation import (
    extract_gstin,
    extract_pan,
    format_amount,
    format_gst_date,
    format_return_period,
    generate_check_digit,
    get_hsn_chapter_info,
    get_hsn_details,
    get_sac_category_info,
    get_state_name,
    is_intra_state,
    is_valid_gstin,
    is_valid_pan,
    is_valid_return_period,
    is_valid_state_code,
    search_hsn,
    validate_gstin,
    validate_hsn,
    validate_pan,
    validate_sac,
)


class TestValidateGSTIN:

    def test_valid_gstin(self):
        assert validate_gstin("27AAPFU0939F1ZV") is True

    @pytest.mark.parametrize("gstin", [CUSTOMER_GSTIN, LOCAL_CUSTOMER_GSTIN, DELHI_GSTIN])
    def test_other_valid_gstins(self, gstin):
        assert validate_gstin(gstin) is True

    def test_normalizes_whitespace_and_case(self):
        assert validate_gstin(" 27aapfu0939f1zv ") is True

    def test_checksum_failure(self):
        with pytest.raises(GSTINValidationError) as exc:
            validate_gstin("27AAPFU0939F1ZA")
        assert exc.value.kind == "checksum"
        assert exc.value.code == "GSTIN_VALIDATION_ERROR"

    def test_wrong_length(self):
        with pytest.raises(GSTINValidationError) as exc:
            validate_gstin("27AAPFU0939F1Z")
        assert exc.value.kind == "format"

    def test_bad_structure(self):
        with pytest.raises(GSTINValidationError) as exc:
            validate_gstin("2AAAPFU0939F1ZV")
        assert exc.value.kind == "format"

    def test_unknown_state_code(self):
        with pytest.raises(GSTINValidationError) as exc:
            validate_gstin("99AAPFU0939F1ZV")
        assert exc.value.kind == "state"

    def test_empty(self):
        with pytest.raises(GSTINValidationError):
            validate_gstin("")

    def test_is_valid_gstin_never_raises(self):
        assert is_valid_gstin(SUPPLIER_GSTIN) is True
        assert is_valid_gstin("27AAPFU0939F1ZA") is False
        assert is_valid_gstin(None) is False


class TestCheckDigit:

    def test_known_check_digit(self):
        assert generate_check_digit("27AAPFU0939F1Z") == "V"

    @pytest.mark.parametrize(
        "prefix",
        ["27AAPFU0939F1Z", "29AAECC1206D1Z", "36AABCU9603R1Z", "07AAACH7409R1Z", "33AAACI1195H1Z"],
    )
    def test_round_trip(self, prefix):
        assert validate_gstin(prefix + generate_check_digit(prefix)) is True

    def test_wrong_length(self):
        with pytest.raises(GSTINValidationError):
            generate_check_digit("27AAPFU0939F1")

    def test_bad_character(self):
        with pytest.raises(GSTINValidationError):
            generate_check_digit("27AAPFU0939F1#")


class TestExtractGSTIN:

    def test_extract(self):
        info = extract_gstin("27AAPFU0939F1ZV")
        assert info.state_code == "27"
        assert info.state_name == "Maharashtra"
        assert info.pan == "AAPFU0939F"
        assert info.entity_number == "1"
        assert info.check_digit == "V"

    def test_extract_invalid_raises(self):
        with pytest.raises(GSTINValidationError):
            extract_gstin("27AAPFU0939F1ZA")


class TestPAN:

    def test_valid_pan(self):
        assert validate_pan("AAPFU0939F") is True
        assert is_valid_pan(" aapfu0939f ") is True

    def test_invalid_pan(self):
        with pytest.raises(GSTINValidationError) as exc:
            validate_pan("AAPF0939F")
        assert exc.value.kind == "pan"
        assert is_valid_pan("12345") is False

    def test_holder_type(self):
        firm = extract_pan("AAPFU0939F")
        assert firm.holder_type == "Firm"
        assert firm.is_company is False

        company = extract_pan("AABCU9603R")
        assert company.holder_type == "Company"
        assert company.is_company is True

        person = extract_pan("ABCPK1234L")
        assert person.is_individual is True


class TestHSNAndSAC:

    @pytest.mark.parametrize("code", ["84", "8471", "847130", "84713000"])
    def test_valid_hsn(self, code):
        assert validate_hsn(code) is True

    @pytest.mark.parametrize("code", ["8", "847130001", "84A1"])
    def test_invalid_hsn(self, code):
        with pytest.raises(GSTINValidationError):
            validate_hsn(code)

    def test_chapter_info(self):
        info = get_hsn_chapter_info("847130")
        assert info["chapter"] == "84"
        assert "Machinery" in info["description"]

    def test_hsn_details_delegate_to_registry(self):
        details = get_hsn_details("84713000")
        assert details.is_valid is True
        assert details.gst_rate == Decimal("18")

    def test_search_hsn(self):
        results = search_hsn("laptop")
        assert any(r.code == "847130" for r in results)

    def test_valid_sac(self):
        assert validate_sac("998314") is True

    def test_invalid_sac(self):
        with pytest.raises(GSTINValidationError):
            validate_sac("9983")

    def test_sac_category(self):
        assert get_sac_category_info("998314") == {
            "category": "99",
            "description": "Services by way of other categories",
        }
        assert get_sac_category_info("123456")["description"] == "Unknown Category"


class TestStateAndFormatHelpers:

    def test_state_helpers(self):
        assert is_valid_state_code("27") is True
        assert is_valid_state_code("99") is False
        assert get_state_name("29") == "Karnataka"
        assert get_state_name("00") == "Unknown State"
        assert is_intra_state("27", "27") is True
        assert is_intra_state("27", "29") is False

    def test_format_amount_rounds_half_up(self):
        assert format_amount(Decimal("2.345")) == Decimal("2.35")
        assert format_amount("10") == Decimal("10.00")
        assert format_amount(0.125) == Decimal("0.13")

    def test_format_dates(self):
        assert format_gst_date(date(2025, 1, 5)) == "05-01-2025"
        assert format_return_period(date(2025, 3, 31)) == "032025"

    @pytest.mark.parametrize("period,ok", [("012025", True), ("122024", True), ("132025", False), ("002025", False), ("2025-01", False), ("", False)])
    def test_return_period(self, period, ok):
        assert is_valid_return_period(period) is ok
