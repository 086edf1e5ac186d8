# gst_engine/domain/services/gstin_pan_validation.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from gst_engine.core.errors import GSTINValidationError
from gst_engine.domain.constants import GST_STATE_CODES
from gst_engine.domain.models.hsn import HSNCode, HSNLookupResult
from gst_engine.domain.services.hsn_registry import get_hsn_registry

PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
HSN_REGEX = re.compile(r"^[0-9]{2,8}$")
SAC_REGEX = re.compile(r"^[0-9]{6}$")
RETURN_PERIOD_REGEX = re.compile(r"^(0[1-9]|1[0-2])\d{4}$")

_CHECKSUM_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_WHITESPACE = re.compile(r"\s+")

PAN_HOLDER_TYPES = {
    "P": "Individual",
    "C": "Company",
    "H": "HUF",
    "F": "Firm",
    "A": "AOP/BOI",
    "T": "AOP (Trust)",
    "B": "BOI",
    "L": "Local Authority",
    "J": "Artificial Juridical Person",
    "G": "Government",
}

SAC_CATEGORIES = {
    "99": "Services by way of other categories",
    "98": "Telecommunication services",
    "97": "Financial and related services",
    "96": "Computer and related services",
    "95": "Travel agency, tour operator services",
    "94": "Sporting and other recreational services",
    "93": "Maintenance and repair services",
    "92": "Education services",
    "91": "Health and social services",
    "90": "Sewage and refuse disposal services",
}


@dataclass(frozen=True)
class GSTINInfo:
    gstin: str
    state_code: str
    state_name: str
    pan: str
    entity_number: str
    check_digit: str


@dataclass(frozen=True)
class PANInfo:
    pan: str
    holder_type: str
    is_individual: bool
    is_company: bool


def _clean(value: str) -> str:
    return _WHITESPACE.sub("", value).upper()


# ---------------------------------------------------------------------------
# GSTIN
# ---------------------------------------------------------------------------


def _checksum_char(prefix: str) -> str:
    """
    Check character for the first 14 GSTIN characters.

    Walk right-to-left with factors 2,1,2,1,...; products above 35 fold to
    quotient + remainder in base 36.
    """
    total = 0
    factor = 2
    for ch in reversed(prefix):
        idx = _CHECKSUM_ALPHABET.find(ch)
        if idx == -1:
            raise GSTINValidationError(f"Invalid character in GSTIN: {ch}", kind="format")
        product = idx * factor
        if product > 35:
            product = product // 36 + product % 36
        total += product
        factor = 1 if factor == 2 else 2
    return _CHECKSUM_ALPHABET[(36 - total % 36) % 36]


def generate_check_digit(partial_gstin: str) -> str:
    """Return the 15th GSTIN character for a 14-character prefix."""
    if not partial_gstin or len(partial_gstin) != 14:
        raise GSTINValidationError("Partial GSTIN must be exactly 14 characters", kind="format")
    return _checksum_char(partial_gstin.upper())


def validate_gstin(gstin: str) -> bool:
    """
    Validate GSTIN structure, state code, embedded PAN, entity number and
    check digit. Returns True or raises GSTINValidationError whose ``kind``
    names the rule that failed.
    """
    if not gstin or not isinstance(gstin, str):
        raise GSTINValidationError("GSTIN must be a non-empty string", kind="format")

    clean = _clean(gstin)

    if len(clean) != 15:
        raise GSTINValidationError("GSTIN must be exactly 15 characters long", kind="format")

    if not GSTIN_REGEX.match(clean):
        raise GSTINValidationError("GSTIN format is invalid", kind="format")

    state_code = clean[:2]
    if state_code not in GST_STATE_CODES:
        raise GSTINValidationError(f"Invalid state code: {state_code}", kind="state")

    if not PAN_REGEX.match(clean[2:12]):
        raise GSTINValidationError("Invalid PAN embedded in GSTIN", kind="pan")

    if not re.match(r"^[1-9A-Z]$", clean[12]):
        raise GSTINValidationError("Invalid entity number in GSTIN", kind="entity")

    if _checksum_char(clean[:14]) != clean[14]:
        raise GSTINValidationError("GSTIN checksum validation failed", kind="checksum")

    return True


def extract_gstin(gstin: str) -> GSTINInfo:
    validate_gstin(gstin)
    clean = _clean(gstin)
    return GSTINInfo(
        gstin=clean,
        state_code=clean[:2],
        state_name=GST_STATE_CODES[clean[:2]],
        pan=clean[2:12],
        entity_number=clean[12],
        check_digit=clean[14],
    )


def is_valid_gstin(gstin: str | None) -> bool:
    if not gstin:
        return False
    try:
        return validate_gstin(gstin)
    except GSTINValidationError:
        return False


# ---------------------------------------------------------------------------
# PAN
# ---------------------------------------------------------------------------


def validate_pan(pan: str) -> bool:
    if not pan or not isinstance(pan, str):
        raise GSTINValidationError("PAN must be a non-empty string", kind="pan")
    if not PAN_REGEX.match(_clean(pan)):
        raise GSTINValidationError("Invalid PAN format", kind="pan")
    return True


def extract_pan(pan: str) -> PANInfo:
    validate_pan(pan)
    clean = _clean(pan)
    return PANInfo(
        pan=clean,
        holder_type=PAN_HOLDER_TYPES.get(clean[3], "Unknown"),
        is_individual=clean[3] == "P",
        is_company=clean[3] == "C",
    )


def is_valid_pan(pan: str | None) -> bool:
    if not pan:
        return False
    pan = pan.strip().upper()
    return bool(PAN_REGEX.match(pan))


# ---------------------------------------------------------------------------
# HSN / SAC
# ---------------------------------------------------------------------------


def validate_hsn(hsn: str) -> bool:
    if not hsn or not isinstance(hsn, str):
        raise GSTINValidationError("HSN must be a non-empty string", kind="format")
    if not HSN_REGEX.match(_WHITESPACE.sub("", hsn)):
        raise GSTINValidationError("Invalid HSN format", kind="format")
    return True


def get_hsn_chapter_info(hsn: str) -> dict[str, str]:
    validate_hsn(hsn)
    chapter = _WHITESPACE.sub("", hsn)[:2]
    info = get_hsn_registry().get_chapter(chapter)
    return {
        "chapter": chapter,
        "description": info.description if info else "Unknown Chapter",
    }


def get_hsn_details(hsn: str) -> HSNLookupResult:
    """Description, recommended rate, cess and unit from the registry."""
    validate_hsn(hsn)
    return get_hsn_registry().lookup(_WHITESPACE.sub("", hsn))


def search_hsn(query: str) -> list[HSNCode]:
    return get_hsn_registry().search_by_description(query)


def validate_sac(sac: str) -> bool:
    if not sac or not isinstance(sac, str):
        raise GSTINValidationError("SAC must be a non-empty string", kind="format")
    if not SAC_REGEX.match(_WHITESPACE.sub("", sac)):
        raise GSTINValidationError("Invalid SAC format", kind="format")
    return True


def get_sac_category_info(sac: str) -> dict[str, str]:
    validate_sac(sac)
    category = _WHITESPACE.sub("", sac)[:2]
    return {
        "category": category,
        "description": SAC_CATEGORIES.get(category, "Unknown Category"),
    }


# ---------------------------------------------------------------------------
# State / format helpers
# ---------------------------------------------------------------------------


def is_intra_state(supplier_state: str, customer_state: str) -> bool:
    return supplier_state == customer_state


def is_valid_state_code(state_code: str) -> bool:
    return state_code in GST_STATE_CODES


def get_state_name(state_code: str) -> str:
    return GST_STATE_CODES.get(state_code, "Unknown State")


def format_amount(amount) -> Decimal:
    """Round to paise, half-up."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_gst_date(d: date) -> str:
    """DD-MM-YYYY, as the portal expects."""
    return d.strftime("%d-%m-%Y")


def format_return_period(d: date) -> str:
    """MMYYYY filing period."""
    return f"{d.month:02d}{d.year}"


def is_valid_return_period(period: str | None) -> bool:
    return bool(period) and bool(RETURN_PERIOD_REGEX.match(period))
