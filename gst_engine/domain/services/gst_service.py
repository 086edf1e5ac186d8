# gst_engine/domain/services/gst_service.py
"""Entry points that take state codes instead of an inter-state flag."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from gst_engine.core.errors import GSTINValidationError
from gst_engine.domain.models.gst import ZERO, TaxBreakdown
from gst_engine.domain.services.gstin_pan_validation import (
    SAC_REGEX,
    get_hsn_chapter_info,
    get_sac_category_info,
    is_intra_state,
    is_valid_state_code,
)
from gst_engine.domain.services.tax_calculator import calculate_tax, get_rate_manager

logger = logging.getLogger("gst_service")


class BatchItemTax(TaxBreakdown):
    description: Optional[str] = None
    hsn_sac: Optional[str] = None


@dataclass
class GSTInfo:
    applicable_rate: Decimal
    calculation: TaxBreakdown
    is_inter_state: bool = False
    hsn_info: dict[str, str] | None = None
    sac_info: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "applicable_rate": float(self.applicable_rate),
            "calculation": self.calculation.model_dump(mode="json"),
            "is_inter_state": self.is_inter_state,
        }
        if self.hsn_info:
            out["hsn_info"] = self.hsn_info
        if self.sac_info:
            out["sac_info"] = self.sac_info
        return out


def _require_state(state_code: str, role: str) -> None:
    if not is_valid_state_code(state_code):
        raise GSTINValidationError(
            f"Invalid {role} state code: {state_code}",
            kind="state",
            details={"state_code": state_code},
            code="INVALID_STATE_CODE",
        )


def calculate_gst(
    amount,
    rate,
    supplier_state: str,
    customer_state: str,
    *,
    is_inclusive: bool = False,
    cess_rate=ZERO,
    apply_reverse_charge: bool = False,
) -> TaxBreakdown:
    """
    Tax breakdown for an amount moving between two states.

    >>> calculate_gst(10000, 18, "27", "29").igst
    Decimal('1800.00')
    """
    _require_state(supplier_state, "supplier")
    _require_state(customer_state, "customer")

    return calculate_tax(
        amount,
        rate,
        is_inclusive=is_inclusive,
        is_inter_state=not is_intra_state(supplier_state, customer_state),
        cess_rate=cess_rate,
        apply_reverse_charge=apply_reverse_charge,
    )


def get_gst_info(
    amount,
    hsn_sac: str | None = None,
    supplier_state: str | None = None,
    customer_state: str | None = None,
) -> GSTInfo:
    """Resolved rate, exclusive breakdown and HSN chapter / SAC category."""
    rate = get_rate_manager().get_rate(hsn_sac or "")
    inter_state = bool(supplier_state and customer_state) and not is_intra_state(supplier_state, customer_state)

    info = GSTInfo(
        applicable_rate=rate,
        calculation=calculate_tax(amount, rate, is_inter_state=inter_state),
        is_inter_state=inter_state,
    )

    # SAC codes are 6 digits in chapter 99
    if hsn_sac and SAC_REGEX.match(hsn_sac) and hsn_sac.startswith("99"):
        info.sac_info = get_sac_category_info(hsn_sac)
    elif hsn_sac and hsn_sac.isdigit() and 2 <= len(hsn_sac) <= 8:
        info.hsn_info = get_hsn_chapter_info(hsn_sac)
    return info


def batch_calculate(
    items: Iterable[Mapping[str, Any]],
    supplier_state: str,
    customer_state: str,
) -> list[BatchItemTax]:
    """
    Exclusive breakdown for each ``{"amount", "gst_rate"?, "hsn_sac"?, "description"?}``.
    Items without a rate use the rate resolved for their HSN / SAC.
    """
    inter_state = not is_intra_state(supplier_state, customer_state)
    manager = get_rate_manager()

    results = []
    for item in items:
        hsn_sac = item.get("hsn_sac")
        rate = item.get("gst_rate")
        if rate is None:
            rate = manager.get_rate(hsn_sac or "")
        breakdown = calculate_tax(item["amount"], rate, is_inter_state=inter_state)
        results.append(
            BatchItemTax(**breakdown.model_dump(), description=item.get("description"), hsn_sac=hsn_sac)
        )
    logger.debug("Batch-calculated %d items (inter_state=%s)", len(results), inter_state)
    return results
