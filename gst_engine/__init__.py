# gst_engine/__init__.py
"""Indian GST computation, identifier validation and statutory return core."""

from gst_engine.core.errors import (
    GSTError,
    GSTINValidationError,
    ReturnGenerationError,
    TaxCalculationError,
)
from gst_engine.domain.services.gst_export import export_for_portal, generate_portal_package
from gst_engine.domain.services.gst_service import batch_calculate, calculate_gst, get_gst_info
from gst_engine.domain.services.gstin_pan_validation import (
    extract_gstin,
    generate_check_digit,
    validate_gstin,
    validate_hsn,
    validate_pan,
    validate_sac,
)
from gst_engine.domain.services.gstr1_service import generate_gstr1
from gst_engine.domain.services.gstr3b_service import generate_gstr3b, summarize_outward_supplies
from gst_engine.domain.services.return_validation import validate_gstr1, validate_gstr3b

__all__ = [
    "GSTError",
    "GSTINValidationError",
    "ReturnGenerationError",
    "TaxCalculationError",
    "batch_calculate",
    "calculate_gst",
    "export_for_portal",
    "extract_gstin",
    "generate_check_digit",
    "generate_gstr1",
    "generate_gstr3b",
    "generate_portal_package",
    "get_gst_info",
    "summarize_outward_supplies",
    "validate_gstin",
    "validate_gstr1",
    "validate_gstr3b",
    "validate_hsn",
    "validate_pan",
    "validate_sac",
]
