# gst_engine/core/errors.py
"""
Error taxonomy for the GST core.

GSTError is the base; every subtype carries a stable ``code`` so an API
boundary can map it straight to a 4xx response.
"""

from __future__ import annotations

from typing import Any


class GSTError(Exception):
    """Base error for GST computation, validation and return generation."""

    def __init__(self, message: str, code: str = "GST_ERROR", details: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"error": self.code, "message": self.message}
        if self.details is not None:
            out["details"] = self.details
        return out


class GSTINValidationError(GSTError):
    """Raised when a GSTIN / PAN / HSN / SAC identifier is malformed.

    ``kind`` names the violated rule: ``format``, ``state``, ``pan``,
    ``entity`` or ``checksum``. A bare state code that is not in the state
    table is reported with kind ``state`` and code ``INVALID_STATE_CODE``.
    """

    def __init__(
        self,
        message: str,
        kind: str = "format",
        details: Any = None,
        code: str = "GSTIN_VALIDATION_ERROR",
    ):
        super().__init__(message, code, details)
        self.kind = kind


class TaxCalculationError(GSTError):
    """Raised for out-of-range amounts, rates or quantities."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, "TAX_CALCULATION_ERROR", details)


class ReturnGenerationError(GSTError):
    """Raised when a GSTR-1 / GSTR-3B return cannot be assembled."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message, "RETURN_GENERATION_ERROR", details)
