# gst_engine/domain/services/gst_export.py
"""
Portal-ready JSON files for GSTR-1 and GSTR-3B.

The JSON is what the offline utility / portal upload accepts: field names as
in the models, amounts as numbers, unset optional fields omitted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from gst_engine.core.config import settings
from gst_engine.domain.models.gst import ValidationResult
from gst_engine.domain.models.gstr1 import Gstr1Return
from gst_engine.domain.models.gstr3b import Gstr3bReturn
from gst_engine.domain.services.return_validation import validate_gstr1, validate_gstr3b

logger = logging.getLogger("gst_export")

_MB = 1024 * 1024


@dataclass
class FileSizeCheck:
    is_valid: bool
    size_in_mb: float
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"is_valid": self.is_valid, "size_in_mb": self.size_in_mb, "message": self.message}


@dataclass
class PortalFileResult:
    json: str
    filename: str
    size: int  # UTF-8 bytes
    size_check: FileSizeCheck
    validation: Optional[ValidationResult] = None
    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "json": self.json,
            "filename": self.filename,
            "size": self.size,
            "size_check": self.size_check.to_dict(),
            "validation": self.validation.model_dump() if self.validation else None,
            "summary": self.summary,
        }


@dataclass
class PortalPackage:
    gstr1: PortalFileResult
    gstr3b: PortalFileResult
    package_summary: Dict[str, Any]


def validate_file_size(size: int, max_bytes: int | None = None) -> FileSizeCheck:
    """Check an export against the portal upload limit (5 MB by default)."""
    limit = max_bytes if max_bytes is not None else settings.PORTAL_MAX_FILE_SIZE_BYTES
    size_in_mb = size / _MB
    limit_mb = limit / _MB
    if size > limit:
        return FileSizeCheck(
            is_valid=False,
            size_in_mb=size_in_mb,
            message=(
                f"File size ({size_in_mb:.2f} MB) exceeds portal limit of {limit_mb:.0f} MB. "
                "Consider splitting the data."
            ),
        )
    return FileSizeCheck(
        is_valid=True,
        size_in_mb=size_in_mb,
        message=f"File size ({size_in_mb:.2f} MB) is within acceptable limits.",
    )


def _to_json(ret: Union[Gstr1Return, Gstr3bReturn], pretty: bool) -> str:
    payload = ret.model_dump(mode="json", exclude_none=True)
    return json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False)


def _gstr1_summary(ret: Gstr1Return) -> Dict[str, Any]:
    return {
        "gstin": ret.gstin,
        "period": ret.ret_period,
        "b2b_customers": len(ret.b2b),
        "b2b_invoices": sum(len(e.inv) for e in ret.b2b),
        "b2cl_invoices": sum(len(e.inv) for e in ret.b2cl),
        "b2cs_entries": len(ret.b2cs),
        "export_invoices": sum(len(e.inv) for e in ret.exp),
        "nil_entries": len(ret.nil.inv),
        "hsn_codes": len(ret.hsn),
        "cdnr_notes": sum(len(e.nt) for e in ret.cdnr),
        "cdnur_notes": sum(len(e.nt) for e in ret.cdnur),
    }


def _gstr3b_summary(ret: Gstr3bReturn) -> Dict[str, Any]:
    out = ret.sup_details.osup_det
    itc = ret.itc_elg
    avl = itc.itc_avl[0] if itc.itc_avl else None
    return {
        "gstin": ret.gstin,
        "period": ret.ret_period,
        "outward_taxable_value": float(out.txval),
        "outward_igst": float(out.iamt),
        "outward_cgst": float(out.camt),
        "outward_sgst": float(out.samt),
        "itc_available_igst": float(avl.iamt) if avl else 0.0,
        "itc_available_cgst": float(avl.camt) if avl else 0.0,
        "itc_available_sgst": float(avl.samt) if avl else 0.0,
        "net_itc_igst": float(itc.itc_net.iamt),
        "net_itc_cgst": float(itc.itc_net.camt),
        "net_itc_sgst": float(itc.itc_net.samt),
    }


def export_gstr1_for_portal(ret: Gstr1Return, pretty: bool = True, validate: bool = True) -> PortalFileResult:
    validation = None
    if validate:
        validation = validate_gstr1(ret)
        if not validation.is_valid:
            logger.warning(
                "GSTR-1 validation failed for %s %s; the portal may reject the file: %s",
                ret.gstin, ret.ret_period, "; ".join(validation.errors),
            )

    body = _to_json(ret, pretty)
    size = len(body.encode("utf-8"))
    return PortalFileResult(
        json=body,
        filename=f"GSTR1_{ret.ret_period}_{ret.gstin}.json",
        size=size,
        size_check=validate_file_size(size),
        validation=validation,
        summary=_gstr1_summary(ret),
    )


def export_gstr3b_for_portal(ret: Gstr3bReturn, pretty: bool = True, validate: bool = True) -> PortalFileResult:
    validation = None
    if validate:
        validation = validate_gstr3b(ret)
        if not validation.is_valid:
            logger.warning(
                "GSTR-3B validation failed for %s %s; the portal may reject the file: %s",
                ret.gstin, ret.ret_period, "; ".join(validation.errors),
            )

    body = _to_json(ret, pretty)
    size = len(body.encode("utf-8"))
    return PortalFileResult(
        json=body,
        filename=f"GSTR3B_{ret.ret_period}_{ret.gstin}.json",
        size=size,
        size_check=validate_file_size(size),
        validation=validation,
        summary=_gstr3b_summary(ret),
    )


def export_for_portal(
    ret: Union[Gstr1Return, Gstr3bReturn],
    pretty: bool = True,
    validate: bool = True,
) -> PortalFileResult:
    """Export either return type."""
    if isinstance(ret, Gstr1Return):
        return export_gstr1_for_portal(ret, pretty=pretty, validate=validate)
    if isinstance(ret, Gstr3bReturn):
        return export_gstr3b_for_portal(ret, pretty=pretty, validate=validate)
    raise TypeError(f"Unsupported return type: {type(ret).__name__}")


def generate_portal_package(gstr1: Gstr1Return, gstr3b: Gstr3bReturn) -> PortalPackage:
    """Both returns for one period, with a combined summary."""
    r1 = export_gstr1_for_portal(gstr1)
    r3b = export_gstr3b_for_portal(gstr3b)

    all_valid = all(r.validation.is_valid for r in (r1, r3b) if r.validation is not None)
    return PortalPackage(
        gstr1=r1,
        gstr3b=r3b,
        package_summary={
            "period": gstr1.ret_period,
            "gstin": gstr1.gstin,
            "total_files": 2,
            "total_size": r1.size + r3b.size,
            "all_valid": all_valid,
        },
    )
