# gst_engine/domain/models/hsn.py
"""
Domain dataclasses for HSN / SAC classification.

HSNChapter:      2-digit chapter with its tariff section.
HSNCode:         A registered 2/4/6/8-digit code with recommended rate.
HSNLookupResult: What a lookup returns, tagged with where it came from.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from decimal import Decimal
from typing import Any, Literal

LookupSource = Literal["api", "cache", "fallback"]


def _dec(value: Any) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value))


@dataclass(frozen=True)
class HSNChapter:
    code: str
    description: str
    section: str


@dataclass(frozen=True)
class HSNCode:
    code: str
    description: str
    chapter: str
    gst_rate: Decimal | None = None
    cess: Decimal | None = None
    unit: str | None = None
    notes: str | None = None


@dataclass
class HSNLookupResult:
    """Result of a registry or provider lookup."""

    is_valid: bool
    code: str
    description: str
    gst_rate: Decimal | None = None
    cess: Decimal | None = None
    unit: str | None = None
    chapter: str | None = None
    chapter_description: str | None = None
    source: LookupSource = "fallback"
    provider: str | None = None

    def tagged(self, source: LookupSource, provider: str | None = None) -> HSNLookupResult:
        return replace(self, source=source, provider=provider or self.provider)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for key in ("gst_rate", "cess"):
            if d[key] is not None:
                d[key] = str(d[key])
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HSNLookupResult:
        return cls(
            is_valid=bool(data.get("is_valid", True)),
            code=str(data["code"]),
            description=data.get("description") or "",
            gst_rate=_dec(data.get("gst_rate")),
            cess=_dec(data.get("cess")),
            unit=data.get("unit"),
            chapter=data.get("chapter"),
            chapter_description=data.get("chapter_description"),
            source=data.get("source") or "api",
            provider=data.get("provider"),
        )
