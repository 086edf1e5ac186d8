# gst_engine/domain/services/hsn_registry.py
"""
HSN Classification Registry.

Read-only lookups over the static chapter and code tables. Rates resolve by
exact code first, then by the longest registered prefix down to the 2-digit
chapter.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from gst_engine.domain.models.hsn import HSNChapter, HSNCode, HSNLookupResult
from gst_engine.domain.services.hsn_data import COMMON_HSN_CODES, HSN_CHAPTERS


class HSNRegistry:
    """Immutable index over HSN chapters and codes."""

    def __init__(
        self,
        chapters: dict[str, HSNChapter] | None = None,
        codes: Iterable[HSNCode] | None = None,
    ) -> None:
        self._chapters = dict(chapters if chapters is not None else HSN_CHAPTERS)
        self._codes = list(codes if codes is not None else COMMON_HSN_CODES)
        self._by_code = {c.code: c for c in self._codes}

    # ---- Chapters ----

    def get_chapter(self, chapter_code: str) -> HSNChapter | None:
        return self._chapters.get(chapter_code.zfill(2))

    def get_all_chapters(self) -> list[HSNChapter]:
        return list(self._chapters.values())

    def get_chapters_by_section(self, section: str) -> list[HSNChapter]:
        return [ch for ch in self._chapters.values() if ch.section == section]

    # ---- Codes ----

    def find_by_code(self, code: str) -> HSNCode | None:
        return self._by_code.get(code)

    def search_by_description(self, query: str) -> list[HSNCode]:
        """Case-insensitive substring search over code descriptions."""
        q = query.lower()
        return [c for c in self._codes if q in c.description.lower()]

    def get_by_chapter(self, chapter_code: str) -> list[HSNCode]:
        chapter = chapter_code.zfill(2)
        return [c for c in self._codes if c.chapter == chapter]

    def get_by_gst_rate(self, rate) -> list[HSNCode]:
        rate = Decimal(str(rate))
        return [c for c in self._codes if c.gst_rate == rate]

    def resolve(self, code: str) -> HSNCode | None:
        """Exact match, else the longest registered prefix (min 2 digits)."""
        match = self._by_code.get(code)
        if match:
            return match
        for length in range(len(code) - 1, 1, -1):
            match = self._by_code.get(code[:length])
            if match:
                return match
        return None

    def get_recommended_rate(self, code: str) -> Decimal | None:
        """
        Recommended GST rate for an HSN code.

        e.g. '84713000' has no entry of its own and resolves through '847130'.
        Returns None when neither the code nor any prefix is registered.
        """
        match = self.resolve(code)
        return match.gst_rate if match else None

    def get_details(self, code: str) -> dict:
        return {
            "code": code,
            "chapter": self.get_chapter(code[:2]),
            "details": self.find_by_code(code),
            "recommended_gst_rate": self.get_recommended_rate(code),
        }

    def lookup(self, code: str) -> HSNLookupResult:
        """Synchronous lookup against the static tables (``source='fallback'``)."""
        if not code or len(code) < 2:
            return HSNLookupResult(is_valid=False, code=code, description="Invalid HSN code")

        chapter = self.get_chapter(code[:2])
        if chapter is None:
            return HSNLookupResult(is_valid=False, code=code, description="Unknown HSN chapter")

        exact = self.find_by_code(code)
        if exact:
            return HSNLookupResult(
                is_valid=True,
                code=exact.code,
                description=exact.description,
                gst_rate=exact.gst_rate,
                cess=exact.cess,
                unit=exact.unit,
                chapter=chapter.code,
                chapter_description=chapter.description,
            )

        return HSNLookupResult(
            is_valid=True,
            code=code,
            description=chapter.description,
            gst_rate=self.get_recommended_rate(code),
            chapter=chapter.code,
            chapter_description=chapter.description,
        )

    def get_all_codes(self) -> list[HSNCode]:
        return list(self._codes)

    def get_count(self) -> dict[str, int]:
        return {"chapters": len(self._chapters), "codes": len(self._codes)}


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_registry: HSNRegistry | None = None


def get_hsn_registry() -> HSNRegistry:
    """Get the shared registry built from the static tables."""
    global _registry
    if _registry is None:
        _registry = HSNRegistry()
    return _registry
