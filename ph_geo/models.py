"""
Pydantic models used across the resolver for validation and serialization.
These are pure data objects; the gazetteer rows themselves are frozen
dataclasses in gazetteer.py.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

from ph_geo.normalize import proper_case

if TYPE_CHECKING:
    from ph_geo.gazetteer import AdminUnit

NONE_SENTINEL = "None"


# ── Enums ──────────────────────────────────────────────────────────────

class CandidateType(str, Enum):
    BARANGAY = "barangay"
    CITY = "city"
    PROVINCE = "province"
    AREA = "area"
    SEQUENCE = "sequence"
    LOCATION = "location"


# ── Extraction models ─────────────────────────────────────────────────

class Candidate(BaseModel):
    """A text span hypothesized to name a location. Created per parse call."""
    type: CandidateType
    text: str = Field(..., min_length=1)
    # Second span used for disambiguation, e.g. the city after a barangay
    context: Optional[str] = None

    model_config = {"frozen": True}


class CandidateValidation(BaseModel):
    is_valid: bool
    reason: str
    candidate: str


# ── Result model ──────────────────────────────────────────────────────

class LocationMatch(BaseModel):
    """
    Resolved administrative location. Empty levels carry the "None" sentinel.
    Names are display-cased gazetteer names, never raw input text.
    """
    region: str = NONE_SENTINEL
    province: str = NONE_SENTINEL
    city: str = NONE_SENTINEL
    barangay: str = NONE_SENTINEL
    confidence: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def from_unit(cls, unit: AdminUnit, confidence: float) -> LocationMatch:
        return cls(
            region=proper_case(unit.region) or NONE_SENTINEL,
            province=proper_case(unit.province) or NONE_SENTINEL,
            city=proper_case(unit.city) or NONE_SENTINEL,
            barangay=proper_case(unit.barangay) or NONE_SENTINEL,
            confidence=round(confidence, 4),
        )

    @property
    def level(self) -> str:
        for name in ("barangay", "city", "province"):
            if getattr(self, name) != NONE_SENTINEL:
                return name
        return "region"


# ── API models ────────────────────────────────────────────────────────

class ParseRequest(BaseModel):
    text: str = Field(..., max_length=10_000)


class ParseResponse(BaseModel):
    text: str
    location: Optional[LocationMatch] = None
    formatted: str = NONE_SENTINEL


class BatchParseRequest(BaseModel):
    texts: list[str] = Field(..., min_length=1)


class BatchParseResponse(BaseModel):
    results: list[ParseResponse]
    total: int
    resolved: int


class HealthResponse(BaseModel):
    status: str
    barangays: int
    cities: int
    provinces: int
    regions: int
    ambiguous_barangays: int
    ambiguous_cities: int
