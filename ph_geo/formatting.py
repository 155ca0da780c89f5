"""
Human-readable rendering of a LocationMatch.

"City of Las Piñas" -> "Las Pinas City", NCR districts -> "Metro Manila",
and the one-line "Region: ..., Province: ..., City: ..., Barangay: ..." form.
"""

from __future__ import annotations

import re
from typing import Optional

from ph_geo.models import NONE_SENTINEL, LocationMatch
from ph_geo.normalize import fold_diacritics, proper_case

_CITY_OF_RE = re.compile(r"^(?:city|municipality) of\s+", re.IGNORECASE)
_NCR_NAMES = ("ncr", "national capital region")


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value != NONE_SENTINEL


def format_region(region: str) -> str:
    if not _is_set(region):
        return NONE_SENTINEL
    if region.lower() in _NCR_NAMES:
        return "National Capital Region (NCR)"
    return proper_case(region)


def format_province(province: str, region: str = NONE_SENTINEL) -> str:
    if not _is_set(province):
        return NONE_SENTINEL
    if region.lower() in _NCR_NAMES or "national capital region" in province.lower():
        return "Metro Manila"
    return proper_case(province)


def format_city(city: str) -> str:
    """'City of Malolos' -> 'Malolos City'; municipalities keep their plain name."""
    if not _is_set(city):
        return NONE_SENTINEL
    is_city = bool(re.match(r"^city of\s+", city, re.IGNORECASE))
    name = proper_case(_CITY_OF_RE.sub("", city))
    if is_city and not name.lower().endswith(" city"):
        name += " City"
    return name


def format_barangay(barangay: str) -> str:
    if not _is_set(barangay):
        return NONE_SENTINEL
    if "poblacion" in barangay.lower() or "(pob.)" in barangay.lower():
        return "Poblacion"
    return proper_case(barangay)


def format_location(match: LocationMatch | None) -> str:
    """One-line rendering, ASCII only. "None" when there is nothing to show."""
    if match is None:
        return NONE_SENTINEL

    fields = [
        ("Region", format_region(match.region)),
        ("Province", format_province(match.province, match.region)),
        ("City", format_city(match.city)),
        ("Barangay", format_barangay(match.barangay)),
    ]
    parts = [f"{label}: {fold_diacritics(value)}" for label, value in fields if value != NONE_SENTINEL]
    return ", ".join(parts) if parts else NONE_SENTINEL
