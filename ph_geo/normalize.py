"""
Place-name normalization.

Two distinct jobs live here:
  1. normalize_key(): the canonical lookup key every index table is keyed by.
     Deterministic and idempotent (normalize_key(normalize_key(x)) == normalize_key(x)).
  2. expand_abbreviations(): rewrites well-known short forms in free text
     ("QC", "Brgy.", "Sta.") before any extraction pattern runs.

Plus display casing for names coming out of the all-caps gazetteer.
"""

from __future__ import annotations

import re
import unicodedata

_PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_UNIT_PREFIX_RE = re.compile(r"^(?:barangay|brgy|brg|bgy|city of|municipality of)\s+")


def fold_diacritics(text: str) -> str:
    """'Parañaque' -> 'Paranaque', 'Dasmariñas' -> 'Dasmarinas'."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_key(text: str | None) -> str:
    """
    Canonical lookup key for a place name.
    Rules:
      1. Fold diacritics and lowercase
      2. Drop parenthetical notes ("RODRIGUEZ (MONTALBAN)" -> "rodriguez")
      3. Collapse every non-alphanumeric run to one space
      4. Strip "Barangay"/"Brgy" and "City of"/"Municipality of" prefixes
    """
    if not text:
        return ""
    key = fold_diacritics(text).lower()
    key = _PARENTHETICAL_RE.sub(" ", key)
    key = _NON_ALNUM_RE.sub(" ", key).strip()

    # Prefixes can stack ("Brgy. Barangay 5"); strip until stable
    while True:
        stripped = _UNIT_PREFIX_RE.sub("", key)
        if stripped == key:
            return key
        key = stripped


# ── Free-text abbreviation table ──────────────────────────────────────

# Applied in order, case-insensitive, on whole tokens only.
TEXT_ABBREVIATIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bQC\b", re.IGNORECASE), "Quezon City"),
    (re.compile(r"\bBGC\b", re.IGNORECASE), "Taguig"),
    (re.compile(r"\bGensan\b", re.IGNORECASE), "General Santos"),
    (re.compile(r"\bCDO\b", re.IGNORECASE), "Cagayan de Oro"),
    (re.compile(r"\bGen\.?\s+Trias\b", re.IGNORECASE), "General Trias"),
    (re.compile(r"\bKalookan\b", re.IGNORECASE), "Caloocan"),
    # Renamed municipality: Montalban has been Rodriguez since 1982
    (re.compile(r"\bMontalban\b", re.IGNORECASE), "Rodriguez"),
    (re.compile(r"\b(?:brgy|brg|bgy)\b\.?\s*", re.IGNORECASE), "Barangay "),
    (re.compile(r"\bSta\.?\s+", re.IGNORECASE), "Santa "),
    (re.compile(r"\bSto\.?\s+", re.IGNORECASE), "Santo "),
    (re.compile(r"\bGen\.\s+", re.IGNORECASE), "General "),
    (re.compile(r"\bMt\.\s+", re.IGNORECASE), "Mount "),
]


def expand_abbreviations(text: str) -> str:
    """Expand the fixed abbreviation table. Idempotent on its own output."""
    for pattern, replacement in TEXT_ABBREVIATIONS:
        text = pattern.sub(replacement, text)
    return text


# ── Display casing ────────────────────────────────────────────────────

_LOWERCASE_WORDS = {"de", "del", "la", "las", "los", "ng", "ni", "sa", "na", "of"}
_ROMAN_NUMERALS = {
    "i", "ii", "iii", "iv", "v", "vi", "vii", "viii", "ix", "x", "xi", "xii", "xiii",
}
_UPPERCASE_WORDS = {"ncr", "car", "barmm", "bf", "nbbs", "up"}
_INITIALS_RE = re.compile(r"(?:[a-z]\.)+")


def _case_part(part: str) -> str:
    if part in _ROMAN_NUMERALS or part in _UPPERCASE_WORDS or _INITIALS_RE.fullmatch(part):
        return part.upper()
    for i, ch in enumerate(part):
        if ch.isalpha():
            return part[:i] + ch.upper() + part[i + 1:]
    return part


def proper_case(name: str | None) -> str:
    """
    "CITY OF LAS PIÑAS"     -> "City of Las Piñas"
    "RODRIGUEZ (MONTALBAN)" -> "Rodriguez (Montalban)"
    "REGION IV-A"           -> "Region IV-A"
    Only the casing changes, so normalize_key(proper_case(x)) == normalize_key(x).
    """
    if not name:
        return ""
    words = name.lower().split()
    out = []
    for i, word in enumerate(words):
        if i > 0 and word in _LOWERCASE_WORDS:
            out.append(word)
            continue
        out.append("-".join(_case_part(p) for p in word.split("-")))
    return " ".join(out)
