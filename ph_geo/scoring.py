from __future__ import annotations

import re
from dataclasses import dataclass

# ── Text confidence ───────────────────────────────────────────────────

_STRONG_INDICATORS = [
    re.compile(r"\b(?:location|address|lugar)\s*(?:is\b|[:=])"),
    re.compile(r"\bhere\s+in\b"),
    re.compile(r"\b(?:from|at)\s+[a-z]"),
    re.compile(r"\b(?:taga|galing|nasa|dito\s+sa|rito\s+sa|naa\s+sa|nia\s+sa|gikan\s+sa)\b"),
    re.compile(r"\b(?:dito|rito|sa)\s+[a-z]"),
    re.compile(r",\s*philippines\b"),
]

_WEAK_INDICATORS = [
    re.compile(r"\b(?:in|near|around)\s+[a-z]"),
    re.compile(r"\barea\b"),
    re.compile(r"\b(?:my|our)\s+area\b"),
    re.compile(r"\bsa\s+area\s+namin\s+sa\b"),
]

# pattern -> minimum confidence once matched
_FLOORS = [
    (re.compile(r"\blocation\s*:"), 0.8),
    (re.compile(r"\b(?:brgy\.?|barangay)\s*[\w\s-]+?,\s*\w+"), 0.7),
    (re.compile(r"\bphilippines\b"), 0.6),
    (re.compile(r"\b\w+\s+area\b"), 0.5),
]

_SLANG_RE = re.compile(r"\b(?:af|he(?:he)+|ha(?:ha)+|lol|lmao|charot)\b", re.IGNORECASE)
_SLANG_DAMPING = 0.3

# Outage posts: "wala", "hindi", "no signal". "No. 5" is a house or barangay number.
_NEGATION_RE = re.compile(r"\b(?:wala|walang|hindi|none|not|no(?!\.?\s*\d))\b", re.IGNORECASE)


def has_slang_marker(text: str) -> bool:
    return bool(_SLANG_RE.search(text))


def has_negation(text: str) -> bool:
    return bool(_NEGATION_RE.search(text))


def has_strong_indicator(text: str) -> bool:
    lowered = text.lower()
    return any(p.search(lowered) for p in _STRONG_INDICATORS)


def text_confidence(text: str) -> float:
    """
    0-1 strength of the text's location-context signal.
    Explicit declaration > locative marker > bare "area" suffix; slang damps it.
    """
    lowered = text.lower()
    score = 0.0

    if has_strong_indicator(text):
        score += 0.4
    score += 0.2 * sum(1 for p in _WEAK_INDICATORS if p.search(lowered))

    for pattern, floor in _FLOORS:
        if pattern.search(lowered):
            score = max(score, floor)

    if has_slang_marker(text):
        score *= _SLANG_DAMPING

    return max(0.0, min(1.0, score))


# ── Weighted sum ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoreWeights:
    base_barangay: float = 0.55
    base_city: float = 0.45
    base_province: float = 0.30
    corroboration: float = 0.25
    ambiguity_penalty: float = 0.60
    explicit_marker: float = 0.10
    country_marker: float = 0.10
    slang_penalty: float = 0.35
    negation_penalty: float = 0.15
    # Per carrier/app name mentioned
    service_penalty: float = 0.10


@dataclass(frozen=True)
class ScoreSignals:
    level: str                      # barangay, city, province
    corroborated: bool = False
    ambiguous_uncorroborated: bool = False
    explicit_marker: bool = False
    country_marker: bool = False
    slang: bool = False
    negation: bool = False
    service_mentions: int = 0
    text_confidence: float = 0.0


class Scorer:
    """Transparent weighted sum over named signals. Pure, no state beyond the weights."""

    def __init__(self, weights: ScoreWeights | None = None):
        self.weights = weights or ScoreWeights()

    def base(self, level: str) -> float:
        w = self.weights
        return {
            "barangay": w.base_barangay,
            "city": w.base_city,
            "province": w.base_province,
        }.get(level, 0.0)

    def raw(self, signals: ScoreSignals) -> float:
        w = self.weights
        additive = (
            self.base(signals.level)
            + w.corroboration * signals.corroborated
            - w.ambiguity_penalty * signals.ambiguous_uncorroborated
            + w.explicit_marker * signals.explicit_marker
            + w.country_marker * signals.country_marker
            - w.slang_penalty * signals.slang
            - w.negation_penalty * signals.negation
            - w.service_penalty * signals.service_mentions
        )
        additive = max(0.0, min(1.0, additive))
        return additive * (1.0 + signals.text_confidence)

    def score(self, signals: ScoreSignals) -> float:
        """Confidence in [0, 1]."""
        return round(min(1.0, self.raw(signals) / 2.0), 4)
