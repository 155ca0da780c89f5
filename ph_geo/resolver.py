"""
Disambiguation and scoring: candidates -> single best LocationMatch.

Flow per call:
  1. Deduplicate candidates by (type, normalized text, normalized context)
  2. Drop candidates the false-positive filter rejects
  3. Collect anchors: the cities/provinces each surviving candidate names
  4. Interpret every candidate at barangay, city and province level,
     using the other candidates' anchors as disambiguation hints
  5. Score each interpretation with the weighted-sum Scorer
  6. Walk interpretations best-first, re-validate the hierarchy, and return
     the first one that clears its level's threshold
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator

from ph_geo.config import ResolverConfig, get_settings
from ph_geo.extract import extract, preprocess
from ph_geo.context import analyze_location_risk
from ph_geo.filters import (
    count_service_mentions,
    extract_word_with_boundaries,
    has_country_marker,
    has_explicit_location_marker,
    is_false_positive,
    validate_location_candidate,
)
from ph_geo.gazetteer import AdminUnit, GazetteerIndex, get_index
from ph_geo.models import Candidate, CandidateType, LocationMatch
from ph_geo.normalize import normalize_key
from ph_geo.scoring import (
    ScoreSignals,
    Scorer,
    has_negation,
    has_slang_marker,
    has_strong_indicator,
    text_confidence,
)

logger = logging.getLogger(__name__)

_LEVEL_RANK = {"barangay": 0, "city": 1, "province": 2, "region": 3}


@dataclass(frozen=True)
class Anchor:
    """The cities and provinces one span of text could name."""
    key: str
    text: str
    city_keys: frozenset[str]
    province_keys: frozenset[str]


@dataclass(frozen=True)
class Interpretation:
    unit: AdminUnit
    candidate: Candidate
    city_corroborated: bool = False
    province_corroborated: bool = False
    ambiguous: bool = False

    @property
    def corroborated(self) -> bool:
        return self.city_corroborated or self.province_corroborated


@dataclass(frozen=True)
class ScoredInterpretation:
    interpretation: Interpretation
    confidence: float

    @property
    def level(self) -> str:
        return self.interpretation.unit.level


class LocationResolver:
    def __init__(
        self,
        index: GazetteerIndex,
        scorer: Scorer | None = None,
        config: ResolverConfig | None = None,
    ):
        self.index = index
        self.scorer = scorer or Scorer()
        self.config = config or get_settings().resolver

    # ── Public ────────────────────────────────────────────────────────

    def resolve_text(self, text: str) -> LocationMatch | None:
        risk = analyze_location_risk(text)
        if risk.risks:
            logger.debug(
                "Social-context risk %s for %r: %s",
                risk.level, text, ", ".join(f"{r.kind} {r.value}" for r in risk.risks),
            )
        working = preprocess(text)
        candidates = extract(text, min_length=self.config.min_candidate_length)
        return self.resolve(candidates, working)

    def resolve(self, candidates: list[Candidate], full_text: str) -> LocationMatch | None:
        if count_service_mentions(full_text) and not has_strong_indicator(full_text):
            logger.debug("Service name without a locative marker in %r", full_text)
            return None

        survivors = [c for c in self._dedupe(candidates) if self._passes_filter(c, full_text)]
        if not survivors:
            logger.debug("No candidates survived filtering for %r", full_text)
            return None

        anchors = self._collect_anchors(survivors)
        interpretations: list[Interpretation] = []
        for candidate in survivors:
            interpretations.extend(self._interpret(candidate, anchors))

        scored = self._score_all(interpretations, full_text)
        scored.sort(key=lambda s: (-s.confidence, _LEVEL_RANK[s.level]))

        for s in scored:
            unit = self._reconcile(s.interpretation.unit)
            if unit is None:
                continue
            threshold = (
                self.config.province_min_confidence
                if unit.level == "province"
                else self.config.min_confidence
            )
            if unit.level == "region" or s.confidence < threshold:
                continue
            logger.debug(
                "Resolved %r -> %s (%.3f) via %s candidate %r",
                full_text, unit, s.confidence,
                s.interpretation.candidate.type.value, s.interpretation.candidate.text,
            )
            return LocationMatch.from_unit(unit, s.confidence)

        return None

    # ── Candidate hygiene ─────────────────────────────────────────────

    @staticmethod
    def _dedupe(candidates: list[Candidate]) -> list[Candidate]:
        seen: set[tuple[str, str, str]] = set()
        out = []
        for c in candidates:
            key = (c.type.value, normalize_key(c.text), normalize_key(c.context))
            if key in seen:
                continue
            seen.add(key)
            out.append(c)
        return out

    def _passes_filter(self, candidate: Candidate, full_text: str) -> bool:
        if candidate.type == CandidateType.SEQUENCE:
            parts = candidate.text.split()
            if any(is_false_positive(p, full_text) for p in parts):
                return False
            return extract_word_with_boundaries(full_text, candidate.text) is not None

        result = validate_location_candidate(
            candidate.text, full_text, min_length=self.config.min_candidate_length
        )
        if not result.is_valid:
            logger.debug("Rejected %r: %s", candidate.text, result.reason)
        return result.is_valid

    # ── Anchors ───────────────────────────────────────────────────────

    def _resolve_span(self, span: str) -> str:
        """Longest word prefix of `span` the gazetteer knows as a city or province."""
        words = span.split()
        for size in range(len(words), 0, -1):
            prefix = " ".join(words[:size])
            if self.index.city_units(prefix) or self.index.province_units(prefix):
                return prefix
        return span

    def _anchor(self, text: str) -> Anchor:
        return Anchor(
            key=normalize_key(text),
            text=text,
            city_keys=frozenset(u.city_key for u in self.index.city_units(text)),
            province_keys=frozenset(u.province_key for u in self.index.province_units(text)),
        )

    def _collect_anchors(self, candidates: list[Candidate]) -> list[Anchor]:
        anchors: list[Anchor] = []
        seen: set[str] = set()
        for c in candidates:
            if c.type in (CandidateType.SEQUENCE, CandidateType.AREA):
                continue
            spans = [c.text]
            if c.context:
                spans.append(self._resolve_span(c.context))
            if c.type == CandidateType.CITY:
                spans = [self._resolve_span(c.text)]
            for span in spans:
                anchor = self._anchor(span)
                if anchor.key in seen or not (anchor.city_keys or anchor.province_keys):
                    continue
                seen.add(anchor.key)
                anchors.append(anchor)
        return anchors

    def _corroboration(self, unit: AdminUnit, own_key: str, anchors: list[Anchor]) -> tuple[bool, bool]:
        """(city corroborated, province corroborated) by anchors other than the candidate itself."""
        by_city = by_province = False
        for a in anchors:
            if a.key == own_key:
                continue
            if unit.barangay and unit.city_key in a.city_keys:
                by_city = True
            if unit.city and unit.province_key in a.province_keys:
                by_province = True
        return by_city, by_province

    # ── Interpretation ────────────────────────────────────────────────

    def _interpret(self, candidate: Candidate, anchors: list[Anchor]) -> Iterator[Interpretation]:
        if candidate.type == CandidateType.SEQUENCE:
            yield from self._interpret_sequence(candidate)
            return
        if candidate.type == CandidateType.BARANGAY:
            yield from self._interpret_barangay(candidate, anchors)
            return

        text = candidate.text
        if candidate.type == CandidateType.CITY:
            text = self._resolve_span(text)
            yield from self._city_level(candidate, text, anchors)
        elif candidate.type != CandidateType.PROVINCE:
            # No barangay marker: a name that is also a city is only a barangay when corroborated
            yield from self._barangay_level(
                candidate, text, anchors, collides=bool(self.index.city_units(text))
            )
            yield from self._city_level(candidate, text, anchors)

        province = self.index.find_province(text)
        if province:
            yield Interpretation(unit=province, candidate=candidate)

    def _interpret_barangay(self, candidate: Candidate, anchors: list[Anchor]) -> Iterator[Interpretation]:
        if not candidate.context:
            yield from self._barangay_level(candidate, candidate.text, anchors)
            return

        context = self._resolve_span(candidate.context)
        unit = self.index.find_barangay(candidate.text, city_hint=context, province_hint=context)
        if unit is None:
            return
        own = [self._anchor(context)]
        by_city, by_province = self._corroboration(unit, normalize_key(candidate.text), own + anchors)
        yield Interpretation(
            unit=unit,
            candidate=candidate,
            city_corroborated=by_city,
            province_corroborated=by_province,
            ambiguous=self.index.is_ambiguous_barangay(candidate.text),
        )

    def _barangay_level(
        self,
        candidate: Candidate,
        text: str,
        anchors: list[Anchor],
        collides: bool = False,
    ) -> Iterator[Interpretation]:
        own_key = normalize_key(text)
        unit = self.index.find_barangay(text)
        if unit is None and self.index.is_ambiguous_barangay(text):
            others = [a for a in anchors if a.key != own_key]
            for a in others:
                unit = self.index.find_barangay(text, city_hint=a.text)
                if unit:
                    break
            if unit is None:
                for a in others:
                    unit = self.index.find_barangay(text, province_hint=a.text)
                    if unit:
                        break
        if unit is None:
            return
        by_city, by_province = self._corroboration(unit, own_key, anchors)
        yield Interpretation(
            unit=unit,
            candidate=candidate,
            city_corroborated=by_city,
            province_corroborated=by_province,
            ambiguous=collides or self.index.is_ambiguous_barangay(text),
        )

    def _city_level(self, candidate: Candidate, text: str, anchors: list[Anchor]) -> Iterator[Interpretation]:
        own_key = normalize_key(text)
        unit = None
        # A province named elsewhere in the text beats the priority table
        if self.index.is_ambiguous_city(text):
            for a in anchors:
                if a.key != own_key and a.province_keys:
                    unit = self.index.find_city(text, province_hint=a.text)
                    if unit:
                        break
        if unit is None:
            unit = self.index.find_city(text)
        if unit is None:
            return
        _, by_province = self._corroboration(unit, own_key, anchors)
        yield Interpretation(unit=unit, candidate=candidate, province_corroborated=by_province)

    def _interpret_sequence(self, candidate: Candidate) -> Iterator[Interpretation]:
        """Every split of the words into a validated barangay/city/province chain."""
        words = candidate.text.split()
        n = len(words)

        for i in range(1, n):
            head, tail = " ".join(words[:i]), " ".join(words[i:])

            province = self.index.find_province(tail)
            if province:
                city = self.index.find_city(head, province_hint=tail)
                if city and city.province_key == province.province_key:
                    yield Interpretation(unit=city, candidate=candidate, province_corroborated=True)

            tail_city_keys = {u.city_key for u in self.index.city_units(tail)}
            if tail_city_keys:
                barangay = self.index.find_barangay(head, city_hint=tail)
                if barangay and barangay.city_key in tail_city_keys:
                    yield Interpretation(
                        unit=barangay, candidate=candidate,
                        city_corroborated=True,
                        ambiguous=self.index.is_ambiguous_barangay(head),
                    )

        if n == 3:
            b, c, p = words
            barangay = self.index.find_barangay(b, city_hint=c, province_hint=p)
            if barangay and self.index.validate_hierarchy(b, c, p):
                yield Interpretation(
                    unit=barangay, candidate=candidate,
                    city_corroborated=True, province_corroborated=True,
                    ambiguous=self.index.is_ambiguous_barangay(b),
                )

    # ── Scoring + consistency ─────────────────────────────────────────

    def _score_all(self, interpretations: list[Interpretation], full_text: str) -> list[ScoredInterpretation]:
        explicit = has_explicit_location_marker(full_text)
        country = has_country_marker(full_text)
        slang = has_slang_marker(full_text)
        negation = has_negation(full_text)
        services = count_service_mentions(full_text)
        text_conf = text_confidence(full_text)

        out = []
        for interp in interpretations:
            level = interp.unit.level
            signals = ScoreSignals(
                level=level,
                corroborated=interp.corroborated,
                ambiguous_uncorroborated=(
                    level == "barangay" and interp.ambiguous and not interp.city_corroborated
                ),
                explicit_marker=explicit,
                country_marker=country,
                slang=slang,
                negation=negation,
                service_mentions=services,
                text_confidence=text_conf,
            )
            confidence = self.scorer.score(signals)
            logger.debug("Scored %s %r -> %s: %.3f", level, interp.candidate.text, interp.unit, confidence)
            out.append(ScoredInterpretation(interpretation=interp, confidence=confidence))
        return out

    def _reconcile(self, unit: AdminUnit) -> AdminUnit | None:
        """Re-validate the chain against the gazetteer, clearing any field that does not hold."""
        if unit.barangay and not self.index.validate_hierarchy(unit.barangay, unit.city, unit.province):
            logger.debug("Dropping inconsistent barangay from %s", unit)
            unit = AdminUnit(region=unit.region, province=unit.province, city=unit.city)
        if unit.city and not self.index.contains_city(unit.city, unit.province):
            logger.debug("Dropping inconsistent city from %s", unit)
            unit = AdminUnit(region=unit.region, province=unit.province)
        if unit.province and not self.index.province_units(unit.province):
            return None
        return unit


@lru_cache(maxsize=1)
def get_resolver() -> LocationResolver:
    return LocationResolver(get_index())


def resolve_location(text: str) -> LocationMatch | None:
    """
    Resolve free-form text to the most specific consistent Philippine location.
    Returns None when nothing clears the confidence threshold.
    """
    if not isinstance(text, str) or not text.strip():
        return None
    return get_resolver().resolve_text(text)
