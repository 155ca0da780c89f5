"""
Candidate extraction.

Every rule below runs independently over the preprocessed text and the
results are concatenated; overlapping or duplicate candidates are expected
and left for the resolver to deduplicate.

Rules:
  1. Explicit declaration     "Location: X, Y" / "address is X"
  2. Locative markers         from/at/in, taga/nasa/dito sa, naa/gikan sa + Capitalized Span
  3. Barangay + city pairs    "Brgy. 171, North Caloocan", "Barangay San Isidro Cainta"
  4. Area suffix              "X area"
  5. Comma pairs              "Consolacion, Cebu"
  6. Word sequences           lower-cased 3- and 2-word windows ("montalban rizal")
  7. Hashtag decomposition    "#TrendBacolod" -> "Bacolod"
  8. Unit suffixes            "dito Davao City", "Cavite Province", "Province of Cavite"
"""

from __future__ import annotations

import logging
import re

from ph_geo.config import get_settings
from ph_geo.context import ALTER_PREFIXES, mask_social_context
from ph_geo.filters import ENGLISH_FALSE_POSITIVES, FILIPINO_FUNCTION_WORDS, SERVICE_NAMES
from ph_geo.models import Candidate, CandidateType
from ph_geo.normalize import expand_abbreviations

logger = logging.getLogger(__name__)


# ── Word lists ────────────────────────────────────────────────────────

UNIT_WORDS = frozenset({
    "city", "province", "barangay", "brgy", "municipality", "region", "area",
    "town", "village", "philippines", "pilipinas", "pinas", "ph",
})

SLANG_WORDS = frozenset({"af", "hehe", "haha", "lol", "lmao", "charot", "omg", "grr"})

_ENGLISH_STOPWORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "of", "to", "for", "with", "on", "is", "are",
    "was", "were", "be", "been", "am", "i", "im", "me", "my", "we", "our", "you", "your",
    "he", "she", "they", "it", "its", "this", "that", "these", "those", "so", "very",
    "just", "also", "not", "no", "yes", "please", "thanks", "thank", "still", "again",
    "from", "at", "in", "near", "around", "based", "living", "located", "all", "what",
    "why", "how", "when", "where", "who", "any", "anyone", "everyone", "guys", "ok", "okay",
})

# Words that never stand alone as a candidate
STOPWORDS = (
    _ENGLISH_STOPWORDS | FILIPINO_FUNCTION_WORDS | ENGLISH_FALSE_POSITIVES
    | SERVICE_NAMES | UNIT_WORDS | SLANG_WORDS
)

# Words trimmed off the edges of a span; unit words stay ("Davao City", "Barangay 5")
_EDGE_WORDS = STOPWORDS - UNIT_WORDS

HASHTAG_PREFIXES = tuple(ALTER_PREFIXES) + (
    "trending", "trend", "globe", "smart", "pldt", "converge", "explore", "visit",
    "love", "proud", "only", "team",
)


# ── Patterns ──────────────────────────────────────────────────────────

# Capitalized span: "Davao City", "Cagayan de Oro", "Las Piñas"
CAP_SPAN = r"[A-Z\u00d1][\w'-]*(?:\s+(?:(?:de|del|la|las|los|na|ng)\s+)?[A-Z\u00d1][\w'-]*)*"

# Up to four words after a barangay number/name, stopping at punctuation
_CONTEXT_SPAN = r"[A-Za-z\u00d1\u00f1][\w'-]*(?:\s+[A-Za-z\u00d1\u00f1][\w'-]*){0,3}"

_EXPLICIT_RE = re.compile(
    r"\b(?:location|address|lugar)\s*(?:is|=|:)\s*([^\n.!?;]+)", re.IGNORECASE
)

_LOCATIVE_RE = re.compile(
    r"(?i:\b(?:here\s+in|based\s+in|living\s+in|located\s+(?:in|at)|from|at|in|near|around"
    r"|taga|galing(?:\s+sa)?|dito\s+sa|rito\s+sa|nandito\s+sa|nasa|sa"
    r"|naa\s+sa|nia\s+sa|gikan\s+sa))\s+(" + CAP_SPAN + r")"
)

_BARANGAY_NUMBER_RE = re.compile(
    r"(?i:\bbarangay)\s+(\d+[A-Za-z]?)\b(?:\s*,?\s*(" + _CONTEXT_SPAN + r"))?"
)

_BARANGAY_NAMED_COMMA_RE = re.compile(
    r"(?i:\bbarangay)\s+([A-Z\u00d1][\w'-]*(?:\s+[A-Z\u00d1][\w'-]*){0,3})\s*,\s*(" + _CONTEXT_SPAN + r")"
)

_BARANGAY_NAMED_RE = re.compile(
    r"(?i:\bbarangay)\s+([A-Z\u00d1][\w'-]*(?:\s+[A-Z\u00d1][\w'-]*){0,5})"
)

_AREA_RE = re.compile(r"\barea\b", re.IGNORECASE)

_COMMA_PAIR_RE = re.compile(r"(" + CAP_SPAN + r")\s*,\s*(?=(" + CAP_SPAN + r"))")

_CAP_SPAN_RE = re.compile(r"(?<![\w'-])" + CAP_SPAN)
_PROVINCE_OF_RE = re.compile(r"(?i:\bprovince\s+of)\s+(" + CAP_SPAN + r")")

_HASHTAG_RE = re.compile(r"#(\w+)")
_CAMEL_RE = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Za-z])(?=\d)|(?<=\d)(?=[A-Za-z])")
_SEGMENT_SPLIT_RE = re.compile(r"[,.;:!?()\[\]\"\n]+")
_SEQUENCE_WORD_RE = re.compile(r"^[a-z\u00f1][a-z\u00f1'-]*$")
_WS_RE = re.compile(r"\s+")
_EDGE_PUNCT = " \t,.;:!?'\"()[]-"


# ── Preprocessing ─────────────────────────────────────────────────────

def split_hashtag(body: str) -> list[str]:
    """
    "TrendBacolod"   -> ["Bacolod"]
    "alterbacolod"   -> ["bacolod"]
    "San_Juan_City"  -> ["San", "Juan", "City"]
    """
    words = [w for w in _CAMEL_RE.sub(" ", body.replace("_", " ")).split() if w]
    if not words:
        return []

    first = words[0].lower()
    for prefix in HASHTAG_PREFIXES:
        if first == prefix and len(words) > 1:
            return words[1:]
        if first.startswith(prefix) and len(first) > len(prefix) + 2 and len(words) == 1:
            return [words[0][len(prefix):]]
    return words


def preprocess(text: str) -> str:
    """Shared preprocessing. Idempotent: preprocess(preprocess(t)) == preprocess(t)."""
    text = _HASHTAG_RE.sub(lambda m: " " + " ".join(split_hashtag(m.group(1))) + " ", text)
    text = mask_social_context(text)
    text = expand_abbreviations(text)
    return _WS_RE.sub(" ", text).strip()


def _clean_span(span: str | None) -> str:
    if not span:
        return ""
    words = [w.strip(_EDGE_PUNCT) for w in span.split()]
    words = [w for w in words if w]
    while words and words[0].lower() in _EDGE_WORDS:
        words.pop(0)
    while words and words[-1].lower() in _EDGE_WORDS:
        words.pop()
    return " ".join(words)


# ── Rules ─────────────────────────────────────────────────────────────

def _explicit_declarations(text: str) -> list[Candidate]:
    out = []
    for m in _EXPLICIT_RE.finditer(text):
        for piece in m.group(1).split(","):
            cleaned = _clean_span(piece)
            if cleaned:
                out.append(Candidate(type=CandidateType.LOCATION, text=cleaned))
    return out


def _locatives(text: str) -> list[Candidate]:
    out = []
    for m in _LOCATIVE_RE.finditer(text):
        cleaned = _clean_span(m.group(1))
        if cleaned:
            out.append(Candidate(type=CandidateType.LOCATION, text=cleaned))
    return out


def _barangay_pairs(text: str) -> list[Candidate]:
    out = []

    for m in _BARANGAY_NUMBER_RE.finditer(text):
        context = _clean_span(m.group(2)) or None
        out.append(Candidate(type=CandidateType.BARANGAY, text=f"Barangay {m.group(1)}", context=context))
        if context:
            out.append(Candidate(type=CandidateType.CITY, text=context))

    for m in _BARANGAY_NAMED_COMMA_RE.finditer(text):
        name = _clean_span(m.group(1))
        context = _clean_span(m.group(2)) or None
        if name:
            out.append(Candidate(type=CandidateType.BARANGAY, text=name, context=context))
        if context:
            out.append(Candidate(type=CandidateType.CITY, text=context))

    # Space separated: every split point is a guess at where the barangay name ends
    for m in _BARANGAY_NAMED_RE.finditer(text):
        words = m.group(1).split()
        out.append(Candidate(type=CandidateType.BARANGAY, text=" ".join(words)))
        for i in range(1, len(words)):
            name = " ".join(words[:i])
            context = " ".join(words[i:])
            out.append(Candidate(type=CandidateType.BARANGAY, text=name, context=context))
            out.append(Candidate(type=CandidateType.CITY, text=context))

    return out


def _area_suffixes(text: str) -> list[Candidate]:
    out = []
    for m in _AREA_RE.finditer(text):
        before = _SEGMENT_SPLIT_RE.split(text[: m.start()])[-1].split()
        for size in range(1, min(3, len(before)) + 1):
            cleaned = _clean_span(" ".join(before[-size:]))
            if cleaned:
                out.append(Candidate(type=CandidateType.AREA, text=cleaned))
    return out


def _comma_pairs(text: str) -> list[Candidate]:
    out = []
    for m in _COMMA_PAIR_RE.finditer(text):
        for span in (m.group(1), m.group(2)):
            cleaned = _clean_span(span)
            if cleaned:
                out.append(Candidate(type=CandidateType.LOCATION, text=cleaned))
    return out


def _sequences(text: str) -> list[Candidate]:
    out = []
    for segment in _SEGMENT_SPLIT_RE.split(text.lower()):
        tokens = segment.split()
        for size in (3, 2):
            for i in range(len(tokens) - size + 1):
                window = tokens[i:i + size]
                if all(_SEQUENCE_WORD_RE.match(t) and t not in STOPWORDS for t in window):
                    out.append(Candidate(type=CandidateType.SEQUENCE, text=" ".join(window)))
    return out


def _hashtags(text: str) -> list[Candidate]:
    out = []
    for m in _HASHTAG_RE.finditer(text):
        words = split_hashtag(m.group(1))
        spans = {" ".join(words)}
        if len(words) > 1:
            spans.add(words[-1])
            spans.add(" ".join(words[-2:]))
        for span in sorted(spans, key=len, reverse=True):
            cleaned = _clean_span(expand_abbreviations(span))
            if cleaned:
                out.append(Candidate(type=CandidateType.LOCATION, text=cleaned))
    return out


def _unit_suffixes(text: str) -> list[Candidate]:
    """
    Capitalized spans ending in "City" or "Province". A sentence-initial word
    is often glued onto the span ("Brownout Malolos City"), so every trailing
    1-3 word name is tried.
    """
    out = []
    for m in _CAP_SPAN_RE.finditer(text):
        words = m.group(0).split()
        unit = words[-1].lower()
        if len(words) < 2 or unit not in ("city", "province"):
            continue
        name_words = words[:-1]
        for size in range(1, min(3, len(name_words)) + 1):
            name = _clean_span(" ".join(name_words[-size:]))
            if not name:
                continue
            if unit == "city":
                out.append(Candidate(type=CandidateType.CITY, text=f"{name} City"))
            else:
                out.append(Candidate(type=CandidateType.PROVINCE, text=name))

    for m in _PROVINCE_OF_RE.finditer(text):
        cleaned = _clean_span(m.group(1))
        if cleaned:
            out.append(Candidate(type=CandidateType.PROVINCE, text=cleaned))
    return out


# ── Public API ────────────────────────────────────────────────────────

def extract(text: str, min_length: int | None = None) -> list[Candidate]:
    """Run every extraction rule and return the union of their candidates."""
    if min_length is None:
        min_length = get_settings().resolver.min_candidate_length

    masked = mask_social_context(text)
    working = preprocess(text)

    raw: list[Candidate] = []
    raw.extend(_explicit_declarations(working))
    raw.extend(_locatives(working))
    raw.extend(_barangay_pairs(working))
    raw.extend(_area_suffixes(working))
    raw.extend(_comma_pairs(working))
    raw.extend(_sequences(working))
    raw.extend(_hashtags(masked))
    raw.extend(_unit_suffixes(working))

    candidates = [
        c for c in raw
        if len(c.text) >= min_length and c.text.lower() not in STOPWORDS
    ]
    logger.debug("Extracted %d candidates (%d before length/stopword drop)", len(candidates), len(raw))
    return candidates
