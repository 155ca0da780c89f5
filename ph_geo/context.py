"""
Social-media context detection.

Mentions, hashtags and public-figure names are the main source of false
location matches in posts ("@bacolod_alter", "Marcos", "Maja Salvador").
The resolver masks mentions and known names before extraction;
analyze_location_risk() reports how risky a text is for diagnostics.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Political figures whose names collide with place names or read like them
POLITICAL_FIGURES = [
    # National
    "bongbong marcos", "ferdinand marcos jr", "bbm", "pbbm",
    "sara duterte", "inday sara", "rodrigo duterte", "digong",
    "leni robredo", "vp leni",
    "manny pacquiao", "pacman",
    "isko moreno", "yorme",
    "vico sotto", "mayor vico",
    "bong go", "grace poe", "nancy binay", "risa hontiveros",
    "ping lacson", "tito sotto", "juan ponce enrile", "jpe",
    "imee marcos", "jinggoy estrada", "bong revilla",
    "francis tolentino", "bato dela rosa", "ronald dela rosa",
    "alan peter cayetano", "pia cayetano",
    # Local
    "joy belmonte", "marcy teodoro", "rex gatchalian", "abby binay",
    "francis zamora", "benjamin magalong", "michael rama", "jerry trenas",
    # Historical
    "ferdinand marcos", "marcos sr",
    "corazon aquino", "cory aquino", "fidel ramos", "fvr",
    "joseph estrada", "erap", "gloria macapagal arroyo",
    "benigno aquino", "noynoy", "pnoy",
]

CELEBRITIES = [
    "daniel padilla", "kathryn bernardo", "vice ganda",
    "sarah geronimo", "anne curtis", "dingdong dantes",
    "marian rivera", "angel locsin", "bea alonzo",
    "john lloyd cruz", "piolo pascual", "coco martin",
    "julia barretto", "joshua garcia", "nadine lustre",
    "james reid", "liza soberano", "enrique gil",
    "maine mendoza", "alden richards", "kim chiu",
    "xian lim", "maja salvador", "paulo avelino",
]

# Fan/alter account prefixes glued onto hashtags ("#AlterBacolod")
ALTER_PREFIXES = ["alter", "alt", "anon", "secret", "hidden", "priv", "private", "personal", "backup"]

# Words inside a handle or hashtag that look like a place
_LOCATION_LIKE_WORDS = ["marcos", "duterte", "bacolod", "manila", "cebu", "davao", "makati", "quezon"]

_MENTION_RE = re.compile(r"@[A-Za-z0-9_]+")
_HASHTAG_RE = re.compile(r"#[A-Za-z0-9_]+")


def _names_pattern(names: list[str]) -> re.Pattern[str]:
    # Longest first so "ferdinand marcos jr" wins over "ferdinand marcos"
    ordered = sorted(set(names), key=len, reverse=True)
    return re.compile(r"\b(?:" + "|".join(re.escape(n) for n in ordered) + r")\b", re.IGNORECASE)


_POLITICAL_RE = _names_pattern(POLITICAL_FIGURES)
_CELEBRITY_RE = _names_pattern(CELEBRITIES)


@dataclass(frozen=True)
class RiskItem:
    kind: str       # mention, hashtag, political, celebrity
    value: str
    risk: str       # high, medium
    reason: str


@dataclass(frozen=True)
class LocationRisk:
    risks: tuple[RiskItem, ...] = field(default_factory=tuple)

    @property
    def level(self) -> str:
        if any(r.risk == "high" for r in self.risks):
            return "high"
        if any(r.risk == "medium" for r in self.risks):
            return "medium"
        return "low"


def detect_mentions(text: str) -> list[str]:
    return _MENTION_RE.findall(text)


def detect_hashtags(text: str) -> list[str]:
    return _HASHTAG_RE.findall(text)


def detect_political_figures(text: str) -> list[str]:
    return [m.group(0).lower() for m in _POLITICAL_RE.finditer(text)]


def detect_celebrities(text: str) -> list[str]:
    return [m.group(0).lower() for m in _CELEBRITY_RE.finditer(text)]


def analyze_location_risk(text: str) -> LocationRisk:
    """Grade how likely a text is to produce a false location match."""
    risks: list[RiskItem] = []

    for mention in detect_mentions(text):
        handle = mention[1:].lower()
        if any(w in handle for w in _LOCATION_LIKE_WORDS):
            risks.append(RiskItem("mention", mention, "high", "Handle contains location-like word"))

    for tag in detect_hashtags(text):
        body = tag[1:].lower()
        if "alter" in body or any(w in body for w in _LOCATION_LIKE_WORDS):
            risks.append(RiskItem("hashtag", tag, "medium", "Hashtag contains location word"))

    for figure in detect_political_figures(text):
        if "marcos" in figure or "duterte" in figure:
            risks.append(RiskItem("political", figure, "high", "Political figure name matches location"))

    for name in detect_celebrities(text):
        risks.append(RiskItem("celebrity", name, "medium", "Celebrity name may contain a place name"))

    return LocationRisk(tuple(risks))


def mask_social_context(text: str) -> str:
    """Blank out @mentions and public-figure names so no rule can extract them."""
    text = _MENTION_RE.sub(" ", text)
    text = _POLITICAL_RE.sub(" ", text)
    text = _CELEBRITY_RE.sub(" ", text)
    return text
