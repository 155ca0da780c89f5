"""
False-positive filter.

Keeps ordinary Filipino and English words from being read as places:
  - function words (pronouns, particles, connectives) and common English
    words that collide with place names are rejected outright
  - verb-shaped Tagalog tokens are rejected
  - place names that are also everyday words ("Carmen", "Aurora") only pass
    when the text shows some location context
  - a candidate must appear in the text as a whole token
"""

from __future__ import annotations

import re

from ph_geo.models import CandidateValidation

FILIPINO_FUNCTION_WORDS = frozenset({
    # Particles and connectives
    "parang", "iba", "ba", "pa", "na", "naman", "din", "daw", "raw",
    "sana", "kaya", "nang", "nga", "pala", "lang", "lamang",
    "kahit", "kung", "kasi", "pero", "at", "o", "ni", "ng", "sa", "si", "ang", "mga",
    "rin", "dito", "rito", "doon", "roon", "dyan", "ryan", "po", "yung", "yun",
    "saan", "bakit", "paano", "sino", "ano", "alin", "aling",
    "eh", "ha", "oo", "opo", "hindi", "huwag", "ayaw",
    "taga", "galing", "nasa", "nandito", "narito",
    # Pronouns
    "ako", "ikaw", "siya", "kami", "kayo", "sila", "tayo",
    "ko", "mo", "niya", "namin", "natin", "ninyo", "nila",
    "akin", "iyo", "kaniya", "amin", "atin", "inyo", "kanila",
    "kanya", "sarili", "nito", "nyan", "niyan", "noon", "ngayon",
    # Quantities
    "wala", "meron", "may", "mayroon", "walang", "lahat",
    "bawat", "kada", "ilan", "marami", "konti", "kaunti",
    "isa", "dalawa", "tatlo", "apat", "lima", "anim", "pito", "walo", "siyam", "sampu",
    "sobra", "kulang", "tama", "mali", "totoo", "tunay", "talaga",
    # Time
    "araw", "gabi", "umaga", "hapon", "tanghali",
    "kahapon", "bukas", "kanina", "mamaya", "maya",
    "minsan", "lagi", "palagi", "madalas", "bihira",
    "oras", "minuto", "segundo", "linggo", "buwan", "taon",
    "sandali", "saglit", "kagabi",
    # Adjectives
    "bago", "luma", "malaki", "maliit", "mabilis", "mabagal",
    "mahaba", "maikli", "matanda", "bata", "maganda", "pangit",
    "mahal", "mura", "mainit", "malamig", "mataas", "mababa",
    "malayo", "malapit", "magaan", "mabigat", "masaya", "malungkot",
    # Verb roots
    "gawa", "sabi", "kain", "inom", "tulog", "gising", "lakad",
    "takbo", "laro", "trabaho", "aral", "basa", "sulat", "bili",
    "bayad", "sakay", "baba", "pasok", "labas", "dating", "alis",
    "uwi", "balik", "punta", "tuloy", "tigil", "simula", "tapos",
    "sarado",
    # Conjunctions
    "dahil", "sapagkat", "subalit", "datapwat", "samantala",
    "gayunman", "gayunpaman", "bagamat", "ngunit", "upang",
    "kapag", "pag", "sakali", "baka", "siguro", "marahil",
    # Interjections
    "naku", "hay", "hala", "aba", "sus", "grabe", "sayang",
    "sige", "tara", "halika", "teka", "hintay", "tignan",
    # Bisaya
    "naa", "nia", "gikan", "diri", "didto", "ug", "og", "kay", "unsa", "asa", "dili", "gyud", "jud",
})

ENGLISH_FALSE_POSITIVES = frozenset({
    "real", "goal", "goals", "usual", "usually", "face", "facebook",
    "book", "books", "load", "loading", "loaded", "upload",
    "download", "reload", "alone", "loan", "loans",
    "can", "cant", "cannot", "ban", "bans", "banned",
    "pan", "pans", "tan", "tans", "man", "men",
    "new", "news", "newer", "newest", "renew",
    # Tech/service terms
    "lag", "lagging", "lags", "ping", "pings", "pinged",
    "plan", "plans", "planning", "planned",
    "pass", "passed", "passing", "password",
    "data", "database", "update", "updates",
    "service", "services", "servicing",
    # Verbs
    "announce", "announced", "announcement", "announcing",
    "register", "registered", "registration", "registering",
    "apply", "applied", "application", "applying",
    "pay", "paid", "payment", "paying",
    "say", "said", "saying", "says",
    # Status
    "down", "up", "online", "offline", "active", "inactive",
    "good", "bad", "better", "best", "worse", "worst",
    "same", "different", "similar", "exact", "here", "there",
    # Time
    "day", "days", "daily", "today", "yesterday", "tomorrow",
    "week", "weeks", "weekly", "month", "months", "monthly",
    "year", "years", "yearly", "annual", "annually",
})

# Carriers, utilities and apps. Outage posts name these far more often than places.
SERVICE_NAMES = frozenset({
    "globe", "smart", "pldt", "converge", "sky", "skycable", "skyfiber", "sun", "tnt", "tm",
    "gomo", "smartbro", "globeathome", "dsl", "broadband",
    "meralco", "maynilad", "gcash", "maya", "shopee", "lazada", "grab", "foodpanda",
    "facebook", "fb", "twitter", "tiktok", "youtube", "netflix", "wifi", "internet",
    "fiber", "fibr", "signal", "load", "data",
})

_SERVICE_RE = re.compile(
    r"\b(?:" + "|".join(sorted(SERVICE_NAMES, key=len, reverse=True)) + r")\b", re.IGNORECASE
)

# Place names that are also ordinary words or given names
CONTEXT_DEPENDENT_WORDS = frozenset({
    "aurora", "victoria", "angeles", "carmen", "esperanza",
    "florida", "jordan", "leon", "mercedes", "salvador",
    "santiago", "trinidad", "valencia",
})

# Tagalog verb morphology, matched against single lower-case tokens.
# Patterns are kept narrow: bare "ma-"/"na-" prefixes would reject Makati or Naga.
TAGALOG_VERB_PATTERNS = [
    # Hyphenated affix on a borrowed root: "nag-announce", "mag-register"
    re.compile(r"^(?:nag|mag|pag|nang|mang|ipa|ipag|pina|naka|maka|paki)-[a-z]+$"),
    # Affix plus reduplicated first syllable: "nagbabasa", "maglalaro", "makakauwi"
    re.compile(r"^(?:nag|mag|nang|mang|naka|maka|nagpa|magpa)([bcdfghjklmnpqrstvwyz]?[aeiou])\1[a-z]+$"),
    # -um- infix with a verb suffix: "kumain", "sumakayan"
    re.compile(r"^[bcdfghklmnprstwy]um[aeiou][a-z]*(?:in|an)$"),
    # Circumfix: "ipinagmalaki", "pinakamahusayan"
    re.compile(r"^(?:ipinag|pinaka|nakiki|pakiki)[a-z]{3,}(?:an|han|in|hin)?$"),
]

# Spans that never name a place even when they contain one
NON_LOCATION_PATTERNS = [
    re.compile(r"https?://\S+"),
    re.compile(r"\b[\w.-]+\.(?:com|net|org|ph)\b"),
]

# Any of these anywhere in the text means the author is talking about a place
LOCATION_CONTEXT_PATTERNS = [
    re.compile(r"\b(?:taga|galing|from|sa|nasa|dito|rito|nandito|narito)\s+"),
    re.compile(r"\b(?:here\s+in|located\s+at|located\s+in|based\s+in)\s+"),
    re.compile(r"\b(?:address|location|lugar|area|place)\s*[:=]\s*"),
    re.compile(r"\b[a-z]+\s+area\b"),
    re.compile(r"\b(?:here|dito|rito)\b"),
    re.compile(r"\b(?:around|near)\s+[a-z]"),
    re.compile(r"\b(?:living|staying|working)\s+in\s+[a-z]"),
    re.compile(r"\b(?:naa|nia|gikan)\s+sa\s+"),
    re.compile(r"\b(?:city|municipality|province|region|barangay|brgy)(?:\s+|$)"),
    re.compile(r",\s*philippines\s*$"),
    re.compile(r"\b(?:north|south|east|west|northern|southern|eastern|western)\s+"),
    re.compile(r"\b(?:upper|lower|central|downtown|suburban)\s+"),
]

_EXPLICIT_MARKER_RE = re.compile(
    r"\b(?:location|address|lugar)\s*(?:is\b|[:=])"
    r"|\b(?:here\s+in|located\s+(?:at|in)|based\s+in|living\s+in)\b",
    re.IGNORECASE,
)
_COUNTRY_MARKER_RE = re.compile(r"\b(?:philippines|pilipinas|pinas)\b", re.IGNORECASE)

_BOUNDARY = r"\s,.\-!?;:()\"'"


def is_verb_shaped(token: str) -> bool:
    return any(p.match(token) for p in TAGALOG_VERB_PATTERNS)


def has_location_context(text: str) -> bool:
    """Does the text look like it states a location at all."""
    lowered = text.lower()
    return any(p.search(lowered) for p in LOCATION_CONTEXT_PATTERNS)


def has_explicit_location_marker(text: str) -> bool:
    return bool(_EXPLICIT_MARKER_RE.search(text))


def has_country_marker(text: str) -> bool:
    return bool(_COUNTRY_MARKER_RE.search(text))


def count_service_mentions(text: str) -> int:
    """Whole-word carrier/app mentions; "Skyline" is not "sky"."""
    return len(_SERVICE_RE.findall(text))


def is_false_positive(word: str, full_text: str = "") -> bool:
    if not word:
        return True
    normalized = " ".join(word.lower().split())

    if normalized in FILIPINO_FUNCTION_WORDS or normalized in ENGLISH_FALSE_POSITIVES:
        return True

    if " " not in normalized and is_verb_shaped(normalized):
        return True

    if normalized in CONTEXT_DEPENDENT_WORDS:
        return not has_location_context(full_text)

    lowered = full_text.lower()
    for pattern in NON_LOCATION_PATTERNS:
        for m in pattern.finditer(lowered):
            if normalized in m.group(0):
                return True

    return False


def extract_word_with_boundaries(text: str, word: str) -> str | None:
    """
    Return the occurrence of `word` in `text` bounded by whitespace,
    punctuation or the string edges. None if it only occurs inside longer words.
    """
    if not word:
        return None
    body = r"\s+".join(re.escape(p) for p in word.split())
    pattern = re.compile(
        rf"(?<![^{_BOUNDARY}]){body}(?![^{_BOUNDARY}])",
        re.IGNORECASE,
    )
    m = pattern.search(text)
    return m.group(0) if m else None


def validate_location_candidate(
    candidate: str,
    full_text: str,
    min_length: int = 3,
) -> CandidateValidation:
    text = (candidate or "").strip()
    if len(text) < min_length:
        return CandidateValidation(is_valid=False, reason="Too short", candidate=text)

    if is_false_positive(text, full_text):
        return CandidateValidation(is_valid=False, reason="Common word false positive", candidate=text)

    extracted = extract_word_with_boundaries(full_text, text)
    if extracted is None:
        return CandidateValidation(is_valid=False, reason="Not a complete word", candidate=text)

    return CandidateValidation(is_valid=True, reason="Valid", candidate=extracted)
