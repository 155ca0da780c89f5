"""
Tests for the false-positive filter and word-boundary checks.
"""

from __future__ import annotations

import pytest

from ph_geo.filters import (
    count_service_mentions,
    extract_word_with_boundaries,
    has_country_marker,
    has_explicit_location_marker,
    has_location_context,
    is_false_positive,
    is_verb_shaped,
    validate_location_candidate,
)


class TestFalsePositives:
    @pytest.mark.parametrize("word", ["parang", "sarado", "taga", "Same", "here", "Real", "gikan"])
    def test_common_words(self, word):
        assert is_false_positive(word)

    @pytest.mark.parametrize("word", ["Makati", "Malolos", "Pasig", "Pinagkaisahan", "Tumana", "Consolacion"])
    def test_place_names_pass(self, word):
        assert not is_false_positive(word, f"taga {word} ako")

    def test_empty(self):
        assert is_false_positive("")

    def test_context_dependent_word(self):
        assert is_false_positive("Carmen", "I like Carmen")
        assert not is_false_positive("Carmen", "taga Carmen ako")

    def test_url_and_domain(self):
        assert is_false_positive("cebu", "check cebu.com for deals")
        assert is_false_positive("davao", "see https://example.org/davao")


class TestVerbShape:
    @pytest.mark.parametrize("token", ["nagbabasa", "maglalaro", "nag-announce", "kumain", "ipinagmalaki"])
    def test_verbs(self, token):
        assert is_verb_shaped(token)

    @pytest.mark.parametrize("token", ["makati", "malolos", "naga", "pinagkaisahan", "tumana", "marilao"])
    def test_places_not_verbs(self, token):
        assert not is_verb_shaped(token)


class TestWordBoundaries:
    def test_whole_word(self):
        assert extract_word_with_boundaries("I live in Makati City", "Makati") == "Makati"

    def test_inside_longer_word(self):
        assert extract_word_with_boundaries("Pasigueño ako", "Pasig") is None
        assert extract_word_with_boundaries("Makatizen", "Makati") is None

    def test_punctuation_boundaries(self):
        assert extract_word_with_boundaries("(Cebu)", "cebu") == "Cebu"
        assert extract_word_with_boundaries("Barangay 171, North Caloocan.", "North Caloocan") == "North Caloocan"

    def test_multiword_spacing(self):
        assert extract_word_with_boundaries("taga San   Juan", "San Juan") == "San   Juan"

    def test_empty_word(self):
        assert extract_word_with_boundaries("anything", "") is None


class TestValidateCandidate:
    def test_too_short(self):
        result = validate_location_candidate("QC", "QC")
        assert not result.is_valid
        assert result.reason == "Too short"

    def test_false_positive(self):
        result = validate_location_candidate("Same", "Same here")
        assert not result.is_valid
        assert result.reason == "Common word false positive"

    def test_partial_word(self):
        result = validate_location_candidate("Pasig", "Pasigueño ako")
        assert not result.is_valid
        assert result.reason == "Not a complete word"

    def test_valid_returns_text_occurrence(self):
        result = validate_location_candidate("cebu city", "Taga Cebu City ako")
        assert result.is_valid
        assert result.candidate == "Cebu City"


class TestMarkers:
    def test_location_context(self):
        assert has_location_context("Taga Davao City ako")
        assert has_location_context("sa Pasig area")
        assert not has_location_context("I love pizza")

    def test_explicit_marker(self):
        assert has_explicit_location_marker("Location: Makati")
        assert has_explicit_location_marker("based in Cebu")
        assert not has_explicit_location_marker("taga Cebu")

    def test_country_marker(self):
        assert has_country_marker("Iloilo City, Philippines")
        assert not has_country_marker("Iloilo City")

    def test_service_mentions(self):
        assert count_service_mentions("Globe at PLDT down") == 2
        assert count_service_mentions("no signal, walang internet") == 2
        assert count_service_mentions("Skyline Drive, Baguio") == 0
