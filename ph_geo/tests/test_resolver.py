"""
End-to-end tests for the location resolver against the bundled gazetteer.
Covers the social-media scenarios plus the consistency and determinism guarantees.
"""

from __future__ import annotations

import logging

import pytest

from ph_geo.extract import extract, preprocess
from ph_geo.filters import extract_word_with_boundaries
from ph_geo.gazetteer import AdminUnit, get_index
from ph_geo.models import NONE_SENTINEL
from ph_geo.resolver import LocationResolver, resolve_location

SAMPLE_TEXTS = [
    "Brgy. 171, North Caloocan.",
    "Consolacion, Cebu",
    "Taga Davao City ako",
    "Montalban Rizal",
    "Brgy. Lahug, Cebu City",
    "Location: Lahug, Cebu City",
    "Nasa San Isidro kami. Taga Cainta ako",
    "Rosario, Cavite",
    "Bacolod, Lanao del Norte",
    "I'm from Bacolod",
    "Taga QC ako",
    "Taga Rizal ako",
    "#TrendBacolod ang ganda",
    "Marcos, Ilocos Norte",
    "Bongbong Marcos is from Malolos",
]


@pytest.fixture(scope="module")
def index():
    return get_index()


@pytest.fixture(scope="module")
def resolver(index):
    return LocationResolver(index)


class TestScenarios:
    def test_numbered_barangay_with_city_nickname(self):
        r = resolve_location("Brgy. 171, North Caloocan.")
        assert r.barangay == "Barangay 171"
        assert r.city == "Caloocan City"
        assert r.region == "NCR"

    def test_municipality_with_province(self):
        r = resolve_location("Consolacion, Cebu")
        assert r.city == "Consolacion"
        assert r.province == "Cebu"
        assert r.barangay == NONE_SENTINEL

    def test_filler_text(self):
        assert resolve_location("Same here") is None

    def test_slang_with_lowercase_place(self):
        assert resolve_location("sarado AF malolos") is None

    def test_taga_city(self):
        r = resolve_location("Taga Davao City ako")
        assert r.city == "Davao City"
        assert r.province == "Davao del Sur"

    def test_renamed_municipality_sequence(self):
        r = resolve_location("Montalban Rizal")
        assert r.city == "Rodriguez (Montalban)"
        assert r.province == "Rizal"

    def test_explicit_declaration(self):
        r = resolve_location("Location: Lahug, Cebu City")
        assert r.barangay == "Lahug"
        assert r.city == "Cebu City"
        assert r.confidence == pytest.approx(0.81)

    def test_abbreviated_city(self):
        assert resolve_location("Taga QC ako").city == "Quezon City"

    def test_hashtag(self):
        assert resolve_location("#TrendBacolod ang ganda").city == "Bacolod City"

    def test_surname_place_survives_masking(self):
        assert resolve_location("Marcos, Ilocos Norte").city == "Marcos"

    def test_public_figure_masked(self):
        assert resolve_location("Bongbong Marcos is from Malolos").city == "City of Malolos"

    def test_mention_only(self):
        assert resolve_location("@makati_alter hello") is None


class TestAmbiguity:
    def test_ambiguous_barangay_alone(self):
        assert resolve_location("Brgy. San Isidro") is None

    def test_ambiguous_barangay_with_city_elsewhere(self):
        r = resolve_location("Nasa San Isidro kami. Taga Cainta ako")
        assert r.barangay == "San Isidro"
        assert r.city == "Cainta"

    def test_ambiguous_city_alone(self):
        assert resolve_location("Taga Rosario ako") is None

    def test_ambiguous_city_with_province(self):
        r = resolve_location("Rosario, Cavite")
        assert r.city == "Rosario"
        assert r.province == "Cavite"

    def test_priority_without_hint(self):
        r = resolve_location("I'm from Bacolod")
        assert r.city == "Bacolod City"
        assert r.province == "Negros Occidental"

    def test_province_hint_overrides_priority(self):
        r = resolve_location("Bacolod, Lanao del Norte")
        assert r.city == "Bacolod"
        assert r.province == "Lanao del Norte"


    def test_bare_name_prefers_city_over_same_named_barangay(self):
        r = resolve_location("Taga San Juan")
        assert r.city == "City of San Juan"
        assert r.barangay == NONE_SENTINEL
        assert r.region == "NCR"

    def test_context_word_city_over_barangay(self):
        r = resolve_location("Taga Carmen ako")
        assert r.city == "Carmen"
        assert r.province == "Bohol"

    def test_same_named_barangay_when_city_given(self):
        r = resolve_location("Taga Carmen, Cagayan de Oro ako")
        assert r.barangay == "Carmen"
        assert r.city == "Cagayan de Oro City"


class TestUnitSuffixes:
    def test_city_suffix_after_dito(self):
        r = resolve_location("Brownout na naman dito Davao City")
        assert r.city == "Davao City"
        assert r.province == "Davao del Sur"
        assert r.confidence == pytest.approx(0.315)

    def test_city_suffix_on_city_of_name(self):
        assert resolve_location("Brownout dito Malolos City").city == "City of Malolos"

    def test_bare_city_suffix(self):
        r = resolve_location("Angeles City")
        assert r.city == "Angeles City"
        assert r.confidence == pytest.approx(0.225)

    @pytest.mark.parametrize("text", ["Cavite Province", "Province of Cavite"])
    def test_province(self, text):
        r = resolve_location(text)
        assert r.province == "Cavite"
        assert r.level == "province"


class TestOutagePosts:
    def test_service_name_without_locative(self):
        assert resolve_location("PLDT down, Consolacion, Cebu") is None
        assert resolve_location("Consolacion, Cebu") is not None

    def test_service_name_with_locative(self):
        r = resolve_location("Globe down sa Makati")
        assert r.city == "City of Makati"
        assert r.confidence == pytest.approx(0.245)

    def test_negation_lowers_confidence(self):
        r = resolve_location("Walang kuryente sa Makati")
        assert r.city == "City of Makati"
        assert r.confidence == pytest.approx(0.21)

    def test_risky_text_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="ph_geo.resolver")
        resolve_location("@bacolod_alter taga Cebu")
        assert "Social-context risk high" in caplog.text

class TestThresholds:
    def test_province_fallback(self):
        r = resolve_location("Taga Rizal ako")
        assert r.province == "Rizal"
        assert r.city == NONE_SENTINEL
        assert r.level == "province"

    def test_slang_suppresses_weak_match(self):
        assert resolve_location("taga Malolos af") is None
        assert resolve_location("taga Malolos").city == "City of Malolos"

    def test_more_specific_text_more_specific_result(self):
        assert resolve_location("Taga Cebu City ako").level == "city"
        assert resolve_location("Brgy. Lahug, Cebu City").level == "barangay"


class TestInvariants:
    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_result_chain_exists_in_gazetteer(self, index, text):
        r = resolve_location(text)
        assert r is not None
        assert 0.0 <= r.confidence <= 1.0
        barangay = None if r.barangay == NONE_SENTINEL else r.barangay
        city = None if r.city == NONE_SENTINEL else r.city
        assert index.validate_hierarchy(barangay, city, r.province)

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_deterministic(self, text):
        assert resolve_location(text) == resolve_location(text)

    @pytest.mark.parametrize("text", SAMPLE_TEXTS)
    def test_surviving_candidates_are_whole_words(self, resolver, text):
        working = preprocess(text)
        for c in extract(text):
            if resolver._passes_filter(c, working):
                assert extract_word_with_boundaries(working, c.text) is not None

    def test_non_string_input(self):
        assert resolve_location(None) is None
        assert resolve_location(123) is None
        assert resolve_location("   ") is None


class TestReconcile:
    def test_consistent_unit_unchanged(self, resolver):
        unit = AdminUnit(region="REGION VII", province="CEBU", city="CEBU CITY", barangay="LAHUG")
        assert resolver._reconcile(unit) == unit

    def test_inconsistent_barangay_dropped(self, resolver):
        unit = AdminUnit(region="REGION VII", province="CEBU", city="MANDAUE CITY", barangay="LAHUG")
        assert resolver._reconcile(unit) == AdminUnit(region="REGION VII", province="CEBU", city="MANDAUE CITY")

    def test_inconsistent_city_dropped(self, resolver):
        unit = AdminUnit(region="REGION VII", province="BOHOL", city="CONSOLACION")
        assert resolver._reconcile(unit) == AdminUnit(region="REGION VII", province="BOHOL")

    def test_unknown_province(self, resolver):
        assert resolver._reconcile(AdminUnit(region="REGION VII", province="ATLANTIS")) is None
