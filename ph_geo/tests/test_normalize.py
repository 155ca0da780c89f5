"""
Tests for place-name normalization.
Pure string functions, no gazetteer required.
"""

from __future__ import annotations

import pytest

from ph_geo.normalize import (
    expand_abbreviations,
    fold_diacritics,
    normalize_key,
    proper_case,
)


class TestNormalizeKey:
    def test_case_and_diacritics(self):
        assert normalize_key("Parañaque") == "paranaque"
        assert normalize_key("CITY OF LAS PIÑAS") == "las pinas"

    def test_unit_prefixes_stripped(self):
        assert normalize_key("Brgy. San Isidro") == "san isidro"
        assert normalize_key("Barangay 171") == "171"
        assert normalize_key("Municipality of Cainta") == "cainta"

    def test_stacked_prefixes(self):
        assert normalize_key("Brgy. Barangay 5") == "5"

    def test_parenthetical_dropped(self):
        assert normalize_key("RODRIGUEZ (MONTALBAN)") == "rodriguez"

    def test_punctuation_collapsed(self):
        assert normalize_key("Lapu-Lapu City") == "lapu lapu city"
        assert normalize_key("  Wack-Wack   Greenhills ") == "wack wack greenhills"

    def test_empty(self):
        assert normalize_key("") == ""
        assert normalize_key(None) == ""

    @pytest.mark.parametrize("name", [
        "Brgy. Barangay 5",
        "CITY OF LAS PIÑAS",
        "RODRIGUEZ (MONTALBAN)",
        "North Bay Blvd., North",
        "U.P. CAMPUS",
    ])
    def test_idempotent(self, name):
        once = normalize_key(name)
        assert normalize_key(once) == once


class TestAbbreviations:
    def test_city_short_forms(self):
        assert expand_abbreviations("Taga QC ako") == "Taga Quezon City ako"
        assert expand_abbreviations("BGC") == "Taguig"
        assert expand_abbreviations("Gensan") == "General Santos"
        assert expand_abbreviations("CDO") == "Cagayan de Oro"

    def test_renamed_municipality(self):
        assert expand_abbreviations("Montalban Rizal") == "Rodriguez Rizal"

    def test_barangay_prefix(self):
        assert expand_abbreviations("Brgy.171") == "Barangay 171"
        assert expand_abbreviations("brgy San Isidro") == "Barangay San Isidro"

    def test_saint_prefixes(self):
        assert expand_abbreviations("Sta. Rosa") == "Santa Rosa"
        assert expand_abbreviations("Sto. Niño") == "Santo Niño"

    def test_gen_trias_before_gen(self):
        assert expand_abbreviations("Gen. Trias") == "General Trias"

    def test_no_partial_words(self):
        assert expand_abbreviations("Quezon") == "Quezon"
        assert expand_abbreviations("Santa Ana") == "Santa Ana"

    def test_idempotent(self):
        text = "Brgy. 171 QC, Sta. Rosa, Gen. Trias"
        once = expand_abbreviations(text)
        assert expand_abbreviations(once) == once


class TestDisplayCasing:
    def test_connectors_lowercase(self):
        assert proper_case("CITY OF LAS PIÑAS") == "City of Las Piñas"
        assert proper_case("CAGAYAN DE ORO CITY") == "Cagayan de Oro City"

    def test_roman_numerals(self):
        assert proper_case("REGION IV-A") == "Region IV-A"
        assert proper_case("MOLINO III") == "Molino III"

    def test_acronyms_and_initials(self):
        assert proper_case("NCR") == "NCR"
        assert proper_case("U.P. CAMPUS") == "U.P. Campus"

    def test_parenthetical(self):
        assert proper_case("RODRIGUEZ (MONTALBAN)") == "Rodriguez (Montalban)"

    def test_key_preserved(self):
        name = "CITY OF SAN JOSE DEL MONTE"
        assert normalize_key(proper_case(name)) == normalize_key(name)

    def test_empty(self):
        assert proper_case(None) == ""


def test_fold_diacritics():
    assert fold_diacritics("Santo Niño") == "Santo Nino"
