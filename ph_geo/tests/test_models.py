"""
Tests for Pydantic models and display formatting.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ph_geo.formatting import format_city, format_location, format_province, format_region
from ph_geo.gazetteer import AdminUnit
from ph_geo.models import (
    NONE_SENTINEL,
    BatchParseRequest,
    Candidate,
    CandidateType,
    LocationMatch,
    ParseRequest,
)


class TestCandidate:
    def test_defaults(self):
        c = Candidate(type=CandidateType.CITY, text="Cebu City")
        assert c.context is None
        assert c.type.value == "city"

    def test_empty_text_rejected(self):
        with pytest.raises(ValidationError):
            Candidate(type=CandidateType.CITY, text="")

    def test_frozen(self):
        c = Candidate(type=CandidateType.CITY, text="Cebu City")
        with pytest.raises(ValidationError):
            c.text = "Mandaue"


class TestLocationMatch:
    def test_sentinel_defaults(self):
        m = LocationMatch(confidence=0.5)
        assert m.city == NONE_SENTINEL
        assert m.level == "region"

    def test_confidence_bounds(self):
        with pytest.raises(ValidationError):
            LocationMatch(confidence=1.5)
        with pytest.raises(ValidationError):
            LocationMatch(confidence=-0.1)

    def test_from_unit_cases_names(self):
        unit = AdminUnit(region="REGION IV-A", province="RIZAL", city="RODRIGUEZ (MONTALBAN)")
        m = LocationMatch.from_unit(unit, 0.35)
        assert m.region == "Region IV-A"
        assert m.city == "Rodriguez (Montalban)"
        assert m.barangay == NONE_SENTINEL
        assert m.level == "city"

    def test_from_unit_rounds(self):
        m = LocationMatch.from_unit(AdminUnit(region="CAR", province="BENGUET"), 0.123456)
        assert m.confidence == 0.1235
        assert m.region == "CAR"


class TestRequests:
    def test_text_length_limit(self):
        with pytest.raises(ValidationError):
            ParseRequest(text="x" * 10_001)

    def test_batch_not_empty(self):
        with pytest.raises(ValidationError):
            BatchParseRequest(texts=[])


class TestFormatting:
    def test_none(self):
        assert format_location(None) == "None"

    def test_ncr_barangay(self):
        unit = AdminUnit(
            region="NCR",
            province="NATIONAL CAPITAL REGION - FOURTH DISTRICT",
            city="CITY OF LAS PIÑAS",
            barangay="TALON UNO",
        )
        assert format_location(LocationMatch.from_unit(unit, 0.5)) == (
            "Region: National Capital Region (NCR), Province: Metro Manila, "
            "City: Las Pinas City, Barangay: Talon Uno"
        )

    def test_province_only(self):
        m = LocationMatch.from_unit(AdminUnit(region="REGION IV-A", province="RIZAL"), 0.2)
        assert format_location(m) == "Region: Region IV-A, Province: Rizal"

    def test_city_names(self):
        assert format_city("City of Malolos") == "Malolos City"
        assert format_city("Davao City") == "Davao City"
        assert format_city("Consolacion") == "Consolacion"
        assert format_city(NONE_SENTINEL) == NONE_SENTINEL

    def test_region_and_province(self):
        assert format_region("NCR") == "National Capital Region (NCR)"
        assert format_province("National Capital Region - Manila", "NCR") == "Metro Manila"
        assert format_province("Cebu", "Region VII") == "Cebu"
