"""
Tests for the interactive CLI output.
"""

from __future__ import annotations

from ph_geo.__main__ import _print_cli_result
from ph_geo.resolver import resolve_location


class TestPrintResult:
    def test_match_with_risk_level(self, capsys):
        text = "@bacolod_alter taga Cebu City"
        _print_cli_result(text, resolve_location(text))
        out = capsys.readouterr().out
        assert "Risk:        high" in out
        assert "City:        Cebu City" in out

    def test_no_match(self, capsys):
        _print_cli_result("Same here", None)
        out = capsys.readouterr().out
        assert "Risk:        low" in out
        assert "(none)" in out
