"""
Tests for the JSON log formatter.
"""

from __future__ import annotations

import json
import logging

from ph_geo.logging_config import ResolverJSONFormatter


def test_json_record_carries_level_and_logger():
    record = logging.LogRecord(
        name="ph_geo.resolver", level=logging.DEBUG, pathname=__file__, lineno=1,
        msg="Resolved %r", args=("Cebu",), exc_info=None,
    )
    payload = json.loads(ResolverJSONFormatter().format(record))
    assert payload["message"] == "Resolved 'Cebu'"
    assert payload["level"] == "DEBUG"
    assert payload["logger"] == "ph_geo.resolver"
    assert "time" in payload
