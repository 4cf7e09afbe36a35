"""Tests for JSON log lines and request-id propagation."""

import json
import logging

from buyer_radar.core.config import Settings
from buyer_radar.core.logging import JsonFormatter, RequestIdFilter, request_id_var


def _record(msg="hello", **extra):
    record = logging.LogRecord("buyer_radar.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_basic_line(self):
        line = json.loads(JsonFormatter().format(_record()))
        assert line == {"level": "INFO", "msg": "hello", "logger": "buyer_radar.test"}

    def test_structured_fields_are_merged(self):
        line = json.loads(JsonFormatter().format(_record(fields={"buyers": 3, "category": "cash"})))
        assert line["buyers"] == 3
        assert line["category"] == "cash"


class TestRequestIdFilter:
    def test_stamps_current_request_id(self):
        token = request_id_var.set("req-42")
        try:
            record = _record()
            assert RequestIdFilter().filter(record) is True
        finally:
            request_id_var.reset(token)
        assert json.loads(JsonFormatter().format(record))["request_id"] == "req-42"

    def test_no_request_id_outside_requests(self):
        record = _record()
        RequestIdFilter().filter(record)
        assert "request_id" not in json.loads(JsonFormatter().format(record))


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.BOUNDARY_SEGMENTS >= 3
        assert s.REFERENCE_PROVIDER in ("seed", "json", "http")
        assert isinstance(s.QUERY_CACHE_ENABLED, bool)
