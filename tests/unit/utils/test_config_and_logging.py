"""Tests for configuration checks and request-aware logging."""

import logging

import pytest

from txnet.api.config import LocalConfig
from txnet.utils import ConfigurationError, RequestIDFilter
from txnet.utils.logging_config import request_id_var


def test_mask_sensitive():
    assert LocalConfig.mask_sensitive("supersecret") == "***cret"
    assert LocalConfig.mask_sensitive("abc") == "***"
    assert LocalConfig.mask_sensitive("") == "***"


def test_validate_accepts_defaults(monkeypatch):
    config = LocalConfig()
    monkeypatch.setattr(config, "GRAPH_URL", "bolt://localhost:7687")
    monkeypatch.setattr(config, "PORT", 3001)

    config.validate()


@pytest.mark.parametrize(
    "attribute, value",
    [("GRAPH_URL", "http://localhost:7687"), ("PORT", 0), ("DATABASE_PATH", "")],
)
def test_validate_rejects_bad_values(monkeypatch, attribute, value):
    config = LocalConfig()
    monkeypatch.setattr(config, attribute, value)

    with pytest.raises(ConfigurationError):
        config.validate()


def _record():
    return logging.LogRecord("txnet", logging.INFO, __file__, 1, "msg", None, None)


def test_request_id_filter_uses_context():
    token = request_id_var.set("req-42")
    try:
        record = _record()
        assert RequestIDFilter().filter(record)
        assert record.request_id == "req-42"
    finally:
        request_id_var.reset(token)


def test_request_id_filter_defaults_outside_request():
    record = _record()
    RequestIDFilter().filter(record)
    assert record.request_id == "-"
