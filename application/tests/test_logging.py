import json
import logging

from freeproduct.logging.filters import RequestContextFilter, CartContextFilter
from freeproduct.logging.formatters import AppLogsJSONFormatter
from freeproduct.middlewares.request_context import request_context, create_request_id


def _record(message):
    return logging.LogRecord("freeproduct.test", logging.ERROR, __file__, 1, message, None, None)


def test_json_log_entry_carries_cart_context():
    rid = create_request_id()
    request_context.store_id = 2
    request_context.quote_id = "quote-7"
    request_context.rule_id = 11
    record = _record("Gift product not saleable")

    RequestContextFilter().filter(record)
    CartContextFilter().filter(record)
    entry = json.loads(AppLogsJSONFormatter().format(record))

    assert entry["message"] == "Gift product not saleable"
    assert entry["level"] == "ERROR"
    assert entry["request_id"] == rid
    assert entry["store_id"] == 2
    assert entry["quote_id"] == "quote-7"
    assert entry["rule_id"] == 11


def test_missing_context_renders_empty_fields():
    record = _record("plain")
    CartContextFilter().filter(record)
    entry = json.loads(AppLogsJSONFormatter().format(record))
    assert entry["store_id"] == ""
    assert entry["rule_id"] == ""
