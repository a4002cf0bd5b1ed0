"""
Structured logging tests
"""

import json
import logging
import sys
from decimal import Decimal

from payment_core.infrastructure.logging_config import JSONFormatter, trace_id_context


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("payment_core.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    output = json.loads(JSONFormatter().format(_record("Payment succeeded", amount=Decimal("300.00"), rows_affected=3)))

    assert output["message"] == "Payment succeeded"
    assert output["level"] == "INFO"
    assert output["logger"] == "payment_core.test"
    assert output["amount"] == "300.00"
    assert output["rows_affected"] == 3
    assert output["timestamp"].endswith("Z")


def test_json_formatter_uses_context_trace_id():
    token = trace_id_context.set("trace-xyz")
    try:
        output = json.loads(JSONFormatter().format(_record("hello", trace_id="ignored")))
    finally:
        trace_id_context.reset(token)

    assert output["trace_id"] == "trace-xyz"


def test_json_formatter_falls_back_to_record_trace_id():
    output = json.loads(JSONFormatter().format(_record("hello", trace_id="from-extra")))

    assert output["trace_id"] == "from-extra"


def test_json_formatter_renders_exceptions():
    try:
        raise RuntimeError("simulated storage fault")
    except RuntimeError:
        record = logging.LogRecord(
            "payment_core.test", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
        )

    output = json.loads(JSONFormatter().format(record))

    assert "RuntimeError: simulated storage fault" in output["exception"]
