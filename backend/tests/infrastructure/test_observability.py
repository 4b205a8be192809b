"""Log formatting — marketplace extras surface in both formats."""

import json
import logging

from gigmarket.infrastructure.observability import (
    JSONFormatter, KeyValueFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "gigmarket.test", logging.INFO, __file__, 1, "Order placed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_known_extras_only():
    line = JSONFormatter().format(_record(order_id="4", amount=50.0, secret="x"))
    log = json.loads(line)
    assert log["message"] == "Order placed"
    assert log["order_id"] == "4"
    assert log["amount"] == 50.0
    assert "secret" not in log


def test_key_value_formatter_appends_extras():
    line = KeyValueFormatter().format(_record(user_id="2"))
    assert line.endswith("Order placed user_id=2")


def test_setup_logging_replaces_its_handler():
    level = logging.root.level
    setup_logging("DEBUG", "text")
    setup_logging("INFO", "json")
    ours = [
        h for h in logging.root.handlers
        if isinstance(h.formatter, (JSONFormatter, KeyValueFormatter))
    ]
    assert len(ours) == 1
    assert isinstance(ours[0].formatter, JSONFormatter)
    logging.root.removeHandler(ours[0])
    logging.root.setLevel(level)
