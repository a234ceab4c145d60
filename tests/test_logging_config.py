"""
Tests for logging setup and formatters.
"""
import json
import logging

import pytest

from calapps.core.logging_config import JSONFormatter, TextFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(msg: str, level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord("calapps.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra_fields():
    payload = json.loads(JSONFormatter().format(_record("seeded", details={"slug": "zoho-calendar"})))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "calapps.test"
    assert payload["message"] == "seeded"
    assert payload["extra"] == {"details": {"slug": "zoho-calendar"}}


def test_text_formatter_without_timestamp():
    formatter = TextFormatter(use_colors=False, include_timestamp=False)

    assert formatter.format(_record("hello", logging.WARNING)) == "WARNING  - calapps.test - hello"


def test_setup_logging_installs_single_handler(restore_root_logger):
    setup_logging(level="debug", format_type="json")
    setup_logging(level="debug", format_type="json")

    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
    assert restore_root_logger.level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
