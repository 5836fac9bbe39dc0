from __future__ import annotations

import logging

from logging_config import ContextualFormatter, build_logging_config


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.pipeline",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Data Collected",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_reading_context_in_key_order() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s | %(message)s")

    line = formatter.format(_record(value=72.5, terminal="T1", sensor="temperature"))

    assert line == "INFO | Data Collected | terminal=T1 sensor=temperature value=72.5"


def test_formatter_skips_missing_and_none_context() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    assert formatter.format(_record(error=None)) == "Data Collected"


def test_logging_config_uses_requested_level() -> None:
    config = build_logging_config("DEBUG")

    assert config["root"]["level"] == "DEBUG"
    assert config["handlers"]["console"]["level"] == "DEBUG"
    assert config["formatters"]["contextual"]["()"] is ContextualFormatter
