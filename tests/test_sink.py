import logging

import pytest

from http_log_middleware.sink import StdlibLoggerSink
from http_log_middleware.sink import to_logging_level


@pytest.mark.parametrize(
    "level, expected",
    [
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("notice", logging.INFO),
        ("warning", logging.WARNING),
        ("error", logging.ERROR),
        ("critical", logging.CRITICAL),
        ("alert", logging.CRITICAL),
        ("emergency", logging.CRITICAL),
        (logging.WARNING, logging.WARNING),
        ("15", 15),
    ],
)
def test_to_logging_level(level, expected):
    assert to_logging_level(level) == expected


def test_to_logging_level_rejects_unknown_names():
    with pytest.raises(ValueError):
        to_logging_level("loud")


def test_stdlib_sink_attaches_context(caplog: pytest.LogCaptureFixture):
    sink = StdlibLoggerSink("tests.sink")
    caplog.set_level(logging.DEBUG, logger="tests.sink")

    sink.log("notice", "Request abc completed with 200", {"transaction_id": "abc"})

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.name == "tests.sink"
    assert record.levelno == logging.INFO
    assert record.getMessage() == "Request abc completed with 200"
    assert record.context == {"transaction_id": "abc"}


def test_stdlib_sink_accepts_logger_instance():
    logger = logging.getLogger("tests.sink.instance")

    assert StdlibLoggerSink(logger).logger is logger
