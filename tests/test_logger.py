import json
import logging

from formulator.utils.logger import setup_logger, JsonFormatter


def test_logger_has_json_console_handler():
    """Test that the logger writes JSON to the console."""
    logger = setup_logger("formulator.test_console")

    assert logger.handlers
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)


def test_logger_does_not_duplicate_handlers():
    """Test that repeated setup keeps a single set of handlers."""
    first = setup_logger("formulator.test_duplicates")
    count = len(first.handlers)

    second = setup_logger("formulator.test_duplicates")

    assert second is first
    assert len(second.handlers) == count


def test_logger_writes_json_file(tmp_path):
    """Test that a log file receives JSON formatted records."""
    log_file = tmp_path / "logs" / "formulator.log"
    logger = setup_logger("formulator.test_file", level="DEBUG", log_file=str(log_file))

    logger.debug("test_event", extra={"data": {"key": "value"}})
    for handler in logger.handlers:
        handler.flush()

    log_data = json.loads(log_file.read_text().splitlines()[0])
    assert log_data["level"] == "DEBUG"
    assert log_data["component"] == "formulator.test_file"
    assert log_data["event"] == "test_event"
    assert log_data["data"]["key"] == "value"


def test_json_formatter_includes_timestamp():
    """Test that JSON formatter includes timestamp."""
    formatter = JsonFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.DEBUG,
        pathname="",
        lineno=0,
        msg="test_message",
        args=(),
        exc_info=None
    )

    formatted = formatter.format(record)
    log_data = json.loads(formatted)

    assert "timestamp" in log_data
    assert "data" not in log_data


def test_json_formatter_includes_exception():
    """Test that exception tracebacks are part of the record."""
    formatter = JsonFormatter()
    try:
        raise ValueError("bad value")
    except ValueError:
        import sys
        record = logging.LogRecord(
            name="test",
            level=logging.ERROR,
            pathname="",
            lineno=0,
            msg="failed",
            args=(),
            exc_info=sys.exc_info()
        )

    log_data = json.loads(formatter.format(record))

    assert "ValueError: bad value" in log_data["exception"]


def test_decoder_logs_as_json():
    """Test that body decoding warnings go through the JSON logger."""
    from formulator.submission.decoder import decoder_logger

    assert decoder_logger.name == "formulator.submission"
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in decoder_logger.handlers)
