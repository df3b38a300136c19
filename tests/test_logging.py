import json
import logging
import sys

from journey.core.logging import JSONFormatter


def make_record(msg, exc_info=None):
    return logging.LogRecord("journey.scheduler.daily_summary", logging.ERROR, __file__, 1, msg, None, exc_info)


def test_json_line_fields() -> None:
    line = JSONFormatter("journey-scheduler").format(make_record("日次サマリージョブエラー"))
    entry = json.loads(line)

    assert entry["service"] == "journey-scheduler"
    assert entry["level"] == "ERROR"
    assert entry["logger"] == "journey.scheduler.daily_summary"
    assert entry["message"] == "日次サマリージョブエラー"
    assert entry["timestamp"].endswith("+00:00")
    assert "exception" not in entry


def test_exception_is_included() -> None:
    try:
        raise ValueError("AI response is not valid JSON")
    except ValueError:
        record = make_record("failed", exc_info=sys.exc_info())

    entry = json.loads(JSONFormatter("journey-api").format(record))
    assert "ValueError: AI response is not valid JSON" in entry["exception"]
