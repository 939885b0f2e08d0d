from __future__ import annotations

import json
import logging

import pytest

from sumguard.core.tracker import AnomalyTracker
from sumguard.core.validator import Anomaly
from sumguard.utils.logging import JsonFormatter, setup_logging


def test_tracker_records_and_limits() -> None:
    tracker = AnomalyTracker(log_anomalies=False)
    for i in range(5):
        tracker.record(Anomaly(position=i, value=i * 10))
    assert tracker.count() == 5
    assert [a.position for a in tracker.recent(2)] == [3, 4]
    assert tracker.recent(0) == []
    assert len(tracker.all()) == 5


def test_tracker_logs_anomaly(caplog: pytest.LogCaptureFixture) -> None:
    tracker = AnomalyTracker()
    big = 10**50
    with caplog.at_level(logging.WARNING, logger="sumguard.core.tracker"):
        tracker.record(Anomaly(position=7, value=big))
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.getMessage() == "anomaly detected"
    assert record.position == 7  # type: ignore[attr-defined]
    assert record.value == big  # type: ignore[attr-defined]


def test_json_formatter_includes_extra_fields() -> None:
    record = logging.LogRecord(
        name="sumguard.core.tracker",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="anomaly detected",
        args=(),
        exc_info=None,
    )
    record.position = 3
    record.value = "12345678901234567890123"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "WARNING"
    assert payload["logger"] == "sumguard.core.tracker"
    assert payload["message"] == "anomaly detected"
    assert payload["position"] == 3
    assert payload["value"] == "12345678901234567890123"


def test_json_formatter_keeps_big_integers_exact() -> None:
    record = logging.LogRecord("sumguard", logging.WARNING, __file__, 1, "anomaly detected", (), None)
    record.position = 12
    record.value = 2**80 + 1
    record.small = -(2**53 - 1)
    payload = json.loads(JsonFormatter().format(record))
    assert payload["position"] == 12
    assert payload["value"] == str(2**80 + 1)
    assert payload["small"] == -(2**53 - 1)


def test_setup_logging_rejects_unknown_format() -> None:
    with pytest.raises(ValueError):
        setup_logging("INFO", "xml")
