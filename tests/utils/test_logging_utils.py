import io
import json
import logging

from bp_tracker.utils.logging_utils import REDACTED, JSONFormatter, redact_sensitive_data


def test_redact_nested():
    data = {"Authorization": "Bearer abc", "items": [{"token": "t", "id": 1}], "url": "/api/stats"}
    assert redact_sensitive_data(data) == {
        "Authorization": REDACTED,
        "items": [{"token": REDACTED, "id": 1}],
        "url": "/api/stats",
    }


def test_json_formatter_includes_extra():
    logger = logging.getLogger("bp_tracker.tests.json")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        logger.info("BP API request", extra={"log_type": "request", "headers": {"authorization": "x"}})
        handler.flush()
        record = json.loads(stream.getvalue().strip())
    finally:
        logger.removeHandler(handler)

    assert record["message"] == "BP API request"
    assert record["level"] == "INFO"
    assert record["log_type"] == "request"
    assert record["headers"] == {"authorization": REDACTED}
    assert record["timestamp"].endswith("Z")
