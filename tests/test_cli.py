import json
from unittest import mock

import httpx
import pytest

from bp_tracker import cli
from bp_tracker.client.api_client import BPApiClient
from tests.conftest import BASE_URL, json_response, reading_payload, stats_payload


@pytest.fixture
def serve(monkeypatch):
    """Point the CLI at a mock transport served by `handler`."""
    monkeypatch.setattr(cli, "setup_logging", mock.Mock())

    def install(handler):
        def factory(base_url=None):
            return BPApiClient(BASE_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        monkeypatch.setattr(cli, "BPApiClient", factory)

    return install


def test_readings_listed_oldest_first(serve, capsys):
    serve(lambda request: json_response(200, [
        reading_payload(2, timestamp="2024-01-15T10:30:00Z", classification="Elevated"),
        reading_payload(1, timestamp="2024-01-14T09:00:00Z"),
    ]))

    assert cli.main(["readings"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("#1")
    assert "[Elevated]" in lines[1]


def test_stats_with_missing_average(serve, capsys):
    serve(lambda request: json_response(200, stats_payload(seven_day_avg=None, seven_day_count=0)))

    assert cli.main(["stats"]) == 0

    out = capsys.readouterr().out
    assert "7 Day Avg: N/A (0 readings)" in out
    assert "30 Day Avg: 125/83" in out


def test_submit(serve, capsys):
    bodies = []

    def handler(request):
        if request.method == "POST":
            bodies.append(json.loads(request.content))
            return json_response(200, {})
        if request.url.path == "/api/stats":
            return json_response(200, stats_payload())
        return json_response(200, [])

    serve(handler)
    assert cli.main(["submit", "120", "80", "70", "125", "82", "72", "118", "78", "68"]) == 0
    assert bodies[0]["systolic2"] == 125
    assert "Reading submitted." in capsys.readouterr().out


def test_submit_invalid_number(serve, capsys):
    serve(lambda request: pytest.fail("no request expected"))
    assert cli.main(["submit", "120", "80", "70", "125", "8x", "72", "118", "78", "68"]) == 1
    assert "diastolic2" in capsys.readouterr().err


def test_delete_failure(serve, capsys):
    serve(lambda request: json_response(404, {"error": "reading not found"}))
    assert cli.main(["delete", "42"]) == 1
    assert "reading not found" in capsys.readouterr().err
