"""Global test fixtures and configuration."""

import json
import os
import sys
from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

# Make sure the package is importable without installing it
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Set up environment variables for testing
os.environ["SERVICE_ENV"] = "test"
os.environ["API_BASE_URL"] = "http://bp.test"

from bp_tracker.client.api_client import BPApiClient
from bp_tracker.models.reading import Reading, ReadingInput
from bp_tracker.models.stats import Stats
from bp_tracker.utils.config import get_settings

BASE_URL = "http://bp.test"
NOW = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def reading_payload(reading_id, timestamp="2024-01-15T10:30:00.123Z", systolic=120, diastolic=80,
                    pulse=70, classification="Normal"):
    """Wire representation of a reading."""
    return {
        "id": reading_id,
        "timestamp": timestamp,
        "systolic": systolic,
        "diastolic": diastolic,
        "pulse": pulse,
        "classification": classification,
    }


def stats_payload(**overrides):
    payload = {
        "last_reading": reading_payload(5),
        "seven_day_avg": reading_payload(0, systolic=122, diastolic=81, pulse=68, classification="Elevated"),
        "seven_day_count": 15,
        "thirty_day_avg": reading_payload(0, systolic=125, diastolic=83, pulse=70,
                                          classification="Hypertension Stage 1"),
        "thirty_day_count": 60,
        "all_time_avg": reading_payload(0, systolic=124, diastolic=82, pulse=69, classification="Elevated"),
        "all_time_count": 150,
    }
    payload.update(overrides)
    return payload


def json_response(status_code, body):
    return httpx.Response(status_code, content=json.dumps(body).encode("utf-8"),
                          headers={"Content-Type": "application/json"})


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached; start every test from the environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_reading():
    """Create a sample reading for testing."""
    return Reading(
        id=1,
        timestamp=NOW,
        systolic=118,
        diastolic=78,
        pulse=68,
        classification="Normal"
    )


@pytest.fixture
def sample_readings():
    """Five readings, one per day going back from NOW; id 42 sits in the middle."""
    ids = [40, 41, 42, 43, 44]
    labels = ["Normal", "Elevated", "Hypertension Stage 1", "Hypertension Stage 2", "Normal"]
    return [
        Reading(
            id=reading_id,
            timestamp=NOW - timedelta(days=i),
            systolic=120 + i * 5,
            diastolic=80 + i * 2,
            pulse=70 - i,
            classification=label
        )
        for i, (reading_id, label) in enumerate(zip(ids, labels))
    ]


@pytest.fixture
def sample_stats():
    return Stats.model_validate(stats_payload())


@pytest.fixture
def sample_input():
    return ReadingInput(
        systolic1=120, diastolic1=80, pulse1=70,
        systolic2=125, diastolic2=82, pulse2=72,
        systolic3=118, diastolic3=78, pulse3=68,
    )


@pytest_asyncio.fixture
async def make_client():
    """Build a BPApiClient whose transport is served by the given handler."""
    clients = []

    def factory(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client = BPApiClient(BASE_URL, http_client=http_client)
        clients.append(http_client)
        return client

    yield factory
    for http_client in clients:
        await http_client.aclose()
