"""Shared fixtures and trip planner API stubs."""

from collections.abc import Callable
from zoneinfo import ZoneInfo

import httpx
import pytest

from tfnsw_trips.data.config import TripPlannerConfig


def create_waypoint(name: str, **times: str) -> dict:
    """Create a rapidJSON waypoint, e.g. create_waypoint("Redfern", departureTimeEstimated=...)."""
    return {"disassembledName": name, **times}


def create_two_leg_response() -> dict:
    """Redfern -> Central -> Town Hall, one journey with two legs."""
    return {
        "journeys": [
            {
                "legs": [
                    {
                        "origin": create_waypoint(
                            "Redfern Station, Platform 1",
                            departureTimeEstimated="2026-01-17T08:00:00Z",
                        ),
                        "destination": create_waypoint(
                            "Central Station, Platform 20",
                            arrivalTimeEstimated="",
                            arrivalTimePlanned="2026-01-17T08:10:00Z",
                            arrivalTimeBaseTimetable="2026-01-17T08:11:00Z",
                        ),
                    },
                    {
                        "origin": create_waypoint(
                            "Central Station, Platform 20",
                            departureTimeEstimated="",
                            departureTimePlanned="2026-01-17T08:15:00Z",
                            departureTimeBaseTimetable="2026-01-17T08:16:00Z",
                        ),
                        "destination": create_waypoint(
                            "Town Hall Station, Platform 5",
                            arrivalTimeEstimated="2026-01-17T08:30:00Z",
                            arrivalTimePlanned="2026-01-17T08:31:00Z",
                            arrivalTimeBaseTimetable="2026-01-17T08:32:00Z",
                        ),
                    },
                ]
            }
        ]
    }


def create_mock_transport(
    payload: dict | None = None,
    status_code: int = 200,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Stub the trip planner API with a fixed JSON response.

    Requests are appended to `seen` when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload if payload is not None else {"journeys": []})

    return httpx.MockTransport(handler)


@pytest.fixture
def config() -> TripPlannerConfig:
    """Create a test config."""
    return TripPlannerConfig(
        TFNSW_API_KEY="test_api_key",
        TFNSW_TRIP_URL="https://example.com/v1/tp/trip",
    )


@pytest.fixture
def sydney() -> ZoneInfo:
    return ZoneInfo("Australia/Sydney")


@pytest.fixture
def two_leg_response() -> dict:
    return create_two_leg_response()


@pytest.fixture
def transport_factory() -> Callable[..., httpx.MockTransport]:
    return create_mock_transport
