"""Trip planning entry point: query builder -> trip planner API -> normalizer.

All process-wide state (config, timezone) arrives through an immutable
TripContext built once at startup, so concurrent calls share nothing mutable.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo

import httpx

from tfnsw_trips.data.config import TripPlannerConfig, load_timezone
from tfnsw_trips.data.trip_client import TripPlannerClient, UpstreamError
from tfnsw_trips.models.responses import Trip
from tfnsw_trips.models.trips import TripRequest
from tfnsw_trips.services.query_builder import build_trip_query
from tfnsw_trips.services.trip_normalizer import extract_trips

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TripContext:
    """Read-only state shared by every trip request."""

    config: TripPlannerConfig
    tz: tzinfo
    transport: httpx.AsyncBaseTransport | None = None

    @classmethod
    def from_config(
        cls,
        config: TripPlannerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "TripContext":
        return cls(config=config, tz=load_timezone(config.timezone), transport=transport)


async def plan_trip(
    context: TripContext,
    request: TripRequest,
    now: datetime | None = None,
) -> list[Trip]:
    """Plan a trip and return simplified trips.

    Args:
        context: Shared config and timezone.
        request: Validated trip request.
        now: Departure reference time (default: current time).

    Returns:
        List of Trip, in the order the trip planner proposed them.

    Raises:
        UpstreamError: If the trip planner call or decoding fails.
    """
    now = now.astimezone(context.tz) if now else datetime.now(context.tz)
    params = build_trip_query(request.origin, request.destination, request.result_count, now)

    async with TripPlannerClient(context.config, transport=context.transport) as client:
        try:
            response = await client.fetch_journeys(params)
        except UpstreamError as e:
            logger.warning(
                f"Trip planner call failed origin={request.origin} "
                f"destination={request.destination}: {e}"
            )
            raise

    logger.info(
        f"Transport NSW API success origin={request.origin} destination={request.destination} "
        f"journeys={len(response.journeys)}"
    )
    return extract_trips(response, context.tz, context.config.aggregation)
