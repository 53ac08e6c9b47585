from tfnsw_trips.app import mcp
from tfnsw_trips.data.config import get_config
from tfnsw_trips.models.responses import TripResponse
from tfnsw_trips.models.trips import DEFAULT_RESULT_COUNT, TripRequest
from tfnsw_trips.services.trip_service import TripContext
from tfnsw_trips.services.trip_service import plan_trip as _plan_trip

# Module-level context (lazy-initialized)
_context: TripContext | None = None


def _get_context() -> TripContext:
    """Get or create the trip context singleton."""
    global _context
    if _context is None:
        _context = TripContext.from_config(get_config())
    return _context


def reset_context() -> None:
    """Drop the cached context so the next call re-reads configuration."""
    global _context
    _context = None
    get_config.cache_clear()


@mcp.tool()
async def plan_trip(
    origin: str,
    destination: str,
    result_count: int = DEFAULT_RESULT_COUNT,
) -> TripResponse:
    """Plan a public transport trip in New South Wales.

    Queries the Transport for NSW trip planner and returns one simplified
    trip per proposed journey, with local (Sydney) departure and arrival times.

    Args:
        origin: Origin stop or place name (e.g., "Redfern", "Central Station")
        destination: Destination stop or place name (e.g., "Town Hall")
        result_count: Number of trips to request (1-10, default: 2)

    Returns:
        TripResponse with trips in the order the planner proposed them.
    """
    request = TripRequest(origin=origin, destination=destination, resultCount=result_count)
    trips = await _plan_trip(_get_context(), request)
    return TripResponse(trips=trips)
