"""Builds the query string for the TfNSW trip planner endpoint."""

from datetime import datetime

# Parameters the trip planner requires on every request
FIXED_TRIP_PARAMS: dict[str, str] = {
    "outputFormat": "rapidJSON",
    "coordOutputFormat": "EPSG:4326",
    "depArrMacro": "dep",
    "type_origin": "any",
    "type_destination": "any",
    "excludedMeans": "checkbox",
    "exclMOT_5": "1",  # no buses
    "TfNSWTR": "true",
    "version": "10.2.1.42",
    "itOptionsActive": "1",
    "cycleSpeed": "16",
}


def build_trip_query(
    origin: str,
    destination: str,
    result_count: int,
    now: datetime,
) -> dict[str, str]:
    """Build the trip planner query parameters.

    Args:
        origin: Free-text origin, passed through as an "any" location.
        destination: Free-text destination, passed through as an "any" location.
        result_count: Number of trips to ask for.
        now: Departure reference time, already in the service timezone.

    Returns:
        Mapping of query parameter name to value.
    """
    return {
        **FIXED_TRIP_PARAMS,
        "itdDate": now.strftime("%Y%m%d"),
        "itdTime": now.strftime("%H%M"),
        "name_origin": origin,
        "name_destination": destination,
        "calcNumberOfTrips": str(result_count),
    }
