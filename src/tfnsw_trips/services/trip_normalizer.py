"""Turns decoded trip planner journeys into simplified client trips.

Resolves which of a waypoint's time readings to trust, renders it in the
service timezone as a 12-hour clock string and strips platform details from
station names.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo

from tfnsw_trips.models.responses import Trip
from tfnsw_trips.models.trips import AggregationMode
from tfnsw_trips.models.upstream import UpstreamLeg, UpstreamTripResponse

DISPLAY_TIME_FORMAT = "%I:%M %p"
STATION_SUFFIX = "station"


@dataclass(frozen=True)
class ParsedTimestamp:
    value: datetime


@dataclass(frozen=True)
class UnparsedTimestamp:
    """A timestamp none of the known formats accepted; shown to users as-is."""

    raw: str


TimestampParser = Callable[[str], datetime | None]


def _strptime_parser(fmt: str, shape: str) -> TimestampParser:
    """Create a parser for one format. Values without a zone are taken as UTC.

    shape is a regex the whole value must match first, so strptime's
    tolerance for unpadded fields and colon offsets does not leak through.
    """
    pattern = re.compile(shape)

    def parse(raw: str) -> datetime | None:
        if not pattern.fullmatch(raw):
            return None
        try:
            parsed = datetime.strptime(raw, fmt)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    return parse


_RFC3339_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,9})?(Z|[+-]\d{2}:\d{2})")
# Fractions beyond microseconds are dropped before parsing
_EXCESS_FRACTION = re.compile(r"(\.\d{6})\d+")


def _parse_rfc3339(raw: str) -> datetime | None:
    """RFC 3339 with a mandatory offset and up to nanosecond precision."""
    if not _RFC3339_SHAPE.fullmatch(raw):
        return None
    try:
        return datetime.fromisoformat(_EXCESS_FRACTION.sub(r"\1", raw))
    except ValueError:
        return None


# Tried in order, first match wins
TIMESTAMP_PARSERS: tuple[TimestampParser, ...] = (
    _parse_rfc3339,
    _strptime_parser("%Y%m%dT%H%M%S%z", r"\d{8}T\d{6}(Z|[+-]\d{4})"),  # compact, Z or numeric offset
    _strptime_parser("%Y%m%dT%H%M%SZ", r"\d{8}T\d{6}Z"),  # compact, bare Z
    _strptime_parser("%Y%m%dT%H%M%S", r"\d{8}T\d{6}"),  # compact, no zone
    _strptime_parser("%Y-%m-%d %H:%M:%S", r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"),
)


def parse_timestamp(raw: str) -> ParsedTimestamp | UnparsedTimestamp:
    """Parse an upstream timestamp against the known formats.

    Example: "2026-01-17T08:00:00Z" -> ParsedTimestamp(2026-01-17 08:00 UTC)
    Example: "soon" -> UnparsedTimestamp("soon")
    """
    for parser in TIMESTAMP_PARSERS:
        parsed = parser(raw)
        if parsed is not None:
            return ParsedTimestamp(parsed)
    return UnparsedTimestamp(raw)


def format_time(raw: str, tz: tzinfo | None = None) -> str:
    """Render an upstream timestamp as a local 12-hour clock string.

    Unparseable values are returned unchanged.

    Example: "2026-01-17T08:00:00Z" in Australia/Sydney -> "07:00 PM"
    """
    if not raw:
        return ""
    if tz is None:
        tz = UTC

    result = parse_timestamp(raw)
    if isinstance(result, UnparsedTimestamp):
        return result.raw
    return result.value.astimezone(tz).strftime(DISPLAY_TIME_FORMAT)


def first_non_empty(candidates: Iterable[str | None]) -> str:
    """Return the first candidate that is not blank, or "" if all are."""
    for candidate in candidates:
        if candidate and candidate.strip():
            return candidate
    return ""


def clean_station_name(name: str) -> str:
    """Strip platform details and a trailing "Station" from a stop name.

    Example: "Town Hall Station, Platform 3" -> "Town Hall"
    Example: "Museum" -> "Museum"
    """
    if not name:
        return ""

    base = name.split(",", 1)[0].strip()
    if base.lower().endswith(STATION_SUFFIX):
        base = base[: -len(STATION_SUFFIX)].rstrip()
    return base


def _build_trip(first_leg: UpstreamLeg, last_leg: UpstreamLeg, tz: tzinfo | None) -> Trip:
    departure = first_non_empty(first_leg.origin.departure_time_candidates)
    arrival = first_non_empty(last_leg.destination.arrival_time_candidates)
    return Trip(
        origin=clean_station_name(first_leg.origin.display_name),
        destination=clean_station_name(last_leg.destination.display_name),
        departure_time=format_time(departure, tz),
        arrival_time=format_time(arrival, tz),
    )


def extract_trips(
    response: UpstreamTripResponse,
    tz: tzinfo | None,
    mode: AggregationMode = AggregationMode.JOURNEY,
) -> list[Trip]:
    """Convert upstream journeys into client trips, keeping upstream order.

    Args:
        response: Decoded trip planner response.
        tz: Timezone used to render times (UTC if None).
        mode: JOURNEY emits one end-to-end trip per journey, LEG one per leg.

    Returns:
        List of Trip. Journeys without legs contribute nothing.
    """
    trips: list[Trip] = []
    for journey in response.journeys:
        if not journey.legs:
            continue

        if mode == AggregationMode.LEG:
            trips.extend(_build_trip(leg, leg, tz) for leg in journey.legs)
        else:
            trips.append(_build_trip(journey.legs[0], journey.legs[-1], tz))

    return trips
