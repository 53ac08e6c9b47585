"""
Trip API (POST /api/trip, GET /api/health)

Errors are returned as plain text: 400 for bad input (see web.py),
502 for trip planner failures, 500 if the response cannot be serialized.
"""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import UTC, datetime
from typing import TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from pydantic_core import PydanticSerializationError
from starlette.requests import ClientDisconnect

from tfnsw_trips import __version__
from tfnsw_trips.data.trip_client import UpstreamError
from tfnsw_trips.models.responses import HealthResponse, TripResponse
from tfnsw_trips.models.trips import TripRequest
from tfnsw_trips.services.trip_service import TripContext, plan_trip

router = APIRouter(prefix="/api", tags=["trips"])
logger = logging.getLogger(__name__)

# How often to check whether the caller is still connected
DISCONNECT_POLL_SECONDS = 0.25

# nginx convention for "client closed request"
STATUS_CLIENT_CLOSED_REQUEST = 499

T = TypeVar("T")


def get_trip_context(request: Request) -> TripContext:
    """Dependency: the TripContext created by create_app."""
    return request.app.state.trip_context


async def _run_until_disconnected(request: Request, call: Awaitable[T]) -> T:
    """Await call, cancelling it if the client goes away first.

    Raises:
        ClientDisconnect: If the client disconnected before call finished.
    """
    task = asyncio.ensure_future(call)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                raise ClientDisconnect()
    finally:
        if not task.done():
            task.cancel()


@router.post("/trip")
async def create_trip(
    trip_request: TripRequest,
    request: Request,
    context: TripContext = Depends(get_trip_context),
) -> Response:
    """
    POST /api/trip

    Body: { "origin": str, "destination": str, "resultCount"?: int }
    Returns: { "trips": [{ origin, destination, departureTime, arrivalTime }] }
    """
    client = request.client.host if request.client else "unknown"
    logger.info(f"Request received method={request.method} path={request.url.path} remote={client}")
    logger.info(
        f"Trip payload origin={trip_request.origin} destination={trip_request.destination} "
        f"result_count={trip_request.result_count}"
    )

    try:
        trips = await _run_until_disconnected(request, plan_trip(context, trip_request))
    except UpstreamError as e:
        return PlainTextResponse(str(e), status_code=502)
    except ClientDisconnect:
        logger.info(f"Client disconnected, trip planner call cancelled remote={client}")
        return Response(status_code=STATUS_CLIENT_CLOSED_REQUEST)

    try:
        body = TripResponse(trips=trips).model_dump_json(by_alias=True)
    except PydanticSerializationError as e:
        logger.error(f"Failed to serialize trip response: {e}")
        return PlainTextResponse("failed to write response", status_code=500)

    return Response(content=body, media_type="application/json")


@router.get("/health")
async def health_check() -> HealthResponse:
    """
    GET /api/health

    Returns: { "status": "ok", "version": "0.1.0", "timestamp": ISO-8601 }
    """
    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )
