"""
FastAPI application factory for the trip API.

Run with: tfnsw-trips serve
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tfnsw_trips import __version__
from tfnsw_trips.api import trips
from tfnsw_trips.data.config import get_config
from tfnsw_trips.services.trip_service import TripContext

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "invalid request body"
METHOD_NOT_ALLOWED_MESSAGE = "method not allowed"


def validation_error_message(exc: RequestValidationError) -> str:
    """Pick a human-readable reason from a request validation error."""
    for error in exc.errors():
        if error.get("type") == "value_error":
            return str(error.get("msg", "")).removeprefix("Value error, ")
    return INVALID_BODY_MESSAGE


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> PlainTextResponse:
    message = validation_error_message(exc)
    logger.info(f"Rejected trip request path={request.url.path}: {message}")
    return PlainTextResponse(message, status_code=400)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    message = METHOD_NOT_ALLOWED_MESSAGE if exc.status_code == 405 else str(exc.detail)
    return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)


def create_app(context: TripContext | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: Shared trip context. Built from get_config() when omitted,
                 which fails if no API key is configured.
    """
    if context is None:
        context = TripContext.from_config(get_config())

    app = FastAPI(
        title="TfNSW Trips API",
        version=__version__,
        description="Simplified Transport for NSW trip planning.",
    )
    app.state.trip_context = context

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)

    app.include_router(trips.router)

    return app
