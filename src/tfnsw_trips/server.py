import argparse
import logging
from datetime import UTC, datetime

from pydantic import ValidationError

from tfnsw_trips.app import mcp
from tfnsw_trips.data.config import get_config
from tfnsw_trips.models.responses import HealthResponse

# Register MCP tools
from tfnsw_trips.tools import trip_tools  # noqa: F401

logger = logging.getLogger(__name__)


@mcp.tool()
def health() -> HealthResponse:
    """Check if the TfNSW trips server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from tfnsw_trips import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


def run_http(host: str | None, port: int | None) -> None:
    """Load configuration and serve the trip API with uvicorn."""
    import uvicorn

    from tfnsw_trips.services.trip_service import TripContext
    from tfnsw_trips.web import create_app

    config = get_config()
    app = create_app(TripContext.from_config(config))

    host = host or config.host
    port = port or config.port
    logger.info(f"TfNSW trips API listening on {host}:{port}")
    uvicorn.run(app, host=host, port=port)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="tfnsw-trips",
        description="Transport for NSW trip API",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    subparsers = parser.add_subparsers(dest="command")

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP trip API (default)",
    )
    serve_parser.add_argument(
        "--host",
        default=None,
        help="Bind address (default: TFNSW_HOST or 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Bind port (default: TFNSW_PORT or 3000)",
    )

    # mcp command
    subparsers.add_parser(
        "mcp",
        help="Run the MCP server over stdio",
    )

    args = parser.parse_args()

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # A missing API key is fatal at startup, not per request
    try:
        get_config()
    except ValidationError as e:
        logger.critical(f"Unable to read config: {e}")
        parser.exit(1, "tfnsw-trips: apikey is required (set TFNSW_API_KEY or config.json)\n")

    if args.command == "mcp":
        mcp.run()
    else:
        run_http(getattr(args, "host", None), getattr(args, "port", None))


if __name__ == "__main__":
    main()
