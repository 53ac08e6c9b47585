import asyncio
import logging

import httpx
from pydantic import ValidationError

from tfnsw_trips.data.config import TripPlannerConfig
from tfnsw_trips.models.upstream import UpstreamTripResponse

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Base class for trip planner API failures. None of these are retried."""


class UpstreamRequestError(UpstreamError):
    """The outbound request could not be built (e.g. invalid URL)."""


class UpstreamTransportError(UpstreamError):
    """Network, DNS or TLS failure, or the request timed out."""


class UpstreamStatusError(UpstreamError):
    """The trip planner answered with a non-2xx status."""

    def __init__(self, status_code: int):
        super().__init__(f"transport nsw api returned status {status_code}")
        self.status_code = status_code


class UpstreamDecodeError(UpstreamError):
    """The response body was not JSON or did not have the expected shape."""


class TripPlannerClient:
    """Async HTTP client for the TfNSW trip planner API.

    Usage:
        async with TripPlannerClient(config) as client:
            response = await client.fetch_journeys(params)
    """

    def __init__(
        self,
        config: TripPlannerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            config: Configuration with API key, trip URL and timeout.
            transport: Optional httpx transport, used to stub the API in tests.
        """
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "TripPlannerClient":
        """Enter async context - create HTTP client."""
        headers = {
            "Accept": "application/json",
            "Authorization": f"apikey {self._config.api_key}",
        }
        self._client = httpx.AsyncClient(
            headers=headers,
            timeout=self._config.request_timeout_seconds,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context - close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_journeys(self, params: dict[str, str]) -> UpstreamTripResponse:
        """Query the trip planner and decode its journeys.

        The whole call is bounded by the configured timeout. Cancelling the
        calling task aborts the request.

        Args:
            params: Query parameters from build_trip_query.

        Returns:
            UpstreamTripResponse with the decoded journeys.

        Raises:
            RuntimeError: If client not initialized.
            UpstreamRequestError: If the request could not be built.
            UpstreamTransportError: On network failure or timeout.
            UpstreamStatusError: If the API returned a non-2xx status.
            UpstreamDecodeError: If the body could not be decoded.
        """
        if not self._client:
            raise RuntimeError("Client not initialized - use 'async with'")

        timeout = self._config.request_timeout_seconds
        try:
            async with asyncio.timeout(timeout):
                response = await self._client.get(self._config.trip_url, params=params)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise UpstreamRequestError(f"create request: {e}") from e
        except TimeoutError as e:
            raise UpstreamTransportError(
                f"call transport nsw api: timed out after {timeout:g}s"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamTransportError(f"call transport nsw api: {e!r}") from e

        if not response.is_success:
            raise UpstreamStatusError(response.status_code)

        logger.debug(f"Transport NSW API success status={response.status_code}")

        try:
            return UpstreamTripResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise UpstreamDecodeError(f"decode transport response: {e}") from e
