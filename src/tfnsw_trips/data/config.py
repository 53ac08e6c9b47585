import logging
from datetime import UTC, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from tfnsw_trips.models.trips import AggregationMode

logger = logging.getLogger(__name__)


class TripPlannerConfig(BaseSettings):
    """Configuration for the TfNSW trip planner API and the HTTP service.

    Loads from init kwargs, environment variables, a .env file and finally
    a config.json file of the form {"apikey": "..."}.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        json_file="config.json",
        extra="ignore",
    )

    api_key: str = Field(validation_alias=AliasChoices("TFNSW_API_KEY", "apikey"))
    trip_url: str = Field(
        default="https://api.transport.nsw.gov.au/v1/tp/trip", alias="TFNSW_TRIP_URL"
    )
    request_timeout_seconds: float = Field(default=20.0, gt=0, alias="TFNSW_TIMEOUT")
    timezone: str = Field(default="Australia/Sydney", alias="TFNSW_TIMEZONE")
    aggregation: AggregationMode = Field(
        default=AggregationMode.JOURNEY, alias="TFNSW_AGGREGATION"
    )

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="TFNSW_HOST")
    port: int = Field(default=3000, alias="TFNSW_PORT")

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("apikey is required")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # config.json has the lowest priority of the value sources
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


@lru_cache
def get_config() -> TripPlannerConfig:
    """Get trip planner configuration (cached singleton).

    Returns:
        TripPlannerConfig with values from the environment, .env or config.json.

    Raises:
        pydantic.ValidationError: If the API key is missing or empty.
    """
    return TripPlannerConfig()


def load_timezone(name: str) -> tzinfo:
    """Resolve a named timezone, falling back to UTC if it cannot be loaded."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning(f"Falling back to UTC timezone, could not load {name!r}: {e}")
        return UTC
