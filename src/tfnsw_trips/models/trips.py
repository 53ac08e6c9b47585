from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

DEFAULT_RESULT_COUNT = 2
MIN_RESULT_COUNT = 1
MAX_RESULT_COUNT = 10


class AggregationMode(str, Enum):
    """How upstream journeys are turned into output trips."""

    JOURNEY = "journey"  # one trip per journey, first leg origin -> last leg destination
    LEG = "leg"  # one trip per leg


class TripRequest(BaseModel):
    """Inbound trip request.

    origin and destination are trimmed and must be non-empty (null counts as
    empty). resultCount must be a JSON integer; it defaults to 2 when absent
    or 0, otherwise it must be within 1-10.
    The older "counts" key is accepted as an alias.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    origin: str = ""
    destination: str = ""
    result_count: StrictInt | None = Field(
        default=DEFAULT_RESULT_COUNT,
        validation_alias=AliasChoices("resultCount", "counts", "result_count"),
    )

    @field_validator("origin", "destination", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("origin", "destination")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("result_count")
    @classmethod
    def _check_result_count(cls, value: int | None) -> int:
        if not value:
            return DEFAULT_RESULT_COUNT
        if value < MIN_RESULT_COUNT or value > MAX_RESULT_COUNT:
            raise ValueError(
                f"resultCount must be between {MIN_RESULT_COUNT} and {MAX_RESULT_COUNT}"
            )
        return value

    @model_validator(mode="after")
    def _require_endpoints(self) -> "TripRequest":
        if not self.origin or not self.destination:
            raise ValueError("origin and destination are required")
        return self
