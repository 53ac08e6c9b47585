from pydantic import BaseModel, ConfigDict, Field, field_validator


class Waypoint(BaseModel):
    """Origin or destination of a leg in the TfNSW rapidJSON trip response.

    Each time comes in up to three variants. Candidates are ordered by trust:
    real-time estimate, then planned, then the base timetable.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    disassembled_name: str | None = Field(default=None, alias="disassembledName")
    departure_time_estimated: str | None = Field(default=None, alias="departureTimeEstimated")
    departure_time_planned: str | None = Field(default=None, alias="departureTimePlanned")
    departure_time_base: str | None = Field(default=None, alias="departureTimeBaseTimetable")
    arrival_time_estimated: str | None = Field(default=None, alias="arrivalTimeEstimated")
    arrival_time_planned: str | None = Field(default=None, alias="arrivalTimePlanned")
    arrival_time_base: str | None = Field(default=None, alias="arrivalTimeBaseTimetable")

    @property
    def display_name(self) -> str:
        return self.disassembled_name or ""

    @property
    def departure_time_candidates(self) -> tuple[str | None, ...]:
        return (
            self.departure_time_estimated,
            self.departure_time_planned,
            self.departure_time_base,
        )

    @property
    def arrival_time_candidates(self) -> tuple[str | None, ...]:
        return (
            self.arrival_time_estimated,
            self.arrival_time_planned,
            self.arrival_time_base,
        )


class UpstreamLeg(BaseModel):
    model_config = ConfigDict(extra="ignore")

    origin: Waypoint = Field(default_factory=Waypoint)
    destination: Waypoint = Field(default_factory=Waypoint)


class UpstreamJourney(BaseModel):
    """One proposed itinerary. A journey without legs is skipped."""

    model_config = ConfigDict(extra="ignore")

    legs: list[UpstreamLeg] = []

    @field_validator("legs", mode="before")
    @classmethod
    def _null_legs(cls, value):
        return [] if value is None else value


class UpstreamTripResponse(BaseModel):
    """Top-level response from the TfNSW /v1/tp/trip endpoint."""

    model_config = ConfigDict(extra="ignore")

    journeys: list[UpstreamJourney] = []

    @field_validator("journeys", mode="before")
    @classmethod
    def _null_journeys(cls, value):
        return [] if value is None else value
