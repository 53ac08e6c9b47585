from pydantic import BaseModel, ConfigDict, Field


class Trip(BaseModel):
    """A simplified trip as returned to clients. All fields are display strings."""

    model_config = ConfigDict(populate_by_name=True)

    origin: str
    destination: str
    departure_time: str = Field(alias="departureTime", description="Local time, e.g. '08:00 AM'")
    arrival_time: str = Field(alias="arrivalTime", description="Local time, e.g. '08:30 AM'")


class TripResponse(BaseModel):
    trips: list[Trip]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
