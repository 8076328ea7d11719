from typing import Optional

from pydantic import BaseModel, Field

from sinceonearth.schemas.base import TimestampedSchema


class FlightCreateRequest(BaseModel):
    date: str = Field(..., min_length=1)
    flight_number: str = Field(..., min_length=1)
    departure: str = Field(..., min_length=1)
    arrival: str = Field(..., min_length=1)
    status: str = Field(..., min_length=1)

    airline_name: Optional[str] = None
    airline_code: Optional[str] = Field(default=None, max_length=3)
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    departure_terminal: Optional[str] = None
    arrival_terminal: Optional[str] = None
    aircraft_type: Optional[str] = None

    departure_latitude: Optional[float] = None
    departure_longitude: Optional[float] = None
    arrival_latitude: Optional[float] = None
    arrival_longitude: Optional[float] = None

    distance: Optional[float] = None
    duration: Optional[str] = None


class FlightOut(TimestampedSchema):
    id: str
    user_id: str
    airline_name: Optional[str] = None
    airline_code: Optional[str] = None
    flight_number: str
    departure: str
    arrival: str
    departure_latitude: Optional[float] = None
    departure_longitude: Optional[float] = None
    arrival_latitude: Optional[float] = None
    arrival_longitude: Optional[float] = None
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None
    date: Optional[str] = None
    departure_terminal: Optional[str] = None
    arrival_terminal: Optional[str] = None
    aircraft_type: Optional[str] = None
    distance: Optional[float] = None
    duration: Optional[str] = None
    status: str


class FlightCreateResponse(BaseModel):
    message: str
    flight: FlightOut
