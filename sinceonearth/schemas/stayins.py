from typing import Optional

from pydantic import BaseModel, Field

from sinceonearth.schemas.base import TimestampedSchema


class StayInCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    check_in: str = Field(..., min_length=1)
    check_out: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)  # Hotel | Airbnb | Hostel | Motel
    maps_pin: Optional[str] = None


class StayInOut(TimestampedSchema):
    id: str
    user_id: str
    name: str
    city: str
    country: str
    check_in: str
    check_out: str
    maps_pin: Optional[str] = None
    type: str


class StayInCreateResponse(BaseModel):
    message: str
    stayin: StayInOut
