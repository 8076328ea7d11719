from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

# strict: JSON numbers only, no "12.5" strings or booleans
Latitude = Field(..., strict=True, ge=-90, le=90, allow_inf_nan=False)
Longitude = Field(..., strict=True, ge=-180, le=180, allow_inf_nan=False)


class RadarUpdateRequest(BaseModel):
    lat: float = Latitude
    lng: float = Longitude


class RadarUpdateResponse(BaseModel):
    message: str


class NearbyUser(BaseModel):
    userId: str
    username: str
    lat: float
    lng: float
    lastSeen: datetime
    profile_icon: Optional[str] = None
    distance: float


class NearbyResponse(BaseModel):
    nearby: List[NearbyUser]
