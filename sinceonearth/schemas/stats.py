from pydantic import BaseModel


class PublicStats(BaseModel):
    totalFlights: int
    totalCountries: int
    totalUsers: int
    userRating: float


class TravelStats(BaseModel):
    totalFlights: int
    totalStayins: int
    uniqueCountries: int
    uniqueAirports: int
    uniquePlaces: int
    totalDistanceKm: float
    totalHours: float
