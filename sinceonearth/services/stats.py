"""
Travel statistics.

Flight distance uses the stored value when it is positive, otherwise the
great-circle distance stretched by FLIGHT_PATH_FACTOR to approximate real
routing. Flight time uses the logged duration ("2h 30m", or plain minutes)
and falls back to an estimate from distance at cruise speed plus a fixed
taxi/climb/descent overhead. Both only count flights with all four
coordinates known.
"""

import re
from typing import Dict, Iterable, Optional, Set

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from sinceonearth.models.airport import Airport
from sinceonearth.models.flight import Flight
from sinceonearth.models.stayin import StayIn
from sinceonearth.models.user import User
from sinceonearth.services.geo import haversine_km

FLIGHT_PATH_FACTOR = 1.15
CRUISE_SPEED_KMH = 850
TAXI_OVERHEAD_HOURS = 0.5
PUBLIC_USER_RATING = 4.9

_HOURS_RE = re.compile(r"(\d+)h")
_MINUTES_RE = re.compile(r"(\d+)m")


def flight_distance_km(flight: Flight) -> Optional[float]:
    coords = (
        flight.departure_latitude,
        flight.departure_longitude,
        flight.arrival_latitude,
        flight.arrival_longitude,
    )
    if any(c is None for c in coords):
        return None
    if flight.distance and flight.distance > 0:
        return float(flight.distance)
    return haversine_km(*coords) * FLIGHT_PATH_FACTOR


def parse_duration_hours(duration: Optional[str]) -> Optional[float]:
    if not duration:
        return None
    text = str(duration).strip()
    if "h" in text or "m" in text:
        hours = _HOURS_RE.search(text)
        mins = _MINUTES_RE.search(text)
        if not hours and not mins:
            return None
        return (int(hours.group(1)) if hours else 0) + (int(mins.group(1)) / 60 if mins else 0)
    try:
        return float(text) / 60
    except ValueError:
        return None


def flight_hours(flight: Flight, distance_km: float) -> float:
    parsed = parse_duration_hours(flight.duration)
    if parsed is not None:
        return parsed
    return distance_km / CRUISE_SPEED_KMH + TAXI_OVERHEAD_HOURS


def _countries_for_codes(db: Session, codes: Iterable[str]) -> Set[str]:
    codes = sorted({c.strip().upper() for c in codes if c and c.strip()})
    if not codes:
        return set()

    rows = (
        db.query(Airport.iso_country)
        .filter(or_(Airport.iata.in_(codes), Airport.icao.in_(codes)))
        .filter(Airport.iso_country.isnot(None))
        .distinct()
        .all()
    )
    return {r[0].upper() for r in rows}


def public_stats(db: Session) -> Dict[str, float]:
    total_flights = db.query(func.count(Flight.id)).scalar() or 0
    arrivals = [r[0] for r in db.query(Flight.arrival).distinct().all()]
    total_users = db.query(func.count(User.id)).filter(User.approved.is_(True)).scalar() or 0

    return {
        "totalFlights": total_flights,
        "totalCountries": len(_countries_for_codes(db, arrivals)),
        "totalUsers": total_users,
        "userRating": PUBLIC_USER_RATING,
    }


def travel_stats(db: Session, user_id: str) -> Dict[str, float]:
    flights = db.query(Flight).filter(Flight.user_id == user_id).all()
    stayins = db.query(StayIn).filter(StayIn.user_id == user_id).all()

    airports: Set[str] = set()
    distance_sum = 0.0
    hours_sum = 0.0

    for f in flights:
        for code in (f.departure, f.arrival):
            if code:
                airports.add(code.upper())

        dist = flight_distance_km(f)
        if dist is None:
            continue
        distance_sum += dist
        hours_sum += flight_hours(f, dist)

    return {
        "totalFlights": len(flights),
        "totalStayins": len(stayins),
        "uniqueCountries": len(_countries_for_codes(db, airports)),
        "uniqueAirports": len(airports),
        "uniquePlaces": len({s.name for s in stayins if s.name}),
        "totalDistanceKm": round(distance_sum),
        "totalHours": round(hours_sum, 1),
    }
