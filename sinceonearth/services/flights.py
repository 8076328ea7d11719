from datetime import date as date_cls
from typing import List, Optional

from loguru import logger
from sqlalchemy import func
from sqlalchemy.orm import Session

from sinceonearth.core.errors import NotFoundError
from sinceonearth.models.airport import Airport
from sinceonearth.models.flight import Flight
from sinceonearth.schemas.enums import FlightStatus
from sinceonearth.schemas.flights import FlightCreateRequest


def find_airport(db: Session, code: Optional[str]) -> Optional[Airport]:
    if not code:
        return None
    return db.query(Airport).filter(Airport.iata == code).first()


def _first_not_none(*values):
    for v in values:
        if v is not None:
            return v
    return None


def mark_past_flights_landed(db: Session, user_id: str, today: Optional[str] = None) -> int:
    today = today or date_cls.today().isoformat()
    updated = (
        db.query(Flight)
        .filter(
            Flight.user_id == user_id,
            func.lower(Flight.status) == FlightStatus.scheduled.value,
            Flight.date < today,
        )
        .update({Flight.status: FlightStatus.landed.value}, synchronize_session=False)
    )
    if updated:
        db.commit()
        logger.debug(f"Marked {updated} past flight(s) landed | user={user_id}")
    return updated


def list_flights(db: Session, user_id: str, today: Optional[str] = None) -> List[Flight]:
    mark_past_flights_landed(db, user_id, today)
    return (
        db.query(Flight)
        .filter(Flight.user_id == user_id)
        .order_by(Flight.date.desc())
        .all()
    )


def create_flight(db: Session, user_id: str, payload: FlightCreateRequest) -> Flight:
    dep = find_airport(db, payload.departure)
    arr = find_airport(db, payload.arrival)

    flight = Flight(
        user_id=user_id,
        date=payload.date,
        flight_number=payload.flight_number,
        departure=(dep.iata or dep.ident) if dep else payload.departure,
        arrival=(arr.iata or arr.ident) if arr else payload.arrival,
        departure_time=payload.departure_time,
        arrival_time=payload.arrival_time,
        aircraft_type=payload.aircraft_type,
        status=payload.status,
        airline_name=payload.airline_name,
        airline_code=payload.airline_code,
        departure_terminal=payload.departure_terminal,
        arrival_terminal=payload.arrival_terminal,
        departure_latitude=_first_not_none(payload.departure_latitude, dep.latitude if dep else None),
        departure_longitude=_first_not_none(payload.departure_longitude, dep.longitude if dep else None),
        arrival_latitude=_first_not_none(payload.arrival_latitude, arr.latitude if arr else None),
        arrival_longitude=_first_not_none(payload.arrival_longitude, arr.longitude if arr else None),
        duration=payload.duration,
        # 0 means "unknown" to the client
        distance=payload.distance or None,
    )
    db.add(flight)
    db.commit()
    db.refresh(flight)

    logger.info(f"Flight added | user={user_id} flight={flight.flight_number} {flight.departure}->{flight.arrival}")
    return flight


def delete_flight(db: Session, user_id: str, flight_id: str) -> None:
    deleted = (
        db.query(Flight)
        .filter(Flight.id == flight_id, Flight.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        raise NotFoundError("Flight not found")
    db.commit()


def search_flights(
    db: Session,
    user_id: str,
    *,
    date: str,
    flight_number: Optional[str] = None,
    airline_name: Optional[str] = None,
    dep_iata: Optional[str] = None,
    arr_iata: Optional[str] = None,
) -> List[Flight]:
    q = db.query(Flight).filter(Flight.user_id == user_id, Flight.date == date)

    if flight_number:
        q = q.filter(Flight.flight_number == flight_number)
    if airline_name:
        q = q.filter(Flight.airline_name.ilike(f"%{airline_name}%"))
    if dep_iata:
        q = q.filter(Flight.departure == dep_iata)
    if arr_iata:
        q = q.filter(Flight.arrival == arr_iata)

    return q.order_by(Flight.date.desc()).all()
