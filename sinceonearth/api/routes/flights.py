from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from sinceonearth.core.auth import CurrentUser, get_current_user
from sinceonearth.core.db import get_db
from sinceonearth.core.errors import NotFoundError
from sinceonearth.schemas.flights import FlightCreateRequest, FlightCreateResponse, FlightOut
from sinceonearth.services import flights as flights_service

router = APIRouter(prefix="/flights", tags=["flights"])


@router.get("", response_model=list[FlightOut])
def list_flights(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return flights_service.list_flights(db, user.user_id)


@router.post("", status_code=201, response_model=FlightCreateResponse)
def add_flight(
    payload: FlightCreateRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    flight = flights_service.create_flight(db, user.user_id, payload)
    return {"message": "Flight added successfully", "flight": FlightOut.model_validate(flight)}


@router.get("/search", response_model=list[FlightOut])
def search_flights(
    date: Optional[str] = Query(default=None),
    flight_number: Optional[str] = Query(default=None),
    airline_name: Optional[str] = Query(default=None),
    dep_iata: Optional[str] = Query(default=None),
    arr_iata: Optional[str] = Query(default=None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not date:
        raise HTTPException(status_code=400, detail="Date is required")

    return flights_service.search_flights(
        db,
        user.user_id,
        date=date,
        flight_number=flight_number,
        airline_name=airline_name,
        dep_iata=dep_iata,
        arr_iata=arr_iata,
    )


@router.delete("/{flight_id}")
def delete_flight(
    flight_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        flights_service.delete_flight(db, user.user_id, flight_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Flight deleted successfully"}
