import uuid
from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from sqlalchemy.sql import func

from sinceonearth.core.db import Base


class Flight(Base):
    __tablename__ = "flights"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    airline_name = Column(String, nullable=True)
    airline_code = Column(String(3), nullable=True)
    flight_number = Column(String, nullable=False)

    # airport codes, IATA when known
    departure = Column(String, nullable=False)
    arrival = Column(String, nullable=False)

    departure_latitude = Column(Float, nullable=True)
    departure_longitude = Column(Float, nullable=True)
    arrival_latitude = Column(Float, nullable=True)
    arrival_longitude = Column(Float, nullable=True)

    departure_time = Column(String, nullable=True)
    arrival_time = Column(String, nullable=True)
    date = Column(String, nullable=True)  # YYYY-MM-DD

    departure_terminal = Column(String, nullable=True)
    arrival_terminal = Column(String, nullable=True)

    aircraft_type = Column(String, nullable=True)
    distance = Column(Float, nullable=True)  # km
    duration = Column(String, nullable=True)
    status = Column(String, nullable=False, default="scheduled")

    created_at = Column(DateTime, server_default=func.now())
