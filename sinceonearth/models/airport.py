from sqlalchemy import Column, Integer, String, Float, Index

from sinceonearth.core.db import Base


class Airport(Base):
    """Reference data, loaded out of band. The API only reads it."""

    __tablename__ = "airports"

    id = Column(Integer, primary_key=True)
    ident = Column(String, unique=True, nullable=False)
    type = Column(String, nullable=True)
    name = Column(String, nullable=True)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    iso_country = Column(String, nullable=True)
    municipality = Column(String, nullable=True)

    iata = Column(String(3), nullable=True)
    icao = Column(String(4), nullable=True)

    __table_args__ = (
        Index("idx_airports_iata", "iata"),
        Index("idx_airports_icao", "icao"),
    )
