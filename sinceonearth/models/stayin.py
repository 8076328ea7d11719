import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from sinceonearth.core.db import Base


class StayIn(Base):
    __tablename__ = "stayins"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    check_in = Column(String, nullable=False)
    check_out = Column(String, nullable=False)

    country = Column(String, nullable=False)
    city = Column(String, nullable=False)
    name = Column(String, nullable=False)
    maps_pin = Column(Text, nullable=True)
    type = Column(String, nullable=False, default="Hotel")  # Hotel | Airbnb | Hostel | Motel

    created_at = Column(DateTime, server_default=func.now())
