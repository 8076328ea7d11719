import uuid
from sqlalchemy import Column, String, Boolean, Float, DateTime
from sqlalchemy.sql import func

from sinceonearth.core.db import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # two-digit member number, "01".."99"
    alien = Column(String, unique=True, nullable=False)
    username = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=True)
    name = Column(String, nullable=False)
    country = Column(String, nullable=False, default="Other")

    profile_icon = Column(String, nullable=True)
    profile_color = Column(String, nullable=True)
    profile_setup_complete = Column(Boolean, nullable=False, default=False)

    is_admin = Column(Boolean, nullable=False, default=False)
    approved = Column(Boolean, nullable=False, default=False)
    invite_code_used = Column(String, nullable=True, index=True)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
