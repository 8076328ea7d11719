import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func

from sinceonearth.core.db import Base


class InviteCode(Base):
    __tablename__ = "invite_codes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String(20), unique=True, nullable=False, index=True)

    created_by = Column(String(36), ForeignKey("users.id"), nullable=True)
    used_by = Column(String(36), ForeignKey("users.id"), nullable=True)

    max_uses = Column(Integer, nullable=False, default=1)
    current_uses = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
