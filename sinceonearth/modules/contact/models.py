import uuid
from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.sql import func
from sinceonearth.core.db import Base


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    subject = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)

    admin_reply = Column(Text, nullable=True)
    replied_at = Column(DateTime, nullable=True)
    user_reply = Column(Text, nullable=True)
    user_replied_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
