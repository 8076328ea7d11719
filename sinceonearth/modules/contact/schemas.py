from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from sinceonearth.schemas.base import TimestampedSchema


class ContactCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ReplyRequest(BaseModel):
    reply: str


class ContactMessageOut(TimestampedSchema):
    id: str
    name: str
    email: str
    subject: str
    message: str
    is_read: bool
    admin_reply: Optional[str] = None
    replied_at: Optional[datetime] = None
    user_reply: Optional[str] = None
    user_replied_at: Optional[datetime] = None
