from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from sinceonearth.schemas.base import TimestampedSchema


class InviteCodeCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    max_uses: int = Field(default=1, ge=1, alias="maxUses")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt")


class InviteCodeOut(TimestampedSchema):
    id: str
    code: str
    created_by: Optional[str] = None
    used_by: Optional[str] = None
    max_uses: int
    current_uses: int
    is_active: bool
    expires_at: Optional[datetime] = None


class InviteCodeListItem(InviteCodeOut):
    created_by_username: Optional[str] = None


class InvitedUserOut(TimestampedSchema):
    id: str
    username: str
    name: str
    email: str
