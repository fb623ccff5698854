from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class AdminNotificationOut(BaseModel):
    id: UUID
    message: str
    level: str

    rule_id: Optional[int] = None
    media_id: Optional[UUID] = None

    is_read: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class OutboundEmailOut(BaseModel):
    id: UUID
    to_address: str
    subject: str
    body: Optional[str] = None
    template: Optional[str] = None
    status: str

    rule_id: Optional[int] = None
    media_id: Optional[UUID] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
