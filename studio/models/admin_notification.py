import uuid

from sqlalchemy import Boolean, Column, Integer, String, TIMESTAMP, Uuid
from sqlalchemy.sql import func

from studio.db import Base


class AdminNotification(Base):
    __tablename__ = "admin_notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    message = Column(String(2000), nullable=False)
    level = Column(String(20), nullable=False, default="info")

    rule_id = Column(Integer, nullable=True)
    media_id = Column(Uuid(as_uuid=True), nullable=True)

    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP, server_default=func.now())
