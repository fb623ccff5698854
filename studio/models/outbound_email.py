import uuid

from sqlalchemy import Column, Integer, String, Text, TIMESTAMP, Uuid
from sqlalchemy.sql import func

from studio.db import Base


class OutboundEmail(Base):
    __tablename__ = "outbound_emails"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    to_address = Column(String(320), nullable=False)
    subject = Column(String(500), nullable=False)
    body = Column(Text)
    template = Column(String(100))

    status = Column(String(20), nullable=False, default="QUEUED")

    rule_id = Column(Integer, nullable=True)
    media_id = Column(Uuid(as_uuid=True), nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
