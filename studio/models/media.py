import uuid

from sqlalchemy import Column, Float, Integer, JSON, String, TIMESTAMP, Uuid
from sqlalchemy.sql import func

from studio.db import Base


class Media(Base):
    __tablename__ = "media"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    filename = Column(String(255))
    mime_type = Column(String(100))
    size = Column(Integer)  # bytes
    original_url = Column(String(1000))

    processing_status = Column(String(20), nullable=False, default="pending")

    detected_type = Column(String(20))  # tattoo / artwork / unknown
    detection_confidence = Column(Float)

    tags = Column(JSON, nullable=False, default=list)
    flags = Column(JSON, nullable=False, default=list)
    suggested_entity_type = Column(String(20))

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
