from datetime import datetime
from typing import Any, Dict, Optional

from uuid import UUID

from pydantic import BaseModel, Field


class MediaCreate(BaseModel):
    filename: str
    mime_type: str
    size: int = Field(ge=0)
    original_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class MediaStatusUpdate(BaseModel):
    status: str = Field(min_length=1)


class MediaClassification(BaseModel):
    detected_type: str
    confidence: float = Field(ge=0, le=1)
    tags: Optional[list[str]] = None


class MediaOut(BaseModel):
    id: UUID
    filename: Optional[str] = None
    mime_type: Optional[str] = None
    size: Optional[int] = None
    original_url: Optional[str] = None

    processing_status: str

    detected_type: Optional[str] = None
    detection_confidence: Optional[float] = None

    tags: list[str] = Field(default_factory=list)
    flags: list[str] = Field(default_factory=list)
    suggested_entity_type: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MediaStatusOut(BaseModel):
    id: UUID
    status: str
    processing: bool
    failed: bool
    data: Optional[Dict[str, Any]] = None
