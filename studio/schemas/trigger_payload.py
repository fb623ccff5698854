from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _TriggerPayload(BaseModel):
    model_config = ConfigDict(extra="allow")


class UploadPayload(_TriggerPayload):
    mime_type: Optional[str] = None
    size: Optional[float] = None  # MB
    filename: Optional[str] = None


class ClassificationPayload(_TriggerPayload):
    detected_type: Optional[str] = None
    min_confidence: Optional[float] = None
    has_tags: list[str] = Field(default_factory=list)


class PublishPayload(_TriggerPayload):
    entity_type: Optional[str] = None
    category: Optional[str] = None
    artist_id: Optional[int] = None


class StatusChangePayload(_TriggerPayload):
    old_status: Optional[str] = None
    new_status: Optional[str] = None


TRIGGER_PAYLOAD_MODELS = {
    "on_upload": UploadPayload,
    "on_classification": ClassificationPayload,
    "on_publish": PublishPayload,
    "on_status_change": StatusChangePayload,
}


def build_payload(trigger: str, **values) -> dict:
    """Build the flat payload dict for ``trigger``; unset fields are left out."""
    model = TRIGGER_PAYLOAD_MODELS[trigger]
    return model(**values).model_dump(exclude_none=True)
