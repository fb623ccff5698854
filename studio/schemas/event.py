from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TriggerEvent(BaseModel):
    # Plain str: unknown triggers are accepted and simply match nothing.
    trigger: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    media_id: Optional[UUID] = None
