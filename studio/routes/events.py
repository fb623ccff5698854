from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studio.db import get_db
from studio.models.media import Media
from studio.schemas.event import TriggerEvent
from studio.schemas.execution import WorkflowExecutionOut
from studio.services.workflow_service import fire_trigger

router = APIRouter()


@router.post("/events", response_model=list[WorkflowExecutionOut])
def create_event(event: TriggerEvent, db: Session = Depends(get_db)):
    media = None
    if event.media_id is not None:
        media = db.query(Media).filter(Media.id == event.media_id).first()
        if not media:
            raise HTTPException(status_code=404, detail="Media not found")

    return fire_trigger(db, event.trigger, event.payload, media=media)
