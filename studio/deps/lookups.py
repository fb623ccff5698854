from uuid import UUID

from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from studio.db import get_db
from studio.models.media import Media
from studio.models.workflow_rule import WorkflowRule


def get_workflow_rule(rule_id: int, db: Session = Depends(get_db)) -> WorkflowRule:
    rule = db.query(WorkflowRule).filter(WorkflowRule.id == rule_id).first()
    if not rule:
        raise HTTPException(status_code=404, detail="Workflow rule not found")
    return rule


def get_media(media_id: UUID, db: Session = Depends(get_db)) -> Media:
    media = db.query(Media).filter(Media.id == media_id).first()
    if not media:
        raise HTTPException(status_code=404, detail="Media not found")
    return media
