from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studio.db import get_db
from studio.models.admin_notification import AdminNotification
from studio.models.outbound_email import OutboundEmail
from studio.schemas.notification import AdminNotificationOut, OutboundEmailOut
from studio.schemas.rule_action_catalog import get_rule_actions_catalog
from studio.schemas.rule_condition_catalog import get_rule_conditions_catalog
from studio.schemas.workflow_rule import RuleOut
from studio.services.workflow_templates import RULE_TEMPLATES, seed_rule_templates


router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/rule-conditions")
def list_rule_conditions_catalog():
    return get_rule_conditions_catalog()


@router.get("/rule-actions")
def list_rule_actions_catalog():
    return get_rule_actions_catalog()


@router.get("/workflows/templates")
def list_rule_templates():
    return {"templates": RULE_TEMPLATES}


@router.post("/workflows/templates")
def seed_templates(db: Session = Depends(get_db)):
    created, skipped = seed_rule_templates(db)
    return {
        "created": [RuleOut.model_validate(r) for r in created],
        "skipped": skipped,
    }


@router.get("/notifications", response_model=list[AdminNotificationOut])
def list_notifications(
    unread_only: bool = False,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(AdminNotification)
    if unread_only:
        q = q.filter(AdminNotification.is_read.is_(False))

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(AdminNotification.created_at.desc()).offset(offset).limit(limit).all()


@router.post("/notifications/{notification_id}/read", response_model=AdminNotificationOut)
def mark_notification_read(notification_id: UUID, db: Session = Depends(get_db)):
    notification = db.query(AdminNotification).filter(AdminNotification.id == notification_id).first()
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return notification


@router.get("/emails", response_model=list[OutboundEmailOut])
def list_outbound_emails(
    status: str | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(OutboundEmail)
    if status:
        q = q.filter(OutboundEmail.status == status)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(OutboundEmail.created_at.desc()).offset(offset).limit(limit).all()
