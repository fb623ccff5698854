import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from studio.models.admin_notification import AdminNotification
from studio.models.media import Media
from studio.models.outbound_email import OutboundEmail
from studio.models.workflow_execution import WorkflowExecution
from studio.schemas.rule_action_catalog import parse_action
from studio.services.rule_engine import MatchedAction, RuleMatch


logger = logging.getLogger(__name__)


@dataclass
class ActionContext:
    trigger: str
    payload: dict = field(default_factory=dict)
    media: Media | None = None


def _utcnow() -> datetime:
    # Naive UTC, matching the TIMESTAMP columns.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _require_media(context: ActionContext, action_type: str) -> Media:
    if context.media is None:
        raise ValueError(f"{action_type} requires a media target")
    return context.media


def _flag_media(db: Session, context: ActionContext, action, rule_id):
    media = _require_media(context, action.type)
    flag = action.params.flag

    flags = list(media.flags or [])
    already = flag in flags
    if not already:
        flags.append(flag)
        media.flags = flags

    return {"type": action.type, "flag": flag, "idempotent": already}


def _apply_tags(db: Session, context: ActionContext, action, rule_id):
    media = _require_media(context, action.type)

    tags = list(media.tags or [])
    added = [t for t in dict.fromkeys(action.params.tags) if t not in tags]
    if added:
        media.tags = tags + added

    return {"type": action.type, "added": added, "idempotent": not added}


def _create_entity(db: Session, context: ActionContext, action, rule_id):
    media = _require_media(context, action.type)
    media.suggested_entity_type = action.params.type
    return {"type": action.type, "entityType": action.params.type}


def _set_status(db: Session, context: ActionContext, action, rule_id):
    media = _require_media(context, action.type)
    previous = media.processing_status
    media.processing_status = action.params.status
    return {"type": action.type, "from": previous, "to": action.params.status}


def _notify_admin(db: Session, context: ActionContext, action, rule_id):
    notification = AdminNotification(
        message=action.params.message,
        level=action.params.level,
        rule_id=rule_id,
        media_id=context.media.id if context.media is not None else None,
    )
    db.add(notification)
    return {"type": action.type, "level": action.params.level}


def _send_email(db: Session, context: ActionContext, action, rule_id):
    email = OutboundEmail(
        to_address=action.params.to,
        subject=action.params.subject,
        body=action.params.body,
        template=action.params.template,
        status="QUEUED",
        rule_id=rule_id,
        media_id=context.media.id if context.media is not None else None,
    )
    db.add(email)
    return {"type": action.type, "to": action.params.to, "status": "QUEUED"}


ACTION_HANDLERS = {
    "flag_media": _flag_media,
    "apply_tags": _apply_tags,
    "create_entity": _create_entity,
    "notify_admin": _notify_admin,
    "set_status": _set_status,
    "send_email": _send_email,
}


def execute_action(db: Session, action: MatchedAction, context: ActionContext) -> dict:
    """Run one action inside a SAVEPOINT; a failure only rolls back this action."""
    typed = parse_action(action.type, action.params)
    handler = ACTION_HANDLERS[typed.type]

    with db.begin_nested():
        result = handler(db, context, typed, action.rule_id)
        db.flush()

    return result


def execute_rule_match(db: Session, match: RuleMatch, context: ActionContext) -> WorkflowExecution:
    """Run a matched rule's actions in order and record the outcome.

    Actions are best effort: a failing action is logged and recorded, and the
    remaining actions still run. ``last_fired_at`` moves only when at least
    one action succeeded.
    """
    rule = match.rule
    media_id = context.media.id if context.media is not None else None

    if not match.actions:
        execution = WorkflowExecution(
            rule_id=rule.id,
            trigger=context.trigger,
            media_id=media_id,
            result="SKIPPED",
            details={"matched": True, "reason": "No actions defined"},
            executed_at=_utcnow(),
        )
        db.add(execution)
        return execution

    executed = []
    errors = []
    for action in match.actions:
        try:
            result = execute_action(db, action, context)
            executed.append({"index": action.index, **result})
        except Exception as e:
            logger.exception(
                "workflow action failed",
                extra={"rule_id": rule.id, "action_type": action.type, "index": action.index},
            )
            errors.append({"index": action.index, "type": action.type, "error": str(e)})

    if not errors:
        status = "SUCCESS"
    elif executed:
        status = "PARTIAL"
    else:
        status = "FAILED"

    if executed:
        rule.last_fired_at = _utcnow()

    execution = WorkflowExecution(
        rule_id=rule.id,
        trigger=context.trigger,
        media_id=media_id,
        result=status,
        details={"matched": True, "ruleName": rule.name, "actions": executed, "errors": errors},
        executed_at=_utcnow(),
    )
    db.add(execution)

    logger.info(
        "workflow rule executed",
        extra={"rule_id": rule.id, "result": status, "executed": len(executed), "failed": len(errors)},
    )
    return execution
