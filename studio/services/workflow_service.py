import logging

from sqlalchemy.orm import Session

from studio.models.media import Media
from studio.models.workflow_execution import WorkflowExecution
from studio.schemas.rule_action_catalog import parse_action
from studio.services.action_executor import ActionContext, execute_rule_match
from studio.services.rule_engine import (
    explain_conditions,
    load_enabled_rules,
    match_rules,
    rule_actions,
    rule_matches,
)


logger = logging.getLogger(__name__)


def fire_trigger(
    db: Session,
    trigger: str,
    payload: dict | None = None,
    *,
    media: Media | None = None,
) -> list[WorkflowExecution]:
    """
    Evaluate the enabled rules for ``trigger`` and execute the matching ones,
    in priority order. One audit row is written per matched rule.
    """
    payload = payload or {}

    rules = load_enabled_rules(db, trigger)
    matches = match_rules(trigger, payload, rules)

    logger.info(
        "workflow trigger fired",
        extra={
            "trigger": trigger,
            "candidate_rules": len(rules),
            "matched_rules": len(matches),
            "media_id": (str(media.id) if media is not None else None),
        },
    )

    context = ActionContext(trigger=trigger, payload=payload, media=media)
    executions = [execute_rule_match(db, match, context) for match in matches]

    db.commit()
    for execution in executions:
        db.refresh(execution)
    return executions


def dry_run_rule(rule, payload: dict | None = None) -> dict:
    """Check a single rule against ``payload`` without executing anything.

    The rule's enabled flag and trigger are ignored so a disabled draft can be
    tried out. Action params are validated as the executor would.
    """
    payload = payload or {}

    actions = []
    errors = []
    for action in rule_actions(rule):
        valid = True
        try:
            parse_action(action.type, action.params)
        except ValueError as e:
            valid = False
            errors.append({"index": action.index, "type": action.type, "error": str(e)})
        actions.append({"index": action.index, "type": action.type, "params": action.params, "valid": valid})

    return {
        "ruleId": rule.id,
        "trigger": rule.trigger,
        "matched": rule_matches(rule, payload),
        "conditions": explain_conditions(rule, payload),
        "actions": actions,
        "errors": errors,
        "message": "Workflow rule test completed",
    }
