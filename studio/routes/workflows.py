from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from studio.db import get_db
from studio.deps.lookups import get_workflow_rule
from studio.models.workflow_execution import WorkflowExecution
from studio.models.workflow_rule import WorkflowRule
from studio.schemas.execution import WorkflowExecutionOut
from studio.schemas.rule_condition_catalog import fields_for_trigger
from studio.schemas.workflow_rule import RuleCreate, RuleOut, RuleTestRequest, RuleUpdate
from studio.services.workflow_service import dry_run_rule


router = APIRouter(prefix="/workflows", tags=["workflows"])


def _validate_rule_shape(name, trigger, conditions):
    if name is not None and not name.strip():
        raise HTTPException(status_code=400, detail="Rule name is required")

    allowed = fields_for_trigger(trigger)
    for key, condition in (conditions or {}).items():
        field = condition.get("field") if isinstance(condition, dict) else None
        if field not in allowed:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown condition field '{field}' for trigger {trigger} (condition {key})",
            )


@router.get("", response_model=list[RuleOut])
def list_rules(enabled_only: bool = False, trigger: str | None = None, db: Session = Depends(get_db)):
    q = db.query(WorkflowRule)
    if enabled_only:
        q = q.filter(WorkflowRule.is_enabled == 1)
    if trigger:
        q = q.filter(WorkflowRule.trigger == trigger)
    return q.order_by(WorkflowRule.priority.asc(), WorkflowRule.name.asc(), WorkflowRule.id.asc()).all()


@router.post("", response_model=RuleOut, status_code=201)
def create_rule(payload: RuleCreate, db: Session = Depends(get_db)):
    conditions = {k: c.model_dump() for k, c in payload.conditions.items()}
    _validate_rule_shape(payload.name, payload.trigger, conditions)

    rule = WorkflowRule(
        name=payload.name.strip(),
        description=payload.description,
        trigger=payload.trigger,
        conditions=conditions,
        actions=[a.model_dump() for a in payload.actions],
        is_enabled=payload.is_enabled,
        priority=payload.priority,
    )
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


@router.get("/executions", response_model=list[WorkflowExecutionOut])
def list_executions(trigger: str | None = None, limit: int = 50, db: Session = Depends(get_db)):
    q = db.query(WorkflowExecution)
    if trigger:
        q = q.filter(WorkflowExecution.trigger == trigger)

    limit = max(1, min(limit, 200))
    return q.order_by(WorkflowExecution.executed_at.desc(), WorkflowExecution.id.desc()).limit(limit).all()


@router.get("/{rule_id}", response_model=RuleOut)
def get_rule(rule: WorkflowRule = Depends(get_workflow_rule)):
    return rule


@router.patch("/{rule_id}", response_model=RuleOut)
def update_rule(
    payload: RuleUpdate,
    rule: WorkflowRule = Depends(get_workflow_rule),
    db: Session = Depends(get_db),
):
    data = payload.model_dump(exclude_unset=True)
    for key in ("name", "trigger", "is_enabled", "priority", "conditions", "actions"):
        if key in data and data[key] is None:
            raise HTTPException(status_code=400, detail=f"{key} cannot be null")

    if "name" in data:
        data["name"] = data["name"].strip()

    next_trigger = data.get("trigger", rule.trigger)
    next_conditions = data.get("conditions", rule.conditions)
    if "trigger" in data or "conditions" in data or "name" in data:
        _validate_rule_shape(data.get("name"), next_trigger, next_conditions)

    for k, v in data.items():
        setattr(rule, k, v)

    db.commit()
    db.refresh(rule)
    return rule


@router.delete("/{rule_id}")
def delete_rule(rule: WorkflowRule = Depends(get_workflow_rule), db: Session = Depends(get_db)):
    (
        db.query(WorkflowExecution)
        .filter(WorkflowExecution.rule_id == rule.id)
        .update({WorkflowExecution.rule_id: None}, synchronize_session=False)
    )
    db.delete(rule)
    db.commit()
    return {"deleted": True}


@router.post("/{rule_id}/toggle")
def toggle_rule(rule: WorkflowRule = Depends(get_workflow_rule), db: Session = Depends(get_db)):
    rule.is_enabled = 0 if rule.is_enabled else 1
    db.commit()
    db.refresh(rule)
    return {
        "rule": RuleOut.model_validate(rule),
        "message": f"Workflow rule {'enabled' if rule.is_enabled else 'disabled'} successfully",
    }


@router.post("/{rule_id}/test")
def test_rule(payload: RuleTestRequest, rule: WorkflowRule = Depends(get_workflow_rule)):
    return dry_run_rule(rule, payload.payload)


@router.get("/{rule_id}/executions", response_model=list[WorkflowExecutionOut])
def list_rule_executions(
    limit: int = 50,
    rule: WorkflowRule = Depends(get_workflow_rule),
    db: Session = Depends(get_db),
):
    limit = max(1, min(limit, 200))
    return (
        db.query(WorkflowExecution)
        .filter(WorkflowExecution.rule_id == rule.id)
        .order_by(WorkflowExecution.executed_at.desc(), WorkflowExecution.id.desc())
        .limit(limit)
        .all()
    )
