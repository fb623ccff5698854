from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field

from studio.schemas.rule_action_catalog import ActionType
from studio.schemas.rule_condition_catalog import Operator, Trigger


class ConditionIn(BaseModel):
    field: str
    operator: Operator = "equals"
    value: Union[str, int, float, bool]


class ActionIn(BaseModel):
    type: ActionType
    params: Dict[str, Any] = Field(default_factory=dict)


class RuleCreate(BaseModel):
    name: str
    description: Optional[str] = None
    trigger: Trigger

    conditions: Dict[str, ConditionIn] = Field(default_factory=dict)
    actions: list[ActionIn] = Field(default_factory=list)

    is_enabled: int = Field(default=1, ge=0, le=1)
    priority: int = 0


class RuleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    trigger: Optional[Trigger] = None

    conditions: Optional[Dict[str, ConditionIn]] = None
    actions: Optional[list[ActionIn]] = None

    is_enabled: Optional[int] = Field(default=None, ge=0, le=1)
    priority: Optional[int] = None


class RuleOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    trigger: str

    conditions: Optional[Dict[str, Any]] = None
    actions: Optional[list[Dict[str, Any]]] = None

    is_enabled: int
    priority: int

    last_fired_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RuleTestRequest(BaseModel):
    payload: Dict[str, Any] = Field(default_factory=dict)
