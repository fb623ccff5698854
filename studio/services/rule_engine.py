"""Workflow rule evaluation.

Selects the enabled rules for a trigger, matches each rule's conditions
against the event payload and returns the actions of every matching rule in
dispatch order. Nothing here writes to the database: executing the actions
and recording ``last_fired_at`` is left to ``action_executor``.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import asc
from sqlalchemy.orm import Session

from studio.models.workflow_rule import WorkflowRule
from studio.schemas.rule_condition_catalog import OPERATORS, TRIGGERS


logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class MatchedAction:
    rule_id: int | None
    rule_name: str
    priority: int
    index: int
    type: Any
    params: dict


@dataclass
class RuleMatch:
    rule: Any
    actions: list[MatchedAction] = field(default_factory=list)


def _get_by_path(payload, path):
    if not isinstance(payload, dict) or not isinstance(path, str) or not path:
        return _MISSING

    if path in payload:
        value = payload[path]
    else:
        current = payload
        for part in path.split("."):
            if not isinstance(current, dict) or part not in current:
                return _MISSING
            current = current[part]
        value = current

    if value is None:
        return _MISSING
    return value


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_number(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        # int and float compare exactly; float() would overflow on huge ints
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if isinstance(number, float) and math.isnan(number):
        return None
    return number


def _values_equal(actual, expected) -> bool:
    if _is_number(actual) and _is_number(expected):
        return actual == expected
    if isinstance(actual, bool) and isinstance(expected, bool):
        return actual == expected
    if isinstance(actual, str) and isinstance(expected, str):
        return actual == expected
    if type(actual) is type(expected):
        return actual == expected
    return False


def _contains(actual, expected) -> bool:
    if expected is None:
        return False
    if isinstance(actual, str):
        if isinstance(expected, (dict, list, tuple)):
            return False
        return str(expected) in actual
    if isinstance(actual, (list, tuple)):
        return any(_values_equal(item, expected) for item in actual)
    return False


def condition_matches(condition, payload) -> bool:
    """Return whether a single ``{field, operator, value}`` condition holds for ``payload``."""
    if not isinstance(condition, dict):
        logger.warning("skipping malformed condition", extra={"condition": repr(condition)})
        return False

    operator = condition.get("operator") or "equals"
    if operator not in OPERATORS:
        logger.warning("unknown condition operator", extra={"operator": operator, "field": condition.get("field")})
        return False

    actual = _get_by_path(payload, condition.get("field"))
    if actual is _MISSING:
        return False

    expected = condition.get("value")

    if isinstance(actual, (list, tuple)) and operator in ("equals", "not_equals"):
        # list payloads (has_tags): equals means "has this item"
        found = _contains(actual, expected)
        return found if operator == "equals" else not found

    if operator == "equals":
        return _values_equal(actual, expected)
    if operator == "not_equals":
        return not _values_equal(actual, expected)
    if operator == "contains":
        return _contains(actual, expected)

    a = _as_number(actual)
    b = _as_number(expected)
    if a is None or b is None:
        return False
    if operator == "greater_than":
        return a > b
    return a < b


def _condition_items(conditions):
    if conditions is None:
        return []
    if isinstance(conditions, dict):
        return list(conditions.items())
    if isinstance(conditions, list):
        return [(str(i), c) for i, c in enumerate(conditions)]
    return None


def rule_matches(rule, payload) -> bool:
    items = _condition_items(rule.conditions)
    if items is None:
        logger.warning("rule has malformed conditions", extra={"rule_id": rule.id})
        return False
    return all(condition_matches(condition, payload) for _, condition in items)


def explain_conditions(rule, payload) -> list[dict]:
    items = _condition_items(rule.conditions) or []
    explained = []
    for key, condition in items:
        c = condition if isinstance(condition, dict) else {}
        explained.append(
            {
                "key": key,
                "field": c.get("field"),
                "operator": c.get("operator") or "equals",
                "value": c.get("value"),
                "satisfied": condition_matches(condition, payload),
            }
        )
    return explained


def _is_enabled(rule) -> bool:
    return bool(rule.is_enabled)


def _rule_sort_key(rule):
    priority = rule.priority if rule.priority is not None else 0
    return (priority, rule.name or "", rule.id or 0)


def select_rules(rules, trigger: str) -> list:
    if trigger not in TRIGGERS:
        return []
    selected = [r for r in rules if r.trigger == trigger and _is_enabled(r)]
    return sorted(selected, key=_rule_sort_key)


def rule_actions(rule) -> list[MatchedAction]:
    actions = rule.actions
    if actions is None:
        return []
    if not isinstance(actions, list):
        logger.warning("rule has malformed actions", extra={"rule_id": rule.id})
        return []

    priority = rule.priority if rule.priority is not None else 0
    matched = []
    for index, action in enumerate(actions):
        if not isinstance(action, dict):
            logger.warning("skipping malformed action", extra={"rule_id": rule.id, "index": index})
            continue
        params = action.get("params")
        matched.append(
            MatchedAction(
                rule_id=rule.id,
                rule_name=rule.name,
                priority=priority,
                index=index,
                type=action.get("type"),
                params=dict(params) if isinstance(params, dict) else {},
            )
        )
    return matched


def match_rules(trigger: str, payload, rules) -> list[RuleMatch]:
    """Return the enabled rules for ``trigger`` whose conditions all hold, in dispatch order."""
    if not isinstance(payload, dict):
        payload = {}
    return [
        RuleMatch(rule=rule, actions=rule_actions(rule))
        for rule in select_rules(rules, trigger)
        if rule_matches(rule, payload)
    ]


def evaluate(trigger: str, payload, rules) -> list[MatchedAction]:
    """Flatten the actions of every matching rule.

    Rules run in ``priority`` then ``name`` order; within a rule, actions keep
    their array order. Each entry carries the id and name of its rule.
    """
    return [action for match in match_rules(trigger, payload, rules) for action in match.actions]


def load_enabled_rules(db: Session, trigger: str) -> list[WorkflowRule]:
    if trigger not in TRIGGERS:
        return []
    return (
        db.query(WorkflowRule)
        .filter(
            WorkflowRule.trigger == trigger,
            WorkflowRule.is_enabled == 1,
        )
        .order_by(asc(WorkflowRule.priority), asc(WorkflowRule.name), asc(WorkflowRule.id))
        .all()
    )


def match_rules_for_trigger(db: Session, trigger: str, payload) -> list[RuleMatch]:
    return match_rules(trigger, payload, load_enabled_rules(db, trigger))


def evaluate_for_trigger(db: Session, trigger: str, payload) -> list[MatchedAction]:
    return evaluate(trigger, payload, load_enabled_rules(db, trigger))
