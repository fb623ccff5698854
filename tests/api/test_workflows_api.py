"""HTTP tests for workflow rule management (/workflows)."""

import uuid
from datetime import datetime, timedelta

from studio.models.workflow_execution import WorkflowExecution

PNG_ONLY = {"c1": {"field": "mime_type", "operator": "equals", "value": "image/png"}}
FLAG = [{"type": "flag_media", "params": {"flag": "png"}}]


def test_create_rule_returns_stored_rule(create_rule) -> None:
    rule = create_rule(name="  Flag PNG  ", conditions=PNG_ONLY, actions=FLAG, priority=3)

    assert isinstance(rule["id"], int)
    assert rule["name"] == "Flag PNG"
    assert rule["trigger"] == "on_upload"
    assert rule["conditions"] == PNG_ONLY
    assert rule["actions"] == FLAG
    assert rule["is_enabled"] == 1
    assert rule["priority"] == 3
    assert rule["last_fired_at"] is None


def test_create_rule_defaults_operator_to_equals(create_rule) -> None:
    rule = create_rule(conditions={"c1": {"field": "mime_type", "value": "image/png"}})
    assert rule["conditions"]["c1"]["operator"] == "equals"


def test_create_rule_rejects_blank_name(client) -> None:
    response = client.post("/workflows", json={"name": "   ", "trigger": "on_upload"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Rule name is required"


def test_create_rule_rejects_field_outside_trigger_vocabulary(client) -> None:
    response = client.post(
        "/workflows",
        json={
            "name": "wrong field",
            "trigger": "on_upload",
            "conditions": {"c1": {"field": "detected_type", "operator": "equals", "value": "tattoo"}},
        },
    )
    assert response.status_code == 400
    assert "detected_type" in response.json()["detail"]


def test_create_rule_rejects_unknown_trigger_operator_and_action(client) -> None:
    bad_trigger = client.post("/workflows", json={"name": "x", "trigger": "on_delete"})
    bad_operator = client.post(
        "/workflows",
        json={
            "name": "x",
            "trigger": "on_upload",
            "conditions": {"c1": {"field": "size", "operator": "between", "value": 1}},
        },
    )
    bad_action = client.post(
        "/workflows",
        json={"name": "x", "trigger": "on_upload", "actions": [{"type": "delete_media", "params": {}}]},
    )

    assert bad_trigger.status_code == 422
    assert bad_operator.status_code == 422
    assert bad_action.status_code == 422


def test_get_unknown_rule_returns_404(client) -> None:
    response = client.get("/workflows/999")
    assert response.status_code == 404
    assert response.json()["detail"] == "Workflow rule not found"


def test_list_rules_orders_by_priority_then_name(client, create_rule) -> None:
    create_rule(name="b", priority=2)
    create_rule(name="a", priority=2)
    create_rule(name="z", priority=1, is_enabled=0)
    create_rule(name="publish", trigger="on_publish", priority=0)

    names = [r["name"] for r in client.get("/workflows").json()]
    assert names == ["publish", "z", "a", "b"]

    enabled = [r["name"] for r in client.get("/workflows", params={"enabled_only": True}).json()]
    assert enabled == ["publish", "a", "b"]

    uploads = [r["name"] for r in client.get("/workflows", params={"trigger": "on_upload"}).json()]
    assert uploads == ["z", "a", "b"]


def test_patch_updates_only_given_fields(client, create_rule) -> None:
    rule = create_rule(conditions=PNG_ONLY, actions=FLAG)

    response = client.patch(f"/workflows/{rule['id']}", json={"priority": 7, "description": "png only"})

    assert response.status_code == 200
    body = response.json()
    assert body["priority"] == 7
    assert body["description"] == "png only"
    assert body["conditions"] == PNG_ONLY
    assert body["actions"] == FLAG


def test_patch_trigger_revalidates_existing_conditions(client, create_rule) -> None:
    rule = create_rule(conditions=PNG_ONLY)

    response = client.patch(f"/workflows/{rule['id']}", json={"trigger": "on_publish"})
    assert response.status_code == 400

    response = client.patch(
        f"/workflows/{rule['id']}",
        json={
            "trigger": "on_publish",
            "conditions": {"c1": {"field": "entity_type", "operator": "equals", "value": "tattoo"}},
        },
    )
    assert response.status_code == 200
    assert response.json()["trigger"] == "on_publish"


def test_patch_rejects_null_for_required_fields(client, create_rule) -> None:
    rule = create_rule()
    response = client.patch(f"/workflows/{rule['id']}", json={"name": None})
    assert response.status_code == 400


def test_toggle_flips_enabled_flag(client, create_rule) -> None:
    rule = create_rule()

    first = client.post(f"/workflows/{rule['id']}/toggle").json()
    assert first["rule"]["is_enabled"] == 0
    assert first["message"] == "Workflow rule disabled successfully"

    second = client.post(f"/workflows/{rule['id']}/toggle").json()
    assert second["rule"]["is_enabled"] == 1
    assert second["message"] == "Workflow rule enabled successfully"


def test_dry_run_reports_match_without_side_effects(client, create_rule) -> None:
    rule = create_rule(
        conditions={
            "png": PNG_ONLY["c1"],
            "big": {"field": "size", "operator": "greater_than", "value": 5},
        },
        actions=[*FLAG, {"type": "apply_tags", "params": {}}],
        is_enabled=0,
    )

    response = client.post(f"/workflows/{rule['id']}/test", json={"payload": {"mime_type": "image/png", "size": 2}})

    assert response.status_code == 200
    body = response.json()
    assert body["matched"] is False
    assert {c["key"]: c["satisfied"] for c in body["conditions"]} == {"png": True, "big": False}
    assert [a["valid"] for a in body["actions"]] == [True, False]
    assert body["errors"][0]["index"] == 1

    assert client.get(f"/workflows/{rule['id']}/executions").json() == []
    assert client.get(f"/workflows/{rule['id']}").json()["last_fired_at"] is None


def test_delete_rule_keeps_execution_history(client, create_rule) -> None:
    rule = create_rule(actions=[{"type": "notify_admin", "params": {"message": "upload"}}])
    fired = client.post("/events", json={"trigger": "on_upload", "payload": {}}).json()
    assert [e["rule_id"] for e in fired] == [rule["id"]]

    response = client.delete(f"/workflows/{rule['id']}")
    assert response.status_code == 200
    assert response.json() == {"deleted": True}
    assert client.get(f"/workflows/{rule['id']}").status_code == 404

    history = client.get("/workflows/executions").json()
    assert len(history) == 1
    assert history[0]["rule_id"] is None
    assert history[0]["result"] == "SUCCESS"


def test_rule_executions_are_scoped_to_rule(client, create_rule) -> None:
    first = create_rule(name="first", actions=[{"type": "notify_admin", "params": {"message": "1"}}])
    create_rule(name="second", actions=[{"type": "notify_admin", "params": {"message": "2"}}])

    client.post("/events", json={"trigger": "on_upload", "payload": {}})

    executions = client.get(f"/workflows/{first['id']}/executions").json()
    assert [e["rule_id"] for e in executions] == [first["id"]]
    assert len(client.get("/workflows/executions", params={"trigger": "on_upload"}).json()) == 2
    assert client.get("/workflows/executions", params={"trigger": "on_publish"}).json() == []


def test_execution_history_order_is_stable_for_equal_timestamps(client, create_rule, session_factory) -> None:
    rule = create_rule()
    stamp = datetime(2026, 1, 1, 12, 0, 0)
    ids = [uuid.UUID(int=n) for n in (1, 3, 2)]

    db = session_factory()
    for execution_id in ids:
        db.add(
            WorkflowExecution(
                id=execution_id,
                rule_id=rule["id"],
                trigger="on_upload",
                result="SUCCESS",
                details={},
                executed_at=stamp,
            )
        )
    db.add(
        WorkflowExecution(
            id=uuid.UUID(int=0),
            rule_id=rule["id"],
            trigger="on_upload",
            result="SUCCESS",
            details={},
            executed_at=stamp + timedelta(seconds=1),
        )
    )
    db.commit()
    db.close()

    expected = [str(uuid.UUID(int=n)) for n in (0, 3, 2, 1)]
    assert [e["id"] for e in client.get(f"/workflows/{rule['id']}/executions").json()] == expected
    assert [e["id"] for e in client.get("/workflows/executions").json()] == expected


def test_executions_carry_sub_second_timestamps(client, create_rule) -> None:
    create_rule(name="first", actions=[{"type": "notify_admin", "params": {"message": "1"}}])
    create_rule(name="second", actions=[{"type": "notify_admin", "params": {"message": "2"}}])

    fired = client.post("/events", json={"trigger": "on_upload", "payload": {}}).json()

    stamps = [datetime.fromisoformat(e["executed_at"]) for e in fired]
    assert stamps[0] < stamps[1]
    history = client.get("/workflows/executions").json()
    assert [e["id"] for e in history] == [e["id"] for e in reversed(fired)]
