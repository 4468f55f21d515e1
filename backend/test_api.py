"""HTTP surface"""

import json

import pytest
from fastapi.testclient import TestClient

from ontology_compiler import config
from ontology_compiler.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_compile_openapi_json(client, ontology_payload):
    response = client.post("/compile/openapi", json=ontology_payload)
    assert response.status_code == 200

    body = response.json()
    assert body["status"] == "success"
    assert body["format"] == "json"
    assert body["diagnostics"] == []

    spec = json.loads(body["content"])
    assert spec["info"]["title"] == "Order Management"
    assert list(spec["paths"]["/api/orders"]) == ["get", "post"]


def test_compile_openapi_yaml_for_one_action(client, ontology_payload):
    response = client.post("/compile/openapi", json={
        **ontology_payload,
        "scope": "action",
        "objectId": "obj-order",
        "actionName": "Approve Order",
        "format": "yaml",
    })
    assert response.status_code == 200
    assert "  title: Approve Order API" in response.json()["content"]


def test_compile_openapi_reports_collisions(client):
    payload = {
        "objects": [
            {"id": "obj-order", "name": "Order", "actions": [{"name": "Create"}]},
            {"id": "obj-invoice", "name": "Invoice", "actions": [{"name": "Create"}]},
        ]
    }
    body = client.post("/compile/openapi", json=payload).json()
    assert body["status"] == "warning"
    assert [d["kind"] for d in body["diagnostics"]] == ["operation_id", "schema"]
    assert body["diagnostics"][0]["previous_owner"] == "Order.Create"

    response = client.post("/compile/openapi", json={**payload, "collisionPolicy": "error"})
    assert response.status_code == 422

    body = client.post("/compile/openapi", json={**payload, "collisionPolicy": "suffix"}).json()
    assert body["status"] == "success"
    assert '"operationId": "create_2"' in body["content"]


def test_compile_openapi_rejects_misconfigured_policy(client, ontology_payload, monkeypatch):
    monkeypatch.setattr(config, "COLLISION_POLICY", "overwirte")

    response = client.post("/compile/openapi", json=ontology_payload)
    assert response.status_code == 422
    assert "overwirte" in response.json()["detail"]


def test_compile_openapi_missing_object(client, ontology_payload):
    response = client.post("/compile/openapi", json={
        **ontology_payload, "scope": "object", "objectId": "obj-missing",
    })
    assert response.status_code == 404


def test_compile_tools(client, ontology_payload):
    response = client.post("/compile/tools", json={**ontology_payload, "format": "mcp"})
    assert response.status_code == 200

    body = response.json()
    assert body["output"] == "json"
    tools = json.loads(body["content"])["tools"]
    assert tools[0]["name"] == "order_approve_order"
    assert "inputSchema" in tools[0]


def test_compile_tools_source_output(client, ontology_payload):
    body = client.post(
        "/compile/tools", json={**ontology_payload, "output": "typescript"}
    ).json()
    assert "export { client, tools, handleToolCall };" in body["content"]

    response = client.post(
        "/compile/tools", json={**ontology_payload, "format": "claude", "output": "python"}
    )
    assert response.status_code == 400


def test_compile_tools_missing_action(client, ontology_payload):
    response = client.post("/compile/tools", json={
        **ontology_payload,
        "scope": "action",
        "objectId": "obj-order",
        "actionName": "Cancel",
    })
    assert response.status_code == 404


def test_validate(client, ontology_payload):
    ontology_payload["objects"][0]["actions"].append({"name": ""})
    body = client.post("/validate", json=ontology_payload).json()

    assert body["is_valid"] is False
    assert body["error_count"] == 1
    assert body["issues"][0]["code"] == "EMPTY_ACTION_NAME"
