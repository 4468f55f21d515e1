"""Pytest configuration and fixtures."""
import copy

import pytest

from ontology_compiler.ir.ontology import OntologyDocument


# Shape produced by the ontology editor (camelCase keys)
ORDER_ONTOLOGY = {
    "projectName": "Order Management",
    "objects": [
        {
            "id": "obj-order",
            "name": "Order",
            "description": "Customer purchase order",
            "properties": [{"name": "status", "type": "string"}],
            "actions": [
                {
                    "name": "Approve Order",
                    "type": "traditional",
                    "description": "Approve a pending order",
                    "businessLayer": {
                        "description": "Manager approves a pending order",
                        "targetObject": "Order",
                        "executorRole": "Sales Manager",
                        "triggerCondition": "Order total exceeds limit",
                    },
                    "logicLayer": {
                        "preconditions": ["Order status is pending"],
                        "parameters": [
                            {
                                "name": "order_id",
                                "type": "string",
                                "required": True,
                                "description": "Order identifier",
                            },
                            {
                                "name": "comment",
                                "type": "string",
                                "required": False,
                                "description": "Approval note",
                            },
                        ],
                        "postconditions": ["Order status becomes approved"],
                        "sideEffects": ["Notify customer"],
                    },
                    "implementationLayer": {
                        "apiEndpoint": "/api/orders/{id}/approve",
                        "apiMethod": "POST",
                        "requestPayload": {"order_id": "ORD-1", "priority": 2},
                    },
                    "governance": {
                        "permissionTier": 3,
                        "requiresHumanApproval": True,
                        "auditLog": True,
                        "riskLevel": "medium",
                    },
                },
                {
                    "name": "List Orders",
                    "description": "List orders",
                    "logicLayer": {
                        "parameters": [
                            {
                                "name": "status",
                                "type": "string",
                                "required": False,
                                "description": "Filter by status",
                            }
                        ]
                    },
                    "implementationLayer": {"apiEndpoint": "/api/orders", "apiMethod": "GET"},
                },
                {
                    "name": "Create Order",
                    "description": "Create an order",
                    "logicLayer": {
                        "parameters": [
                            {"name": "customer_id", "type": "string", "required": True, "description": "Customer"},
                            {"name": "amount", "type": "number", "required": True, "description": "Total"},
                            {"name": "due", "type": "date", "required": False, "description": "Due date"},
                        ]
                    },
                    "implementationLayer": {"apiEndpoint": "/api/orders", "apiMethod": "POST"},
                    "governance": {"permissionTier": 1},
                },
            ],
        },
        {
            "id": "obj-invoice",
            "name": "Invoice",
            "actions": [
                {
                    "name": "Send",
                    "description": "Send the invoice",
                    "governance": {"permissionTier": 2, "riskLevel": "low"},
                }
            ],
        },
        {"id": "obj-customer", "name": "Customer", "actions": []},
    ],
}


@pytest.fixture
def ontology_payload():
    return copy.deepcopy(ORDER_ONTOLOGY)


@pytest.fixture
def ontology(ontology_payload):
    return OntologyDocument.model_validate(ontology_payload)


@pytest.fixture
def order(ontology):
    return ontology.find_object("obj-order")


@pytest.fixture
def approve_order(order):
    return order.find_action("Approve Order")


@pytest.fixture
def make_document():
    """Build a document from (object name, [action dicts]) pairs."""

    def _make(*objects):
        return OntologyDocument.model_validate(
            {
                "objects": [
                    {"id": f"obj-{name.lower()}", "name": name, "actions": actions}
                    for name, actions in objects
                ]
            }
        )

    return _make
