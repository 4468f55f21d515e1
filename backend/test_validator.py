"""Ontology validator"""

import pytest

from ontology_compiler.ir.errors import OntologyValidationError
from ontology_compiler.ir.ontology import OntologyDocument
from ontology_compiler.validation import (
    ValidationSeverity,
    raise_on_errors,
    validate_ontology,
)


def test_clean_document_only_reports_governance_loss(ontology):
    result = validate_ontology(ontology)

    assert result.is_valid
    assert result.error_count == 0
    assert result.warning_count == 0
    # three governed actions, three dialects without a governance slot
    assert result.codes() == ["GOVERNANCE_DROPPED"] * 9
    assert result.stats == {"objects": 3, "objects_with_actions": 2, "actions": 4}
    assert result.get_summary() == "Valid | Errors: 0, Warnings: 0, Info: 9"


def test_empty_names_are_errors():
    document = OntologyDocument.model_validate({
        "objects": [
            {"id": "obj-blank", "name": "  "},
            {"id": "obj-order", "name": "Order", "actions": [{"name": ""}]},
        ]
    })
    result = validate_ontology(document)

    assert not result.is_valid
    assert result.codes() == ["EMPTY_OBJECT_NAME", "EMPTY_ACTION_NAME"]
    assert all(i.severity is ValidationSeverity.ERROR for i in result.issues)

    with pytest.raises(OntologyValidationError, match="EMPTY_ACTION_NAME"):
        raise_on_errors(document)


def test_identifier_collisions_are_warnings(make_document):
    document = make_document(("Order", [{"name": "Create"}]), ("Invoice", [{"name": "Create"}]))
    result = validate_ontology(document)

    assert result.is_valid
    assert result.codes() == ["OPERATION_ID_COLLISION", "SCHEMA_COLLISION"]
    assert "Order.Create, Invoice.Create" in result.issues[0].message

    assert not validate_ontology(document, strict=True).is_valid


def test_path_method_collision(make_document):
    endpoint = {"apiEndpoint": "/api/orders", "apiMethod": "post"}
    document = make_document((
        "Order",
        [
            {"name": "Approve", "implementationLayer": endpoint},
            {"name": "Create", "implementationLayer": endpoint},
        ],
    ))
    result = validate_ontology(document)
    assert result.codes() == ["PATH_METHOD_COLLISION"]
    assert "'POST /api/orders'" in result.issues[0].message


def test_permission_tier_and_parameter_kind(make_document):
    document = make_document((
        "Order",
        [{
            "name": "Refund",
            "logicLayer": {"parameters": [{"name": "amount", "type": "currency"}]},
            "governance": {"permissionTier": 7},
        }],
    ))
    result = validate_ontology(document)
    codes = result.codes()

    assert "INVALID_PERMISSION_TIER" in codes
    assert "UNKNOWN_PARAMETER_TYPE" in codes
    assert codes.count("GOVERNANCE_DROPPED") == 3


def test_result_to_dict(make_document):
    document = make_document(("Order", [{"name": ""}]))
    payload = validate_ontology(document).to_dict()

    assert payload["is_valid"] is False
    assert payload["error_count"] == 1
    assert payload["issues"][0]["code"] == "EMPTY_ACTION_NAME"
    assert payload["issues"][0]["object"] == "Order"
